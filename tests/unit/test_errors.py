from __future__ import annotations

import pytest

from unified_config.domain.errors import (
    ConfigError,
    InvalidFormat,
    InvalidPath,
    NotFound,
    UnsupportedFormat,
    ValidationError,
)


def test_error_hierarchy() -> None:
    for error_type in (InvalidFormat, InvalidPath, NotFound, UnsupportedFormat, ValidationError):
        assert issubclass(error_type, ConfigError)
        assert isinstance(error_type("boom"), ConfigError)


def test_invalid_path_is_a_key_error_with_plain_message() -> None:
    with pytest.raises(KeyError) as excinfo:
        raise InvalidPath("Cannot set '/x' in demo.xml")
    assert str(excinfo.value) == "Cannot set '/x' in demo.xml"
