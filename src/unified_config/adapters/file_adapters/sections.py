"""Key-section adapter backed by :mod:`configparser`.

Purpose
-------
Expose INI files through the adapter contract. Both addressing modes resolve
to exactly two levels: section, then key. Query strings are the same two
segments joined by ``/`` (``"general/interval"``).

System Role
-----------
Second in the default probe order. ``configparser`` rejects anything without a
section header, so JSON, YAML and XML content fall through to other adapters.
"""

from __future__ import annotations

import configparser
import io
from pathlib import Path

from ...domain.errors import InvalidFormat
from ...domain.paths import normalize_keys, split_query
from ...observability import log_debug, log_error
from .base import BaseFileAdapter

_FORBIDDEN_SECTION_CHARS = frozenset("[]\r\n")
_FORBIDDEN_OPTION_CHARS = frozenset("=:[\r\n")
# ConfigParser's default comment_prefixes; such option lines are read back as comments
_COMMENT_PREFIXES = ("#", ";")


def _new_parser() -> configparser.ConfigParser:
    """Return a parser with interpolation disabled and key case preserved."""

    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


class INIConfigAdapter(BaseFileAdapter):
    """Read and write INI configuration by section and key.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "config.ini"
    >>> _ = target.write_text("[config]\\nmaster = true\\n", encoding="utf-8")
    >>> adapter = INIConfigAdapter(str(target))
    >>> adapter.get_value("config", "master")
    'true'
    >>> adapter.set("/network/timeout", "30")
    True
    >>> adapter.get("network/timeout")
    '30'
    >>> tmp.cleanup()
    """

    format_name = "ini"

    def __init__(self, file_path: str | Path) -> None:
        super().__init__(file_path)
        self._parser = self.load(self.source_path)

    def load(self, path: str) -> configparser.ConfigParser:
        """Parse *path* or raise :class:`InvalidFormat` on any grammar error."""

        text = self._decode(self._read(path), path)
        parser = _new_parser()
        try:
            parser.read_string(text, source=path)
        except configparser.Error as exc:
            log_error("config_file_invalid", adapter=self.format_name, path=path, error=str(exc))
            raise InvalidFormat(f"Invalid INI in {path}: {exc}") from exc
        log_debug("config_file_loaded", adapter=self.format_name, path=path, sections=len(parser.sections()))
        return parser

    def get(self, query: str) -> str | None:
        return self.get_value(*split_query(query))

    def set(self, query: str, value: str) -> bool:
        return self.set_value(value, *split_query(query))

    def get_value(self, *keys: str) -> str | None:
        """Return ``section``/``key`` or ``None``; other depths are never present."""

        keys = normalize_keys(keys)
        if len(keys) != 2:
            return None
        section, option = keys
        if section == self._parser.default_section:
            return self._parser.defaults().get(option)
        if not self._parser.has_section(section):
            return None
        return self._parser.get(section, option, fallback=None)

    def set_value(self, value: str, *keys: str) -> bool:
        """Write ``section``/``key``, adding the section when it is missing."""

        keys = normalize_keys(keys)
        if len(keys) != 2:
            return False
        section, option = keys
        if (
            not _valid(section, _FORBIDDEN_SECTION_CHARS)
            or not _valid(option, _FORBIDDEN_OPTION_CHARS)
            or option.startswith(_COMMENT_PREFIXES)
        ):
            log_debug("config_value_rejected", adapter=self.format_name, keys=list(keys))
            return False
        if section != self._parser.default_section and not self._parser.has_section(section):
            self._parser.add_section(section)
        self._parser.set(section, option, value)
        log_debug("config_value_set", adapter=self.format_name, path=self.source_path, keys=list(keys))
        return True

    def save(self, file_path: str | Path | None = None) -> None:
        """Serialise sections in their original order using ``ConfigParser.write``."""

        buffer = io.StringIO()
        self._parser.write(buffer)
        self._write(self._resolve_target(file_path), buffer.getvalue())


def _valid(name: str, forbidden: frozenset[str]) -> bool:
    return bool(name) and name == name.strip() and not forbidden.intersection(name)
