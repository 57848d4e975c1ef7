"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the format adapters, the adapter
registry, and the :class:`~unified_config.core.ConfigManager` facade. The
hierarchy lives in the domain layer so adapters and the facade can depend on
it without depending on each other.

Contents
--------
* :class:`ConfigError` – umbrella base class for all configuration-related
  issues.
* :class:`UnsupportedFormat` – no registered adapter understood the file.
* :class:`InvalidFormat` – a file matched a format but its content is
  malformed.
* :class:`NotFound` – the configuration file does not exist.
* :class:`InvalidPath` – a path expression cannot be created in a document.
* :class:`ValidationError` – reserved for semantic validation failures.

System Role
-----------
Construction-time problems (``UnsupportedFormat``, ``InvalidFormat``,
``NotFound``) abort facade creation. Per-call lookups never raise: absent
values come back as ``None`` and failed writes as ``False``. ``InvalidPath`` is
only raised by item assignment, which has no return value to report failure.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``unified_config``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class UnsupportedFormat(ConfigError):
    """Raised when no adapter can be produced for a configuration file.

    Why
    ----
    The extension was not recognised and type inference probed every
    registered adapter without success. Unrecoverable for that file.
    """


class InvalidFormat(ConfigError):
    """Raised when an input file cannot be parsed into a configuration document.

    Why
    ----
    Distinguish malformed content from missing files. Type inference treats
    this, and only this, as "not this format".

    Typical Sources
    ---------------
    :mod:`lxml.etree`, :mod:`configparser`, :mod:`json`, :mod:`tomllib` and
    :mod:`yaml` parse failures, plus structured documents whose top level is
    not a mapping.
    """


class NotFound(ConfigError):
    """Represents a missing configuration file (or a missing optional parser)."""


class InvalidPath(ConfigError, KeyError):
    """Signals that a path expression cannot be created in the document.

    Why
    ----
    ``manager[path] = value`` has no return value, so a structurally invalid
    path must surface as an exception there. Subclasses :class:`KeyError` so
    item-assignment callers can use the usual idiom.
    """

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ValidationError(ConfigError):
    """Signifies that a syntactically valid configuration failed semantic checks.

    Current Usage
    -------------
    Not raised; schema validation is outside the library's scope and the type
    is kept so consumers can build on the hierarchy.
    """
