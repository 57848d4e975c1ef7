"""Composition root for ``unified_config``.

Purpose
-------
Provide the single entry point, :class:`ConfigManager`, that hides which file
format backs a configuration file. The module wires the concrete adapters
into the default :class:`~unified_config.application.registry.AdapterRegistry`
and exports only stable, consumer-ready APIs.

Contents
--------
* :func:`default_registry` – builds the registry with the built-in adapters in
  probe order XML, INI, JSON, TOML, YAML.
* :data:`DEFAULT_REGISTRY` – shared instance used when callers pass none.
* :class:`ConfigManager` – the facade.

System Role
-----------
The facade chooses an adapter once, at construction, then forwards every
path-based call verbatim. It never interprets a path: query dialects belong to
the adapters.
"""

from __future__ import annotations

import os
from pathlib import Path

from .adapters.file_adapters import structured as _structured
from .adapters.file_adapters import (
    INIConfigAdapter,
    JSONConfigAdapter,
    TOMLConfigAdapter,
    XMLConfigAdapter,
    YAMLConfigAdapter,
)
from .application.ports import ConfigAdapter
from .application.registry import AdapterRegistry
from .domain.errors import ConfigError, InvalidFormat, InvalidPath, NotFound, UnsupportedFormat, ValidationError
from .observability import log_error, log_info, make_event


def default_registry() -> AdapterRegistry:
    """Return a fresh registry holding the built-in adapters.

    Examples
    --------
    >>> [factory.format_name for factory in default_registry()][:4]
    ['xml', 'ini', 'json', 'toml']
    """

    registry = AdapterRegistry()
    registry.register(XMLConfigAdapter, ".xml")
    registry.register(INIConfigAdapter, ".ini")
    registry.register(JSONConfigAdapter, ".json")
    registry.register(TOMLConfigAdapter, ".toml")
    if _structured.yaml is not None:
        registry.register(YAMLConfigAdapter, ".yaml", ".yml")
    return registry


DEFAULT_REGISTRY = default_registry()


class ConfigManager:
    """Format-agnostic facade over one configuration file.

    Why
    ----
    Callers address configuration values by path without caring whether the
    file is XML, INI, JSON, TOML or YAML.

    What
    ----
    Accepts either a file path, dispatched by extension and falling back to
    type inference, or an already-built adapter. Index access, :meth:`get`
    and :meth:`set` take the adapter's query dialect; :meth:`get_value` and
    :meth:`set_value` take a plain key sequence.

    Parameters
    ----------
    source:
        Path of the configuration file, or an object satisfying
        :class:`~unified_config.application.ports.ConfigAdapter`.
    registry:
        Adapter registry consulted for file paths; defaults to
        :data:`DEFAULT_REGISTRY`.

    Raises
    ------
    UnsupportedFormat
        Unknown extension and no registered adapter could parse the file.
    InvalidFormat
        The extension names a format but the content is malformed.
    NotFound
        The file does not exist.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "config.json"
    >>> _ = target.write_text('{"config": {"master": "true"}}', encoding="utf-8")
    >>> manager = ConfigManager(str(target))
    >>> manager.get_value("config", "master")
    'true'
    >>> manager.set_value("false", "config", "master")
    True
    >>> manager["/config/master"]
    'false'
    >>> tmp.cleanup()
    """

    def __init__(self, source: str | os.PathLike[str] | ConfigAdapter, *, registry: AdapterRegistry | None = None) -> None:
        if isinstance(source, (str, os.PathLike)):
            self._adapter = _select_adapter(os.fspath(source), registry if registry is not None else DEFAULT_REGISTRY)
        elif isinstance(source, ConfigAdapter):
            self._adapter = source
        else:
            raise TypeError(f"Expected a file path or a ConfigAdapter, got {type(source).__name__}")

    def __repr__(self) -> str:
        return f"ConfigManager({self._adapter!r})"

    @property
    def adapter(self) -> ConfigAdapter:
        """The adapter that owns the parsed document."""

        return self._adapter

    @property
    def source_path(self) -> str:
        return self._adapter.source_path

    @property
    def format_name(self) -> str:
        return self._adapter.format_name

    def __getitem__(self, query: str) -> str | None:
        """Return the value at *query*, or ``None`` when it does not exist."""

        return self._adapter.get(query)

    def __setitem__(self, query: str, value: str) -> None:
        """Assign *value* at *query*; raise :class:`InvalidPath` when impossible."""

        if not self._adapter.set(query, value):
            raise InvalidPath(f"Cannot set {query!r} in {self._adapter.source_path}")

    def get(self, query: str) -> str | None:
        return self._adapter.get(query)

    def set(self, query: str, value: str) -> bool:
        return self._adapter.set(query, value)

    def get_value(self, *keys: str) -> str | None:
        """Return the value at the key sequence, e.g. ``get_value("config", "master")``."""

        return self._adapter.get_value(*keys)

    def set_value(self, value: str, *keys: str) -> bool:
        """Set the value at the key sequence, e.g. ``set_value("true", "config", "master")``."""

        return self._adapter.set_value(value, *keys)

    def save(self, file_path: str | os.PathLike[str] | None = None) -> None:
        """Write the document to *file_path*, defaulting to the source file."""

        self._adapter.save(os.fspath(file_path) if file_path is not None else None)


def _select_adapter(path: str, registry: AdapterRegistry) -> ConfigAdapter:
    """Pick the adapter for *path*: extension first, type inference second."""

    factory = registry.for_suffix(path)
    if factory is not None:
        adapter = factory(path)
        log_info("adapter_selected", **make_event(adapter.format_name, path, {"strategy": "extension"}))
        return adapter
    outcome = registry.infer(path)
    if outcome.adapter is None:
        log_error("unsupported_format", **make_event(outcome.format_name, path, {"reason": outcome.reason}))
        raise UnsupportedFormat(f"Unexpected file type: {path}")
    log_info("adapter_selected", **make_event(outcome.format_name, path, {"strategy": "inference"}))
    return outcome.adapter


__all__ = [
    "ConfigManager",
    "ConfigAdapter",
    "AdapterRegistry",
    "DEFAULT_REGISTRY",
    "default_registry",
    "ConfigError",
    "InvalidFormat",
    "InvalidPath",
    "NotFound",
    "UnsupportedFormat",
    "ValidationError",
]
