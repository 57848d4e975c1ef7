"""Structured-document adapters (JSON, TOML, YAML).

Purpose
-------
Expose nested-mapping formats through the adapter contract. All three parse
into plain ``dict``/``list`` trees, so path resolution lives once in
:class:`StructuredDocumentAdapter`; the subclasses are small wrappers around
``json``, ``tomllib``/``tomli_w`` and ``yaml.safe_load``/``yaml.safe_dump``.

Contents
--------
* :class:`StructuredDocumentAdapter` – key-sequence walk, value rendering and
  the shared save routine.
* :class:`JSONConfigAdapter` – JSON via the standard library.
* :class:`TOMLConfigAdapter` – TOML read with ``tomllib`` (``tomli`` before
  3.11) and written with ``tomli_w``.
* :class:`YAMLConfigAdapter` – YAML, only available when PyYAML is installed.

Path Semantics
--------------
Each key descends one level: object field → sub-field. A decimal segment
indexes into a list (``("servers", "0", "host")``). Query strings are the same
segments joined by ``/``. Values written through ``set`` are stored as strings.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

import tomli_w

from ...domain.errors import InvalidFormat, NotFound
from ...domain.paths import normalize_keys, split_query
from ...observability import log_debug, log_error
from .base import BaseFileAdapter

try:
    import yaml  # type: ignore[import-untyped]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    yaml = None  # type: ignore[assignment]

_MISSING = object()


class StructuredDocumentAdapter(BaseFileAdapter):
    """Path resolution shared by the nested-mapping formats."""

    def __init__(self, file_path: str | Path) -> None:
        super().__init__(file_path)
        self._data: dict[str, Any] = self.load(self.source_path)

    def load(self, path: str) -> dict[str, Any]:  # pragma: no cover - overridden
        raise NotImplementedError

    def dumps(self) -> str:  # pragma: no cover - overridden
        """Serialise the in-memory document in the adapter's own format."""

        raise NotImplementedError

    def get(self, query: str) -> str | None:
        return self.get_value(*split_query(query))

    def set(self, query: str, value: str) -> bool:
        return self.set_value(value, *split_query(query))

    def get_value(self, *keys: str) -> str | None:
        """Walk *keys* through mappings and lists; ``None`` when any level is missing.

        Examples
        --------
        >>> adapter = object.__new__(JSONConfigAdapter)
        >>> adapter._data = {"config": {"master": True, "ports": [80, 443]}}
        >>> adapter.get_value("config", "master")
        'true'
        >>> adapter.get_value("config", "ports", "1")
        '443'
        >>> adapter.get_value("config", "ports")
        '[80,443]'
        >>> adapter.get_value("config", "missing") is None
        True
        """

        keys = normalize_keys(keys)
        if not keys:
            return None
        current: Any = self._data
        for key in keys:
            current = _child(current, key)
            if current is _MISSING:
                return None
        return _render(current)

    def set_value(self, value: str, *keys: str) -> bool:
        """Store *value* at *keys*, creating missing objects along the way.

        Returns ``False`` when a scalar sits where an object is needed or a
        list index is not an existing position. Such failures are detected
        before anything is created.
        """

        keys = normalize_keys(keys)
        if not keys:
            return False
        current: Any = self._data
        for key in keys[:-1]:
            child = _child(current, key)
            if child is _MISSING:
                if not isinstance(current, MutableMapping):
                    return False
                child = current[key] = {}
            current = child
        last = keys[-1]
        if isinstance(current, MutableMapping):
            current[last] = value
        elif isinstance(current, list) and _index(last, current) is not None:
            current[_index(last, current)] = value
        else:
            log_debug("config_value_rejected", adapter=self.format_name, keys=list(keys))
            return False
        log_debug("config_value_set", adapter=self.format_name, path=self.source_path, keys=list(keys))
        return True

    def save(self, file_path: str | Path | None = None) -> None:
        self._write(self._resolve_target(file_path), self.dumps())

    def _loaded(self, data: object, *, path: str) -> dict[str, Any]:
        result = self._ensure_mapping(data, path=path)
        log_debug("config_file_loaded", adapter=self.format_name, path=path, keys=len(result))
        return result

    def _invalid(self, path: str, exc: Exception) -> InvalidFormat:
        log_error("config_file_invalid", adapter=self.format_name, path=path, error=str(exc))
        return InvalidFormat(f"Invalid {self.format_name.upper()} in {path}: {exc}")

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> dict[str, Any]:
        """Ensure *data* is a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> StructuredDocumentAdapter._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> StructuredDocumentAdapter._ensure_mapping(42, path="demo")
        Traceback (most recent call last):
        ...
        unified_config.domain.errors.InvalidFormat: File demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        return data  # type: ignore[return-value]


class JSONConfigAdapter(StructuredDocumentAdapter):
    """Load and save JSON documents."""

    format_name = "json"

    def load(self, path: str) -> dict[str, Any]:
        """Return the mapping parsed from the JSON file at *path*."""

        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
            raise self._invalid(path, exc) from exc
        return self._loaded(data, path=path)

    def dumps(self) -> str:
        return json.dumps(self._data, indent=2, ensure_ascii=False) + "\n"


class TOMLConfigAdapter(StructuredDocumentAdapter):
    """Load TOML with the standard library parser, save with ``tomli_w``."""

    format_name = "toml"

    def load(self, path: str) -> dict[str, Any]:
        try:
            text = self._decode(self._read(path), path)
            data = tomllib.loads(text)
        except (tomllib.TOMLDecodeError, RecursionError) as exc:
            raise self._invalid(path, exc) from exc
        return self._loaded(data, path=path)

    def dumps(self) -> str:
        return tomli_w.dumps(self._data)


class YAMLConfigAdapter(StructuredDocumentAdapter):
    """Load and save YAML documents when PyYAML is available.

    Raises
    ------
    NotFound
        When PyYAML is not installed.
    """

    format_name = "yaml"

    def load(self, path: str) -> dict[str, Any]:
        if yaml is None:
            raise NotFound("PyYAML is required for YAML configuration support")
        try:
            data = yaml.safe_load(self._read(path))
        except (yaml.YAMLError, RecursionError) as exc:
            raise self._invalid(path, exc) from exc
        if data is None:
            data = {}
        return self._loaded(data, path=path)

    def dumps(self) -> str:
        return yaml.safe_dump(self._data, allow_unicode=True, sort_keys=False, default_flow_style=False)


def _index(key: str, items: list[Any]) -> int | None:
    if not key.isdecimal():
        return None
    index = int(key)
    return index if index < len(items) else None


def _child(node: Any, key: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(key, _MISSING)
    if isinstance(node, list):
        index = _index(key, node)
        return _MISSING if index is None else node[index]
    return _MISSING


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return json.dumps(value, default=str)
