"""Public package surface for ``unified_config``.

One facade, :class:`ConfigManager`, reads and writes XML, INI, JSON, TOML and
YAML configuration files through path expressions. The adapters, registry and
error taxonomy are re-exported for callers that plug in their own formats.
"""

from __future__ import annotations

from .adapters.file_adapters import (
    INIConfigAdapter,
    JSONConfigAdapter,
    TOMLConfigAdapter,
    XMLConfigAdapter,
    YAMLConfigAdapter,
)
from .application.ports import AdapterFactory, ConfigAdapter
from .application.registry import AdapterRegistry
from .core import DEFAULT_REGISTRY, ConfigManager, default_registry
from .domain.errors import ConfigError, InvalidFormat, InvalidPath, NotFound, UnsupportedFormat, ValidationError
from .domain.probe import ProbeResult
from .observability import bind_trace_id, get_logger

__all__ = [
    "ConfigManager",
    "ConfigAdapter",
    "AdapterFactory",
    "AdapterRegistry",
    "DEFAULT_REGISTRY",
    "default_registry",
    "ProbeResult",
    "XMLConfigAdapter",
    "INIConfigAdapter",
    "JSONConfigAdapter",
    "TOMLConfigAdapter",
    "YAMLConfigAdapter",
    "ConfigError",
    "InvalidFormat",
    "InvalidPath",
    "NotFound",
    "UnsupportedFormat",
    "ValidationError",
    "bind_trace_id",
    "get_logger",
]
