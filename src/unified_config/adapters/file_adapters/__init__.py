"""Format adapters: one class per supported configuration file format."""

from __future__ import annotations

from .markup import XMLConfigAdapter
from .sections import INIConfigAdapter
from .structured import JSONConfigAdapter, TOMLConfigAdapter, YAMLConfigAdapter

__all__ = [
    "XMLConfigAdapter",
    "INIConfigAdapter",
    "JSONConfigAdapter",
    "TOMLConfigAdapter",
    "YAMLConfigAdapter",
]
