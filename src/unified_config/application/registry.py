"""Ordered adapter registry and type inference.

Purpose
-------
Keep the list of known adapter classes explicit. The registry answers two
questions for the facade: "which adapter owns this extension?" and, when the
extension is unknown, "which adapter can read this file?".

Contents
--------
* :class:`AdapterRegistry` – registration, suffix lookup and :meth:`infer`.

System Role
-----------
Free of concrete adapters; :mod:`unified_config.core` wires the defaults.
Probe order is registration order. The first adapter whose probe succeeds
wins, so an INI-shaped TOML file is read as INI when INI was registered first.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from ..domain.errors import NotFound
from ..domain.probe import ProbeResult
from ..observability import log_debug, make_event
from .ports import AdapterFactory


class AdapterRegistry:
    """Explicit, ordered collection of adapter factories.

    Examples
    --------
    >>> from unified_config.adapters.file_adapters import INIConfigAdapter, JSONConfigAdapter
    >>> registry = AdapterRegistry()
    >>> _ = registry.register(JSONConfigAdapter, ".json")
    >>> _ = registry.register(INIConfigAdapter, "ini", ".CFG")
    >>> [factory.format_name for factory in registry]
    ['json', 'ini']
    >>> registry.for_suffix("settings.cfg").format_name
    'ini'
    >>> registry.for_suffix("settings.conf") is None
    True
    """

    def __init__(self) -> None:
        self._order: list[AdapterFactory] = []
        self._suffixes: dict[str, AdapterFactory] = {}

    def __iter__(self) -> Iterator[AdapterFactory]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def register(self, factory: AdapterFactory, *suffixes: str) -> AdapterFactory:
        """Append *factory* to the probe order and bind it to *suffixes*.

        Suffixes are matched case-insensitively; the leading dot is optional.
        Registering the same factory twice only updates its suffixes. Returns
        *factory* so the method can be used as a class decorator.
        """

        if factory not in self._order:
            self._order.append(factory)
        for suffix in suffixes:
            self._suffixes[_normalize_suffix(suffix)] = factory
        return factory

    def for_suffix(self, file_path: str | Path) -> AdapterFactory | None:
        """Return the factory registered for the extension of *file_path*."""

        suffix = Path(file_path).suffix
        if not suffix:
            return None
        return self._suffixes.get(_normalize_suffix(suffix))

    def infer(self, file_path: str | Path) -> ProbeResult:
        """Probe every factory in order and return the first successful result.

        Why
        ----
        Files with unknown extensions still deserve a chance when their content
        is a supported format.

        What
        ----
        Raises :class:`NotFound` up front when *file_path* does not exist so a
        missing file is never reported as an unsupported format. Otherwise each
        factory's :meth:`probe` runs until one succeeds; rejected candidates are
        logged. When every candidate fails the last failure is returned.
        """

        path = str(file_path)
        if not Path(path).is_file():
            raise NotFound(f"Configuration file not found: {path}")
        outcome = ProbeResult.failure("none", "no adapters registered")
        for factory in self._order:
            outcome = factory.probe(path)
            if outcome.ok:
                log_debug("adapter_inferred", **make_event(outcome.format_name, path))
                return outcome
            log_debug("adapter_probe_rejected", **make_event(outcome.format_name, path, {"reason": outcome.reason}))
        return outcome


def _normalize_suffix(suffix: str) -> str:
    return "." + suffix.lower().lstrip(".")
