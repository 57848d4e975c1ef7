"""Value object describing the outcome of probing one adapter against a file.

Purpose
-------
Type inference needs to know whether an adapter understood a file without
relying on exceptions escaping the registry loop. :class:`ProbeResult` carries
either the constructed adapter or the reason it was rejected.

System Role
-----------
Returned by every adapter's ``probe`` classmethod and by
:meth:`unified_config.application.registry.AdapterRegistry.infer`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..application.ports import ConfigAdapter


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Success-with-adapter or failure-with-reason for one candidate format.

    Examples
    --------
    >>> failed = ProbeResult.failure("json", "Invalid JSON in demo.cfg")
    >>> failed.ok, failed.reason
    (False, 'Invalid JSON in demo.cfg')
    """

    format_name: str
    adapter: "ConfigAdapter | None" = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the probe produced an adapter."""

        return self.adapter is not None

    @classmethod
    def success(cls, adapter: "ConfigAdapter") -> "ProbeResult":
        """Wrap a successfully constructed *adapter*."""

        return cls(format_name=adapter.format_name, adapter=adapter)

    @classmethod
    def failure(cls, format_name: str, reason: str) -> "ProbeResult":
        """Record that *format_name* rejected the file because of *reason*."""

        return cls(format_name=format_name, reason=reason)
