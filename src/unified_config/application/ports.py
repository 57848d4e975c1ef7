"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts every format adapter must satisfy so the
facade and the registry can orchestrate behaviour without depending on
concrete implementations.

Contents
--------
* :class:`ConfigAdapter` – an instance owning one parsed document and
  implementing get/set/save against both addressing modes.
* :class:`AdapterFactory` – the adapter *class* side: construction from a
  single file path plus the non-raising :meth:`probe` used by type inference.

System Role
-----------
The facade only ever talks to :class:`ConfigAdapter`; path syntax is owned by
the adapter, never interpreted by the facade. New formats plug in by
implementing both protocols and registering with
:class:`~unified_config.application.registry.AdapterRegistry`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..domain.probe import ProbeResult


@runtime_checkable
class ConfigAdapter(Protocol):
    """Format-specific owner of one configuration document.

    Why
    ----
    Markup, key-section and structured documents have different shapes; this
    contract hides those shapes behind string values and two addressing modes.

    Attributes
    ----------
    format_name:
        Short identifier such as ``"xml"`` or ``"ini"``.
    source_path:
        File the document was parsed from; the default :meth:`save` target.
    """

    format_name: str
    source_path: str

    def get(self, query: str) -> str | None:
        """Resolve *query* in the adapter's own dialect; ``None`` when absent."""

    def set(self, query: str, value: str) -> bool:
        """Write *value* at *query*, creating missing nodes; ``False`` if impossible."""

    def get_value(self, *keys: str) -> str | None:
        """Resolve a plain key sequence, one nesting level per key."""

    def set_value(self, value: str, *keys: str) -> bool:
        """Write *value* at the key sequence, creating missing levels."""

    def save(self, file_path: str | None = None) -> None:
        """Serialise the document to *file_path* (defaults to :attr:`source_path`)."""


@runtime_checkable
class AdapterFactory(Protocol):
    """Adapter class constructible from a single file path.

    Why
    ----
    Type inference enumerates factories in registration order and needs a way
    to ask "can you read this file?" without catching arbitrary exceptions.
    """

    format_name: str

    def __call__(self, file_path: str) -> ConfigAdapter:
        """Load *file_path* eagerly or raise ``InvalidFormat``/``NotFound``."""

    def probe(self, file_path: str) -> ProbeResult:
        """Attempt construction, reporting malformed content as a failed result."""
