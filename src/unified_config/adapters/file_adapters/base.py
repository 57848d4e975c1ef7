"""Shared file handling for the format adapters.

Purpose
-------
Every adapter reads its source file once at construction and rewrites a whole
file on save. Keeping the byte-level I/O, the probe conversion and the
logging in one mixin means the format modules only contain parsing, path
resolution and serialisation.

Contents
--------
* :class:`BaseFileAdapter` – read/write helpers, the ``probe`` classmethod and
  the fallback to the source path for save targets.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from ...domain.errors import InvalidFormat, NotFound
from ...domain.probe import ProbeResult
from ...observability import log_debug, log_info


class BaseFileAdapter:
    """Common utilities shared by the format adapters.

    Subclasses set :attr:`format_name`, parse their document in ``__init__``
    and implement the get/set/save contract.
    """

    format_name: ClassVar[str] = "unknown"

    def __init__(self, file_path: str | Path) -> None:
        self.source_path = str(file_path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source_path!r})"

    @classmethod
    def probe(cls, file_path: str | Path) -> ProbeResult:
        """Try to construct the adapter for *file_path*.

        Why
        ----
        Type inference must tell "this adapter cannot read the file" apart from
        "the file is unreadable". Only :class:`InvalidFormat` becomes a failed
        result; :class:`NotFound` and ``OSError`` propagate to the caller.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> from unified_config.adapters.file_adapters.structured import JSONConfigAdapter
        >>> tmp = TemporaryDirectory()
        >>> target = Path(tmp.name) / "settings.cfg"
        >>> _ = target.write_text("[general]\\nname = demo\\n", encoding="utf-8")
        >>> JSONConfigAdapter.probe(str(target)).ok
        False
        >>> tmp.cleanup()
        """

        try:
            adapter = cls(file_path)
        except InvalidFormat as exc:
            return ProbeResult.failure(cls.format_name, str(exc))
        return ProbeResult.success(adapter)

    def _resolve_target(self, file_path: str | Path | None) -> str:
        """Return *file_path* or fall back to :attr:`source_path`."""

        return str(file_path) if file_path is not None else self.source_path

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing.

        Side Effects
        ------------
        Emits ``config_file_read`` debug events.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b"[general]")
        >>> tmp.close()
        >>> BaseFileAdapter(tmp.name)._read(tmp.name)[:4]
        b'[gen'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Configuration file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("config_file_read", adapter=self.format_name, path=path, size=len(payload))
        return payload

    def _decode(self, payload: bytes, path: str) -> str:
        """Decode UTF-8 *payload* (BOM tolerated) or raise :class:`InvalidFormat`."""

        try:
            return payload.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise InvalidFormat(f"File {path} is not valid UTF-8: {exc}") from exc

    def _write(self, path: str, payload: str | bytes) -> None:
        """Overwrite *path* with *payload* in full.

        No temporary file or backup is used; ``OSError`` propagates.
        """

        target = Path(path)
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        target.write_bytes(payload)
        log_info("config_saved", adapter=self.format_name, path=path, size=len(payload))
