"""Logging helpers shared by the adapters, the registry and the facade.

Purpose
    Every load, probe, write and save is reported as a short event name plus
    a ``context`` mapping on the log record (adapter format, file path and
    whatever the call site adds). Nothing is printed until the host
    application attaches a handler to the ``unified_config`` logger.

Contents
    - ``TRACE_ID``: context variable copied into every event's context.
    - ``get_logger``: the package logger.
    - ``bind_trace_id``: set or clear ``TRACE_ID`` for the current context.
    - ``log_debug`` / ``log_info`` / ``log_error``: level-specific emitters.
    - ``make_event``: builds the ``adapter``/``path`` context for an event.

Event names
    ``config_file_read``, ``config_file_loaded``, ``config_file_invalid``,
    ``config_value_set``, ``config_value_rejected``, ``config_saved``,
    ``adapter_inferred``, ``adapter_probe_rejected``, ``adapter_selected``,
    ``unsupported_format`` and ``xpath_invalid``.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("unified_config_trace_id", default=None)
"""Identifier stamped on each event as ``trace_id``; ``None`` when unbound."""

_LOGGER: Final[logging.Logger] = logging.getLogger("unified_config")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the ``unified_config`` logger."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Tag subsequent events in this context with *trace_id*.

    A service editing several configuration files for one request can bind the
    request id once and filter the adapter events by it afterwards. Passing
    ``None`` removes the tag. The binding follows :mod:`contextvars` rules, so
    concurrent tasks keep their own value.

    Examples
    --------
    >>> bind_trace_id('req-42')
    >>> TRACE_ID.get()
    'req-42'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    _emit(logging.ERROR, message, fields)


def make_event(
    adapter: str,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the ``adapter``/``path`` context of an event merged with *payload*.

    Keys in *payload* win over the two fixed ones.

    Examples
    --------
    >>> make_event('ini', 'service.cfg', {'strategy': 'inference'})
    {'adapter': 'ini', 'path': 'service.cfg', 'strategy': 'inference'}
    """

    event: dict[str, Any] = {"adapter": adapter, "path": path}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    _LOGGER.log(level, message, extra={"context": {"trace_id": TRACE_ID.get(), **fields}})
