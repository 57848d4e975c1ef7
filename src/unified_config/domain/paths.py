"""Key-sequence helpers shared by the non-markup adapters.

Purpose
-------
Key-section and structured-document adapters accept two addressing modes: a
key sequence (``("config", "master")``) and a query string. For these formats
the query string is simply the key sequence joined with ``/``. Keeping the
conversion here means every such adapter splits paths identically.

Contents
--------
* :data:`SEPARATOR` – the segment separator for query strings.
* :func:`split_query` – turn ``"/config/master"`` into ``("config", "master")``.
* :func:`normalize_keys` – validate a key sequence supplied by a caller.
"""

from __future__ import annotations

from typing import Final, Iterable

SEPARATOR: Final[str] = "/"


def split_query(query: str) -> tuple[str, ...]:
    """Split a ``/``-separated query into key segments.

    A leading slash is optional and empty segments (``a//b``) are dropped, so
    ``"/a/b"``, ``"a/b"`` and ``"a//b/"`` address the same location.

    Examples
    --------
    >>> split_query("/config/master")
    ('config', 'master')
    >>> split_query("config//master/")
    ('config', 'master')
    >>> split_query("")
    ()
    """

    return tuple(segment for segment in query.split(SEPARATOR) if segment)


def normalize_keys(keys: Iterable[str]) -> tuple[str, ...]:
    """Return *keys* as a tuple of strings, rejecting non-string segments.

    Examples
    --------
    >>> normalize_keys(["config", "master"])
    ('config', 'master')
    >>> normalize_keys(["config", 1])
    Traceback (most recent call last):
    ...
    TypeError: key segments must be strings, got int
    """

    result = tuple(keys)
    for key in result:
        if not isinstance(key, str):
            raise TypeError(f"key segments must be strings, got {type(key).__name__}")
    return result
