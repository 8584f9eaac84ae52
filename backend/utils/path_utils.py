"""Utilities for splitting and joining the path strings stored as mount points.

Paths are plain strings. ``/`` is the canonical separator; the platform's own
separators are folded into it. Empty and ``.`` components are dropped and
``..`` is kept literally. A leading ``/`` is kept as its own first component so
that absolute and relative paths never prefix-match each other.
"""

from __future__ import annotations

import os
from typing import Iterable, Optional, Tuple

SEPARATOR = '/'


def _separators() -> Tuple[str, ...]:
    return tuple({sep for sep in (os.sep, os.altsep) if sep and sep != SEPARATOR})


def split_path(path: Optional[str]) -> Tuple[str, ...]:
    """Return the components of ``path``.

    Args:
        path: Real or virtual path string.

    Returns:
        Tuple of components; ``('/', ...)`` for absolute paths, ``()`` for an
        empty path.
    """
    if not path:
        return ()

    for sep in _separators():
        path = path.replace(sep, SEPARATOR)

    parts = [p for p in path.split(SEPARATOR) if p and p != '.']
    if path.startswith(SEPARATOR):
        return (SEPARATOR, *parts)
    return tuple(parts)


def join_path(components: Iterable[str]) -> str:
    """Join components produced by :func:`split_path` back into a string."""
    components = list(components)
    if components and components[0] == SEPARATOR:
        return SEPARATOR + SEPARATOR.join(components[1:])
    return SEPARATOR.join(components)


def normalize_path(path: Optional[str]) -> str:
    return join_path(split_path(path))


def strip_prefix(components: Tuple[str, ...], prefix: Tuple[str, ...]) -> Optional[Tuple[str, ...]]:
    """Return what remains of ``components`` after ``prefix``, or None.

    Matching is component-wise: ``music`` is a prefix of ``music/a`` but not of
    ``musical/a``.
    """
    if len(prefix) > len(components):
        return None
    if components[:len(prefix)] != prefix:
        return None
    return components[len(prefix):]


def is_single_component(name: Optional[str]) -> bool:
    """True when ``name`` is usable as a mount name (one plain component)."""
    if not name:
        return False
    return name not in ('..', SEPARATOR) and split_path(name) == (name,)
