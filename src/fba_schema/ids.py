"""Identifier allocation.

Persisted objects get ids of the form ``<namespace><prefix><n>`` (for
example ``kb|fbamdl.12``), where ``n`` comes from an allocator that hands
out integer ranges per prefix.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "kb|"


@runtime_checkable
class IdAllocator(Protocol):
    """Capability handing out integer ranges per id prefix."""

    def allocate(self, prefix: str, count: int = 1) -> int:
        """Reserve ``count`` consecutive integers for ``prefix``; return the first."""
        ...


class SequentialIdAllocator:
    """In-memory allocator counting up from ``start`` for each prefix."""

    def __init__(self, start: int = 0):
        self.start = start
        self._next: defaultdict[str, int] = defaultdict(lambda: self.start)

    def allocate(self, prefix: str, count: int = 1) -> int:
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        first = self._next[prefix]
        self._next[prefix] = first + count
        return first


def new_id(prefix: str, allocator: IdAllocator, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Allocate one new id.

    Args:
        prefix: Id prefix, e.g. "fbamdl."
        allocator: Where to take the number from
        namespace: Namespace prepended to every id

    Returns:
        The new id, e.g. "kb|fbamdl.0"
    """
    number = allocator.allocate(f"{namespace}{prefix}", 1)
    new = f"{namespace}{prefix}{number}"
    logger.debug(f"Allocated id {new}")
    return new


def new_ids(prefix: str, allocator: IdAllocator, count: int, namespace: str = DEFAULT_NAMESPACE) -> list[str]:
    """Allocate ``count`` consecutive ids with a single range request."""
    first = allocator.allocate(f"{namespace}{prefix}", count)
    return [f"{namespace}{prefix}{number}" for number in range(first, first + count)]
