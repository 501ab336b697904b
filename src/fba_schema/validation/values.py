"""Scalar type predicates for deserialized field values.

Booleans are ints in Python; the predicates below keep them apart so that
``True`` is never accepted as a float and ``1.5`` never as a flag.
"""

from __future__ import annotations

from typing import Any


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def is_flag(value: Any) -> bool:
    """Booleans, plus the 0/1 integers older serializations use for them."""
    return isinstance(value, bool) or (isinstance(value, int) and value in (0, 1))


def is_set_flag(value: Any) -> bool:
    return is_flag(value) and bool(value)
