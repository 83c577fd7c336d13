"""Identifier allocation for document collections."""

from collections.abc import Iterable
from typing import Protocol


class HasId(Protocol):
    id: int


def next_id(items: Iterable[HasId]) -> int:
    """Return one greater than the largest ``id`` in ``items``, or 1 if empty.

    Scans the collection on every call; there is no persisted counter.
    """
    return max((item.id for item in items), default=0) + 1
