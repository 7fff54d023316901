"""
Shared building blocks for the in-memory repositories.

The engine keeps process-lifetime state only, so every repository is a plain
insertion-ordered dict keyed by entity id.
"""

import re
from typing import Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

_ID_PATTERN = re.compile(r"^(?P<prefix>.*?)(?P<number>\d+)$")


class SequenceCounter:
    """Tracks the highest number seen per id prefix so ids are never reused."""

    def __init__(self) -> None:
        self._highest: Dict[str, int] = {}

    def observe(self, entity_id: str) -> None:
        match = _ID_PATTERN.match(entity_id)
        if not match:
            return
        prefix = match.group("prefix")
        number = int(match.group("number"))
        if number > self._highest.get(prefix, 0):
            self._highest[prefix] = number

    def next(self, prefix: str) -> int:
        number = self._highest.get(prefix, 0) + 1
        self._highest[prefix] = number
        return number


class InMemoryRepository(Generic[T]):
    """Insertion-ordered storage for entities exposing an ``id`` attribute."""

    def __init__(self, items: Optional[List[T]] = None) -> None:
        self._items: Dict[str, T] = {}
        self._sequence = SequenceCounter()
        for item in items or []:
            self._store(item)

    def _store(self, item: T) -> T:
        item_id = getattr(item, "id")
        self._items[item_id] = item
        self._sequence.observe(item_id)
        return item

    def get_by_id(self, item_id: str) -> Optional[T]:
        return self._items.get(item_id)

    def list_all(self) -> List[T]:
        return list(self._items.values())

    def next_sequence(self, prefix: str) -> int:
        return self._sequence.next(prefix)

    def __len__(self) -> int:
        return len(self._items)
