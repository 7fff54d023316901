from typing import Dict, List, Optional, Set

from ..domain.entities import Notification
from ..domain.interfaces import IBlockedDateRepository, INotificationRepository
from .base import SequenceCounter


class NotificationRepository(INotificationRepository):
    """Most-recent-first list with an index of already-notified appointments."""

    def __init__(self, notifications: Optional[List[Notification]] = None) -> None:
        self._items: List[Notification] = []
        self._notified: Set[str] = set()
        self._sequence = SequenceCounter()
        for notification in notifications or []:
            self._items.append(notification)
            self._notified.add(notification.appointment_id)
            self._sequence.observe(notification.id)

    def list_all(self) -> List[Notification]:
        return list(self._items)

    def add_first(self, notification: Notification) -> Notification:
        self._items.insert(0, notification)
        self._notified.add(notification.appointment_id)
        self._sequence.observe(notification.id)
        return notification

    def has_for_appointment(self, appointment_id: str) -> bool:
        return appointment_id in self._notified

    def next_sequence(self, prefix: str) -> int:
        return self._sequence.next(prefix)


class BlockedDateRepository(IBlockedDateRepository):
    """Ordered, duplicate-free list of ISO day strings."""

    def __init__(self, days: Optional[List[str]] = None) -> None:
        # dict keeps insertion order and gives O(1) membership
        self._days: Dict[str, None] = dict.fromkeys(days or [])

    def list_all(self) -> List[str]:
        return list(self._days)

    def contains(self, day: str) -> bool:
        return day in self._days

    def add(self, day: str) -> None:
        self._days.setdefault(day, None)

    def remove(self, day: str) -> None:
        self._days.pop(day, None)
