import logging
from datetime import date
from typing import List, Union

from ..domain.interfaces import IBlockedDateRepository
from ..schemas.dtos import normalize_day

logger = logging.getLogger(__name__)


class BlockedDateService:
    """Days on which the physician cannot install holters.

    Changing the list never affects appointments already booked.
    """

    def __init__(self, repository: IBlockedDateRepository):
        self.repository = repository

    def add_blocked_date(self, day: Union[date, str]) -> str:
        key = normalize_day(day)
        self.repository.add(key)
        logger.info("Blocked date added", extra={"context": {"date": key}})
        return key

    def remove_blocked_date(self, day: Union[date, str]) -> None:
        key = normalize_day(day)
        self.repository.remove(key)
        logger.info("Blocked date removed", extra={"context": {"date": key}})

    def is_blocked(self, day: Union[date, str]) -> bool:
        return self.repository.contains(normalize_day(day))

    def list_blocked_dates(self) -> List[str]:
        return self.repository.list_all()
