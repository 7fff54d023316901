"""
Background overdue scanning with APScheduler.

The scan runs once when the scheduler starts and then every
``OVERDUE_SCAN_INTERVAL_SECONDS`` seconds.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable, List, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..core.config import clinic_now, get_overdue_scan_interval
from ..domain.entities import Notification

if TYPE_CHECKING:
    from ..engine import HolterEngine

logger = logging.getLogger(__name__)

JOB_ID = "overdue_scan"


class OverdueScanScheduler:
    """Runs ``HolterEngine.scan_overdue`` on a background thread."""

    def __init__(
        self,
        engine: "HolterEngine",
        interval_seconds: Optional[int] = None,
        clock: Callable[[], datetime] = clinic_now,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        self.engine = engine
        self.interval_seconds = interval_seconds or get_overdue_scan_interval()
        self.clock = clock
        self.scheduler = scheduler or BackgroundScheduler()

    def run_scan(self) -> List[Notification]:
        """Job body; failures are logged so the next tick still runs."""
        try:
            created = self.engine.scan_overdue(self.clock())
        except Exception as e:
            logger.error(
                "Error in scheduled overdue scan",
                extra={"context": {"job": JOB_ID, "error": str(e)}},
                exc_info=True,
            )
            return []

        if created:
            logger.warning(
                f"{len(created)} appointment(s) became overdue",
                extra={
                    "context": {
                        "job": JOB_ID,
                        "appointment_ids": [n.appointment_id for n in created],
                    }
                },
            )
        return created

    def start(self) -> None:
        # Startup scan before the first interval elapses
        self.run_scan()

        self.scheduler.add_job(
            self.run_scan,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=JOB_ID,
            name="Detect overdue Holter returns",
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(
            "Overdue scan job registered",
            extra={
                "context": {
                    "job_id": JOB_ID,
                    "interval_seconds": self.interval_seconds,
                }
            },
        )

    def shutdown(self, wait: bool = False) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
            logger.info("Overdue scan scheduler stopped")

    @property
    def running(self) -> bool:
        return bool(self.scheduler.running)
