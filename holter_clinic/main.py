import logging
from datetime import date
from typing import Optional, Tuple

from dotenv import load_dotenv

from .core.config import (
    clinic_now,
    get_blocked_dates,
    get_log_json,
    get_log_level,
    get_log_to_file,
    log_clinic_config,
)
from .core.logging_config import setup_logging
from .engine import HolterEngine
from .seed import build_fleet, demo_appointments, demo_patients
from .services.scheduler_service import OverdueScanScheduler

logger = logging.getLogger(__name__)


def load_environment() -> None:
    """Load a local ``.env`` file; variables already set in the process win."""
    load_dotenv(override=False)


def create_engine(
    with_demo_data: bool = False, today: Optional[date] = None
) -> HolterEngine:
    """Build an engine stocked with the configured fleet and blocked dates."""
    devices, cables = build_fleet()
    patients = []
    appointments = []
    if with_demo_data:
        today = today or clinic_now().date()
        patients = demo_patients()
        appointments = demo_appointments(today)

    engine = HolterEngine(
        devices=devices,
        cables=cables,
        patients=patients,
        appointments=appointments,
        blocked_dates=get_blocked_dates(),
    )
    logger.info(
        "Holter engine created",
        extra={
            "context": {
                "holters": len(devices),
                "cables": len(cables),
                "demo_data": with_demo_data,
            }
        },
    )
    return engine


def create_clinic(
    with_demo_data: bool = False, start_scheduler: bool = False
) -> Tuple[HolterEngine, Optional[OverdueScanScheduler]]:
    """Configure logging, build the engine and optionally start overdue scanning."""
    setup_logging(
        log_level=get_log_level(),
        log_to_file=get_log_to_file(),
        use_json_format=get_log_json(),
    )
    log_clinic_config()

    engine = create_engine(with_demo_data=with_demo_data)

    scheduler = None
    if start_scheduler:
        scheduler = OverdueScanScheduler(engine)
        try:
            scheduler.start()
        except Exception as e:
            logger.warning(
                "Failed to start overdue scan scheduler",
                extra={"context": {"error": str(e)}},
                exc_info=True,
            )
            scheduler = None
    return engine, scheduler
