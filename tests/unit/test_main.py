"""
Tests for engine bootstrap from configuration.
"""

from unittest.mock import MagicMock

from holter_clinic import main


def test_create_engine_reads_configuration(clean_env):
    clean_env.setenv("INITIAL_RHYTHM_HOLTERS", "2")
    clean_env.setenv("INITIAL_PRESSURE_HOLTERS", "1")
    clean_env.setenv("INITIAL_CABLES", "4")
    clean_env.setenv("BLOCKED_DATES", "2024-07-18,2024-07-19")

    engine = main.create_engine()

    assert [d.id for d in engine.devices()] == ["HR-1", "HR-2", "HP-1"]
    assert len(engine.cables()) == 4
    assert engine.blocked_dates() == ["2024-07-18", "2024-07-19"]
    assert engine.appointments() == []


def test_create_clinic_starts_scheduler(clean_env, monkeypatch):
    scheduler_cls = MagicMock()
    monkeypatch.setattr(main, "OverdueScanScheduler", scheduler_cls)
    monkeypatch.setattr(main, "setup_logging", lambda **kwargs: None)

    engine, scheduler = main.create_clinic(with_demo_data=True, start_scheduler=True)

    scheduler_cls.assert_called_once_with(engine)
    scheduler.start.assert_called_once()
    assert len(engine.patients()) == 5


def test_create_clinic_survives_scheduler_failure(clean_env, monkeypatch):
    scheduler_cls = MagicMock()
    scheduler_cls.return_value.start.side_effect = RuntimeError("no threads")
    monkeypatch.setattr(main, "OverdueScanScheduler", scheduler_cls)
    monkeypatch.setattr(main, "setup_logging", lambda **kwargs: None)

    engine, scheduler = main.create_clinic(start_scheduler=True)

    assert scheduler is None
    assert engine.devices()
