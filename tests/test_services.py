"""Tests des services / Service tests."""

from app.models.job import Job, JobStatus
from app.services.record_validation import can_complete_job
from app.services.time_calculator import TimeCalculatorService


def test_time_to_minutes():
    assert TimeCalculatorService.time_to_minutes("00:00") == 0
    assert TimeCalculatorService.time_to_minutes("09:30") == 570
    assert TimeCalculatorService.time_to_minutes("09:30:00") == 570


def test_add_minutes():
    assert TimeCalculatorService.add_minutes_to_time("08:00", 90) == "09:30"
    assert TimeCalculatorService.add_minutes_to_time("23:30", 60) == "00:30"


def test_minutes_to_time():
    assert TimeCalculatorService.minutes_to_time(660) == "11:00"
    assert TimeCalculatorService.minutes_to_time(1500) == "01:00"


def test_job_interval_defaults():
    # 09:00 + 120 min quand l'heure ou la durée manque / when time or duration is missing
    assert TimeCalculatorService.job_interval(None, None) == (540, 660)
    assert TimeCalculatorService.job_interval("", 0) == (540, 660)
    assert TimeCalculatorService.job_interval("14:00", None) == (840, 960)
    assert TimeCalculatorService.job_interval(None, 30) == (540, 570)


def test_job_interval_truncates_seconds():
    assert TimeCalculatorService.job_interval("10:15:00", 45) == (615, 660)


def test_intervals_overlap():
    # 09:00-11:00 contre 10:00-11:00 / vs 10:00-11:00
    assert TimeCalculatorService.intervals_overlap(540, 660, 600, 660)
    # Bout à bout / back-to-back
    assert not TimeCalculatorService.intervals_overlap(540, 660, 660, 720)
    assert not TimeCalculatorService.intervals_overlap(660, 720, 540, 660)
    # Inclusion / containment
    assert TimeCalculatorService.intervals_overlap(540, 720, 600, 630)


def test_can_complete_job():
    assert can_complete_job(Job(status=JobStatus.SCHEDULED)).is_valid

    done = can_complete_job(Job(status=JobStatus.COMPLETED))
    assert not done.is_valid
    assert done.message == "This job has already been completed. Cannot modify."

    stamped = can_complete_job(Job(status=JobStatus.SCHEDULED, completed_at="2024-07-01T10:00:00+00:00"))
    assert not stamped.is_valid

    cancelled = can_complete_job(Job(status=JobStatus.CANCELLED))
    assert cancelled.message == "This job was cancelled and cannot be completed."
