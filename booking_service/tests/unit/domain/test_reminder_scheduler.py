from datetime import datetime, timedelta

import pytest
from src.common.dto import Appointment
from src.domain.exceptions import InvalidAppointmentTimeException
from src.domain.services.reminder_scheduler import ReminderScheduler


def make_appointment(appointment_id="a1", date="2024-12-25", time="10:00"):
    return Appointment(
        id=appointment_id,
        doctor_id="1",
        doctor_name="Dr. Sarah Johnson",
        patient_name="John Doe",
        patient_email="john@example.com",
        patient_phone="555-123-4567",
        date=date,
        time=time,
        created_at=datetime(2024, 12, 20, 9, 0),
    )


def test_schedule_for_sets_fire_time_lead_time_before(scheduler):
    reminder = scheduler.schedule_for(make_appointment())

    assert reminder.fire_time == datetime(2024, 12, 24, 10, 0)
    assert reminder.appointment_time == datetime(2024, 12, 25, 10, 0)
    assert reminder.appointment_id == "a1"
    assert reminder.patient_email == "john@example.com"
    assert reminder.sent is False
    assert scheduler.get_for("a1") == reminder


def test_schedule_for_inside_lead_window_creates_nothing(scheduler, clock):
    clock.current = datetime(2024, 12, 25, 8, 0)

    assert scheduler.schedule_for(make_appointment()) is None
    assert scheduler.get_for("a1") is None


def test_schedule_for_fire_time_equal_to_now_creates_nothing(scheduler):
    now = datetime(2024, 12, 24, 10, 0)
    assert scheduler.schedule_for(make_appointment(), now=now) is None


def test_schedule_for_uses_configured_lead_time(clock):
    scheduler = ReminderScheduler(clock, lead_time=timedelta(hours=2))

    reminder = scheduler.schedule_for(make_appointment())

    assert reminder.fire_time == datetime(2024, 12, 25, 8, 0)


def test_schedule_for_accepts_seconds_in_time(scheduler):
    reminder = scheduler.schedule_for(make_appointment(time="10:00:30"))
    assert reminder.fire_time == datetime(2024, 12, 24, 10, 0, 30)


def test_schedule_for_invalid_time_raises(scheduler):
    with pytest.raises(InvalidAppointmentTimeException):
        scheduler.schedule_for(make_appointment(time="ten o'clock"))
    assert scheduler.list() == []


def test_cancel_for_is_idempotent(scheduler):
    scheduler.schedule_for(make_appointment())

    scheduler.cancel_for("a1")
    scheduler.cancel_for("a1")
    scheduler.cancel_for("never-scheduled")

    assert scheduler.get_for("a1") is None


def test_due_reminders_filters_by_fire_time_and_sent(scheduler):
    early = scheduler.schedule_for(make_appointment("early", date="2024-12-22"))
    scheduler.schedule_for(make_appointment("late", date="2024-12-30"))

    due = scheduler.due_reminders(datetime(2024, 12, 21, 10, 0))
    assert [reminder.appointment_id for reminder in due] == ["early"]

    assert scheduler.mark_sent("early", early.id)
    assert scheduler.due_reminders(datetime(2024, 12, 21, 10, 0)) == []


def test_due_reminders_returns_copies(scheduler):
    scheduler.schedule_for(make_appointment())

    due = scheduler.due_reminders(datetime(2024, 12, 24, 10, 0))
    due[0].sent = True

    assert scheduler.get_for("a1").sent is False


def test_mark_sent_ignores_removed_or_replaced_reminders(scheduler):
    reminder = scheduler.schedule_for(make_appointment())

    assert scheduler.mark_sent("a1", "other-id") is False
    scheduler.cancel_for("a1")
    assert scheduler.mark_sent("a1", reminder.id) is False


def test_list_returns_every_stored_reminder(scheduler):
    scheduler.schedule_for(make_appointment("a1"))
    scheduler.schedule_for(make_appointment("a2", date="2024-12-28"))
    scheduler.schedule_for(make_appointment("late", date="2024-12-20"))
    scheduler.cancel_for("a1")

    assert [reminder.appointment_id for reminder in scheduler.list()] == ["a2"]
