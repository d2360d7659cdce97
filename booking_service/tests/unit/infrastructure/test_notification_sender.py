import logging
from datetime import datetime

import pytest
from src.common.dto import Appointment, Reminder
from src.infrastructure.notifications.logging_notification_sender import (
    LoggingNotificationSender,
    format_cancellation_message,
    format_confirmation_message,
    format_reminder_message,
)

REMINDER = Reminder(
    id="r1",
    appointment_id="a1",
    patient_name="John Doe",
    patient_email="john@example.com",
    patient_phone="555-123-4567",
    appointment_time=datetime(2024, 12, 25, 10, 0),
    fire_time=datetime(2024, 12, 24, 10, 0),
)


def test_format_reminder_message():
    message = format_reminder_message(REMINDER)
    assert "John Doe" in message
    assert "December 25, 2024 at 10:00" in message
    assert "a1" in message


@pytest.mark.asyncio
async def test_logging_sender_logs_and_succeeds(caplog):
    sender = LoggingNotificationSender()

    with caplog.at_level(logging.INFO):
        assert await sender.send(REMINDER) is True

    assert "Sending reminder to john@example.com for appointment a1" in caplog.text


APPOINTMENT = Appointment(
    id="a1",
    doctor_id="1",
    doctor_name="Dr. Sarah Johnson",
    patient_name="John Doe",
    patient_email="john@example.com",
    patient_phone="555-123-4567",
    date="2024-12-25",
    time="10:00",
    created_at=datetime(2024, 12, 20, 9, 0),
)


def test_format_confirmation_and_cancellation_messages():
    confirmation = format_confirmation_message(APPOINTMENT)
    cancellation = format_cancellation_message(APPOINTMENT)

    assert confirmation.startswith("Appointment Confirmed")
    assert cancellation.startswith("Appointment Cancelled")
    for message in (confirmation, cancellation):
        assert "Dr. Sarah Johnson" in message
        assert "2024-12-25 at 10:00" in message
        assert "a1" in message


@pytest.mark.asyncio
async def test_logging_sender_confirmation_and_cancellation(caplog):
    sender = LoggingNotificationSender()

    with caplog.at_level(logging.INFO):
        assert await sender.send_confirmation(APPOINTMENT) is True
        assert await sender.send_cancellation(APPOINTMENT) is True

    assert "Sending confirmation to john@example.com" in caplog.text
    assert "Sending cancellation to john@example.com" in caplog.text
