import logging

from src.common.dto import Appointment, Reminder
from src.ports.notification_sender import NotificationSenderPort

logger = logging.getLogger(__name__)


def format_reminder_message(reminder: Reminder) -> str:
    when = reminder.appointment_time.strftime("%B %d, %Y at %H:%M")
    return (
        f"Hello {reminder.patient_name}, this is a reminder of your "
        f"appointment on {when}. Appointment ID: {reminder.appointment_id}"
    )


def format_confirmation_message(appointment: Appointment) -> str:
    return (
        f"Appointment Confirmed: Your appointment with {appointment.doctor_name} "
        f"is scheduled for {appointment.date} at {appointment.time}. "
        f"Appointment ID: {appointment.id}"
    )


def format_cancellation_message(appointment: Appointment) -> str:
    return (
        f"Appointment Cancelled: Your appointment with {appointment.doctor_name} "
        f"on {appointment.date} at {appointment.time} has been cancelled. "
        f"Appointment ID: {appointment.id}"
    )


class LoggingNotificationSender(NotificationSenderPort):
    """Stand-in for e-mail/SMS delivery: messages are written to the log."""

    async def send(self, reminder: Reminder) -> bool:
        logger.info(
            f"Sending reminder to {reminder.patient_email} for appointment "
            f"{reminder.appointment_id}: {format_reminder_message(reminder)}"
        )
        return True

    async def send_confirmation(self, appointment: Appointment) -> bool:
        logger.info(
            f"Sending confirmation to {appointment.patient_email}: "
            f"{format_confirmation_message(appointment)}"
        )
        return True

    async def send_cancellation(self, appointment: Appointment) -> bool:
        logger.info(
            f"Sending cancellation to {appointment.patient_email}: "
            f"{format_cancellation_message(appointment)}"
        )
        return True
