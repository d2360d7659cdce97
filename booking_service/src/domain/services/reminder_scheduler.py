import logging
import uuid
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from src.common.dto import Appointment, Reminder
from src.domain.exceptions import InvalidAppointmentTimeException
from src.ports.clock import ClockPort

logger = logging.getLogger(__name__)

DEFAULT_LEAD_TIME = timedelta(hours=24)


def appointment_datetime(appointment: Appointment) -> datetime:
    try:
        return datetime.fromisoformat(f"{appointment.date}T{appointment.time}")
    except ValueError as e:
        raise InvalidAppointmentTimeException(
            f"Invalid appointment date/time: {appointment.date} {appointment.time}"
        ) from e


class ReminderScheduler:
    """Derives one reminder per appointment and tracks whether it was sent.

    Reminders are keyed by appointment id. Like ``AppointmentStore`` this
    class holds no lock; ``BookingService`` serialises access to both.
    """

    def __init__(
        self, clock: ClockPort, lead_time: timedelta = DEFAULT_LEAD_TIME
    ):
        self.clock = clock
        self.lead_time = lead_time
        self._reminders: Dict[str, Reminder] = {}

    def schedule_for(
        self, appointment: Appointment, now: Optional[datetime] = None
    ) -> Optional[Reminder]:
        if now is None:
            now = self.clock.now()
        appointment_time = appointment_datetime(appointment)
        fire_time = appointment_time - self.lead_time

        # Bookings inside the lead window get no reminder at all.
        if fire_time <= now:
            logger.info(
                f"No reminder scheduled for appointment {appointment.id}: "
                f"fire time {fire_time} is not after {now}"
            )
            return None

        reminder = Reminder(
            id=str(uuid.uuid4()),
            appointment_id=appointment.id,
            patient_name=appointment.patient_name,
            patient_email=appointment.patient_email,
            patient_phone=appointment.patient_phone,
            appointment_time=appointment_time,
            fire_time=fire_time,
        )
        self._reminders[appointment.id] = reminder
        logger.info(
            f"Reminder scheduled for {appointment.patient_name} at {fire_time}"
        )
        return reminder.model_copy()

    def cancel_for(self, appointment_id: str) -> None:
        if self._reminders.pop(appointment_id, None) is not None:
            logger.info(f"Reminder removed for appointment: {appointment_id}")

    def get_for(self, appointment_id: str) -> Optional[Reminder]:
        reminder = self._reminders.get(appointment_id)
        return reminder.model_copy() if reminder is not None else None

    def due_reminders(self, now: datetime) -> List[Reminder]:
        return [
            reminder.model_copy()
            for reminder in self._reminders.values()
            if not reminder.sent and reminder.fire_time <= now
        ]

    def mark_sent(self, appointment_id: str, reminder_id: str) -> bool:
        reminder = self._reminders.get(appointment_id)
        if reminder is None or reminder.id != reminder_id:
            return False
        reminder.sent = True
        return True

    def list(self) -> List[Reminder]:
        return [reminder.model_copy() for reminder in self._reminders.values()]
