import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from src.common.dto import Appointment, AppointmentCreate, Reminder
from src.domain.exceptions import AppointmentNotFoundException
from src.domain.services.reminder_scheduler import ReminderScheduler
from src.infrastructure import metrics
from src.infrastructure.database.in_memory_appointment_store import (
    AppointmentStore,
)
from src.ports.doctor_catalog import DoctorCatalogPort
from src.ports.notification_sender import NotificationSenderPort

logger = logging.getLogger(__name__)


class BookingService:
    """Single entry point for appointment and reminder state.

    Every read and write of the appointment store and the reminder
    scheduler goes through ``self._lock`` so a booking or cancellation is
    never observed half-applied by the dispatch loop. Catalog lookups and
    confirmation/cancellation notices happen outside the lock.
    """

    def __init__(
        self,
        store: AppointmentStore,
        scheduler: ReminderScheduler,
        doctor_catalog: DoctorCatalogPort,
        notification_sender: Optional[NotificationSenderPort] = None,
    ):
        self.store = store
        self.scheduler = scheduler
        self.doctor_catalog = doctor_catalog
        self.notification_sender = notification_sender
        self._lock = asyncio.Lock()

    async def create_appointment(self, request: AppointmentCreate) -> Appointment:
        logger.info(
            f"Attempting to create appointment with doctor: {request.doctor_id}"
        )
        doctor = await self.doctor_catalog.get_doctor(request.doctor_id)
        async with self._lock:
            appointment = self.store.create(request, doctor)
            metrics.appointments_booked_total.inc()
            try:
                reminder = self.scheduler.schedule_for(appointment)
            except Exception as e:
                reminder = None
                logger.error(
                    f"Failed to schedule reminder for appointment {appointment.id}: {e}"
                )
            if reminder is None:
                metrics.reminders_skipped_total.inc()
            else:
                metrics.reminders_scheduled_total.inc()
        await self._notify("confirmation", appointment)
        return appointment

    async def cancel_appointment(self, appointment_id: str) -> None:
        logger.info(f"Attempting to cancel appointment: {appointment_id}")
        async with self._lock:
            appointment = self.store.cancel(appointment_id)
            self.scheduler.cancel_for(appointment_id)
        metrics.appointments_cancelled_total.inc()
        logger.info(f"Appointment cancelled successfully: {appointment_id}")
        await self._notify("cancellation", appointment)

    async def _notify(self, kind: str, appointment: Appointment) -> None:
        if self.notification_sender is None:
            return
        if kind == "confirmation":
            send = self.notification_sender.send_confirmation
        else:
            send = self.notification_sender.send_cancellation
        try:
            delivered = await send(appointment)
        except Exception as e:
            delivered = False
            logger.error(
                f"Error sending {kind} for appointment {appointment.id}: {e}"
            )
        if not delivered:
            metrics.booking_notifications_failed_total.inc()
            logger.warning(
                f"Failed to send {kind} notification for appointment: {appointment.id}"
            )

    async def get_appointment(self, appointment_id: str) -> Appointment:
        async with self._lock:
            appointment = self.store.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundException(appointment_id)
        return appointment

    async def list_appointments(self) -> List[Appointment]:
        async with self._lock:
            return self.store.list()

    async def get_reminder(self, appointment_id: str) -> Optional[Reminder]:
        async with self._lock:
            if not self.store.exists(appointment_id):
                raise AppointmentNotFoundException(appointment_id)
            return self.scheduler.get_for(appointment_id)

    async def due_reminders(self, now: datetime) -> List[Reminder]:
        async with self._lock:
            return [
                reminder
                for reminder in self.scheduler.due_reminders(now)
                if self.store.exists(reminder.appointment_id)
            ]

    async def mark_reminder_sent(self, reminder: Reminder) -> bool:
        async with self._lock:
            return self.scheduler.mark_sent(reminder.appointment_id, reminder.id)
