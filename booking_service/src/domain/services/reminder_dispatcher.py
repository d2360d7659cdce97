import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

from src.common.dto import Reminder
from src.domain.exceptions import NotificationException
from src.domain.services.booking_service import BookingService
from src.infrastructure import metrics
from src.ports.clock import ClockPort
from src.ports.notification_sender import NotificationSenderPort

logger = logging.getLogger(__name__)

DEFAULT_SCAN_INTERVAL = timedelta(hours=1)


class ReminderDispatcher:
    """Background task that periodically fires due reminders.

    Each scan computes the due set under the booking lock, sends the
    notifications without holding it, then marks every reminder sent
    whether or not delivery succeeded. A failed send is never retried.
    """

    def __init__(
        self,
        booking_service: BookingService,
        sender: NotificationSenderPort,
        clock: ClockPort,
        scan_interval: timedelta = DEFAULT_SCAN_INTERVAL,
        send_timeout: Optional[float] = None,
    ):
        self.booking_service = booking_service
        self.sender = sender
        self.clock = clock
        self.scan_interval = scan_interval
        self.send_timeout = send_timeout
        self._scan_lock = asyncio.Lock()
        self._stop_event: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self, now: Optional[datetime] = None) -> int:
        async with self._scan_lock:
            if now is None:
                now = self.clock.now()
            metrics.reminder_scans_total.inc()
            due = await self.booking_service.due_reminders(now)
            fired = 0
            for reminder in due:
                if await self._dispatch(reminder):
                    fired += 1
                await self.booking_service.mark_reminder_sent(reminder)
            logger.info(
                f"Reminder scan at {now}: {len(due)} due, {fired} sent"
            )
            return fired

    async def _dispatch(self, reminder: Reminder) -> bool:
        logger.info(
            f"Sending reminder to {reminder.patient_email} "
            f"for appointment {reminder.appointment_id}"
        )
        try:
            if self.send_timeout is None:
                delivered = await self.sender.send(reminder)
            else:
                delivered = await asyncio.wait_for(
                    self.sender.send(reminder), timeout=self.send_timeout
                )
            if not delivered:
                raise NotificationException(
                    f"Notification sender rejected reminder {reminder.id}"
                )
        except asyncio.TimeoutError:
            logger.error(
                f"Timed out sending reminder for appointment {reminder.appointment_id}"
            )
        except NotificationException as e:
            logger.error(
                f"Failed to send reminder for appointment {reminder.appointment_id}: {e}"
            )
        except Exception:
            logger.exception(
                f"Unexpected error sending reminder for appointment {reminder.appointment_id}"
            )
        else:
            metrics.reminders_dispatched_total.inc()
            return True
        metrics.reminders_dispatch_failed_total.inc()
        return False

    async def run(self) -> None:
        logger.info(
            f"Reminder dispatch loop started, scanning every {self.scan_interval}"
        )
        if self._stop_event is None:
            self._stop_event = asyncio.Event()
        stop_event = self._stop_event
        while not stop_event.is_set():
            try:
                await self.run_once()
            except Exception:
                logger.exception("Reminder scan failed")
            try:
                await asyncio.wait_for(
                    stop_event.wait(),
                    timeout=self.scan_interval.total_seconds(),
                )
            except asyncio.TimeoutError:
                pass
        logger.info("Reminder dispatch loop stopped")

    def start(self) -> None:
        if self.running:
            logger.warning("Reminder dispatch loop already running")
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stop_event.set()
        await self._task
        self._task = None
