from datetime import datetime

import pytest
from src.common.dto import AppointmentCreate
from src.domain.services.booking_service import BookingService
from src.domain.services.reminder_dispatcher import ReminderDispatcher
from src.domain.services.reminder_scheduler import ReminderScheduler
from src.infrastructure.catalog.in_memory_doctor_catalog import (
    InMemoryDoctorCatalog,
)
from src.infrastructure.database.in_memory_appointment_store import (
    AppointmentStore,
)
from src.ports.clock import ClockPort
from src.ports.notification_sender import NotificationSenderPort

BOOKED_AT = datetime(2024, 12, 20, 9, 0)


class FixedClock(ClockPort):
    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current


class RecordingNotificationSender(NotificationSenderPort):
    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.sent = []
        self.confirmations = []
        self.cancellations = []

    async def send(self, reminder):
        self.sent.append(reminder)
        if self.error is not None:
            raise self.error
        return self.result

    async def send_confirmation(self, appointment):
        self.confirmations.append(appointment)
        if self.error is not None:
            raise self.error
        return self.result

    async def send_cancellation(self, appointment):
        self.cancellations.append(appointment)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def clock():
    return FixedClock(BOOKED_AT)


@pytest.fixture
def sender():
    return RecordingNotificationSender()


@pytest.fixture
def catalog():
    return InMemoryDoctorCatalog()


@pytest.fixture
def store(clock):
    return AppointmentStore(clock)


@pytest.fixture
def scheduler(clock):
    return ReminderScheduler(clock)


@pytest.fixture
def booking_service(store, scheduler, catalog):
    return BookingService(store, scheduler, catalog)


@pytest.fixture
def dispatcher(booking_service, sender, clock):
    return ReminderDispatcher(booking_service, sender, clock)


@pytest.fixture
def booking_request():
    return AppointmentCreate(
        doctor_id="1",
        patient_name="John Doe",
        patient_email="john@example.com",
        patient_phone="555-123-4567",
        date="2024-12-25",
        time="10:00",
        reason="Regular checkup",
    )
