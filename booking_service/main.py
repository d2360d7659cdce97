import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from prometheus_client import make_asgi_app
from src.adapters.api import router
from src.common import config
from src.domain.services.booking_service import BookingService
from src.domain.services.reminder_dispatcher import ReminderDispatcher
from src.domain.services.reminder_scheduler import ReminderScheduler
from src.infrastructure.catalog.http_doctor_catalog import HttpDoctorCatalog
from src.infrastructure.catalog.in_memory_doctor_catalog import (
    InMemoryDoctorCatalog,
)
from src.infrastructure.clock import SystemClock
from src.infrastructure.database.in_memory_appointment_store import (
    AppointmentStore,
)
from src.infrastructure.notifications.logging_notification_sender import (
    LoggingNotificationSender,
)
from src.ports.clock import ClockPort
from src.ports.doctor_catalog import DoctorCatalogPort
from src.ports.notification_sender import NotificationSenderPort

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_doctor_catalog() -> DoctorCatalogPort:
    if config.DOCTOR_CATALOG_URL:
        logger.info(f"Using remote doctor catalog: {config.DOCTOR_CATALOG_URL}")
        return HttpDoctorCatalog(
            config.DOCTOR_CATALOG_URL,
            timeout=config.DOCTOR_CATALOG_TIMEOUT_SECONDS,
        )
    logger.info("Using in-memory doctor catalog")
    return InMemoryDoctorCatalog()


def create_app(
    doctor_catalog: Optional[DoctorCatalogPort] = None,
    notification_sender: Optional[NotificationSenderPort] = None,
    clock: Optional[ClockPort] = None,
    dispatch_enabled: bool = config.REMINDER_DISPATCH_ENABLED,
) -> FastAPI:
    doctor_catalog = doctor_catalog or build_doctor_catalog()
    notification_sender = notification_sender or LoggingNotificationSender()
    clock = clock or SystemClock()

    store = AppointmentStore(clock)
    scheduler = ReminderScheduler(clock, lead_time=config.REMINDER_LEAD_TIME)
    booking_service = BookingService(
        store, scheduler, doctor_catalog, notification_sender
    )
    dispatcher = ReminderDispatcher(
        booking_service,
        notification_sender,
        clock,
        scan_interval=config.REMINDER_SCAN_INTERVAL,
        send_timeout=config.NOTIFICATION_TIMEOUT_SECONDS,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Booking service starting up...")
        if dispatch_enabled:
            dispatcher.start()
        else:
            logger.info("Reminder dispatch loop disabled")
        yield
        logger.info("Booking service shutting down...")
        await dispatcher.stop()

    app = FastAPI(root_path=config.ROOT_PATH, lifespan=lifespan)
    app.state.doctor_catalog = doctor_catalog
    app.state.booking_service = booking_service
    app.state.reminder_dispatcher = dispatcher
    app.include_router(router)
    app.mount("/metrics", make_asgi_app())
    return app


app = create_app()
