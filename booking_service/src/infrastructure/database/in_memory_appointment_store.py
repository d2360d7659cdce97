import logging
import uuid
from typing import Dict, List, Optional

from src.common.dto import (
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
    Doctor,
)
from src.domain.exceptions import (
    AppointmentNotFoundException,
    DoctorNotFoundException,
)
from src.ports.clock import ClockPort

logger = logging.getLogger(__name__)


class AppointmentStore:
    """Process-lifetime mapping of appointment id to appointment.

    The store does no locking of its own; callers serialise access
    (see ``BookingService``). Reads return copies so callers never hold
    a reference to stored state.
    """

    def __init__(self, clock: ClockPort):
        self.clock = clock
        self._appointments: Dict[str, Appointment] = {}

    def create(
        self, request: AppointmentCreate, doctor: Optional[Doctor]
    ) -> Appointment:
        if doctor is None or doctor.id != request.doctor_id:
            logger.warning(f"Doctor not found: {request.doctor_id}")
            raise DoctorNotFoundException(request.doctor_id)

        appointment_id = str(uuid.uuid4())
        while appointment_id in self._appointments:
            appointment_id = str(uuid.uuid4())

        appointment = Appointment(
            **request.model_dump(),
            id=appointment_id,
            doctor_name=doctor.name,
            status=AppointmentStatus.CONFIRMED,
            created_at=self.clock.now(),
        )
        self._appointments[appointment_id] = appointment
        logger.info(f"Appointment created successfully: {appointment_id}")
        return appointment.model_copy()

    def cancel(self, appointment_id: str) -> Appointment:
        appointment = self._appointments.pop(appointment_id, None)
        if appointment is None:
            logger.warning(f"Appointment not found: {appointment_id}")
            raise AppointmentNotFoundException(appointment_id)
        appointment.status = AppointmentStatus.CANCELLED
        logger.info(f"Appointment removed: {appointment_id}")
        return appointment

    def get(self, appointment_id: str) -> Optional[Appointment]:
        appointment = self._appointments.get(appointment_id)
        if appointment is None:
            logger.info(f"Appointment not found: {appointment_id}")
            return None
        return appointment.model_copy()

    def exists(self, appointment_id: str) -> bool:
        appointment = self._appointments.get(appointment_id)
        return (
            appointment is not None
            and appointment.status == AppointmentStatus.CONFIRMED
        )

    def list(self) -> List[Appointment]:
        appointments = [
            appointment.model_copy()
            for appointment in self._appointments.values()
        ]
        logger.info(f"Retrieved {len(appointments)} appointments")
        return appointments
