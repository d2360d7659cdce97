import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from src.common.dto import Appointment, AppointmentCreate, Doctor, Reminder
from src.domain.exceptions import (
    AppointmentNotFoundException,
    CatalogUnavailableException,
    DoctorNotFoundException,
)
from src.domain.services.booking_service import BookingService
from src.ports.doctor_catalog import DoctorCatalogPort

router = APIRouter()

logger = logging.getLogger(__name__)


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_doctor_catalog(request: Request) -> DoctorCatalogPort:
    return request.app.state.doctor_catalog


@router.post("/appointments", response_model=Appointment)
async def create_appointment(
    appointment: AppointmentCreate,
    service: BookingService = Depends(get_booking_service),
):
    logger.info("Received request to create appointment")
    try:
        created = await service.create_appointment(appointment)
    except DoctorNotFoundException:
        logger.warning(
            f"Failed to create appointment. Unknown doctor: {appointment.doctor_id}"
        )
        raise HTTPException(status_code=404, detail="Doctor not found")
    except CatalogUnavailableException:
        logger.error("Failed to create appointment. Doctor catalog unavailable")
        raise HTTPException(
            status_code=503, detail="Failed to check doctor catalog"
        )
    logger.info(f"Successfully created appointment: {created.id}")
    return created


@router.get("/appointments", response_model=List[Appointment])
async def list_appointments(
    service: BookingService = Depends(get_booking_service),
):
    logger.info("Received request to list appointments")
    return await service.list_appointments()


@router.get("/appointments/{appointment_id}", response_model=Appointment)
async def get_appointment(
    appointment_id: str,
    service: BookingService = Depends(get_booking_service),
):
    logger.info(f"Received request to get appointment: {appointment_id}")
    try:
        return await service.get_appointment(appointment_id)
    except AppointmentNotFoundException:
        raise HTTPException(status_code=404, detail="Appointment not found")


@router.delete("/appointments/{appointment_id}")
async def cancel_appointment(
    appointment_id: str,
    service: BookingService = Depends(get_booking_service),
):
    logger.info(f"Received request to cancel appointment: {appointment_id}")
    try:
        await service.cancel_appointment(appointment_id)
    except AppointmentNotFoundException:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return {"message": "Appointment cancelled successfully"}


@router.get("/appointments/{appointment_id}/reminder", response_model=Reminder)
async def get_appointment_reminder(
    appointment_id: str,
    service: BookingService = Depends(get_booking_service),
):
    try:
        reminder = await service.get_reminder(appointment_id)
    except AppointmentNotFoundException:
        raise HTTPException(status_code=404, detail="Appointment not found")
    if reminder is None:
        raise HTTPException(status_code=404, detail="Reminder not found")
    return reminder


@router.get("/doctors", response_model=List[Doctor])
async def list_doctors(
    specialty: Optional[str] = None,
    catalog: DoctorCatalogPort = Depends(get_doctor_catalog),
):
    logger.info(f"Received request to list doctors, specialty: {specialty}")
    try:
        return await catalog.list_doctors(specialty)
    except CatalogUnavailableException:
        raise HTTPException(
            status_code=503, detail="Failed to check doctor catalog"
        )


@router.get("/doctors/{doctor_id}", response_model=Doctor)
async def get_doctor(
    doctor_id: str,
    catalog: DoctorCatalogPort = Depends(get_doctor_catalog),
):
    try:
        doctor = await catalog.get_doctor(doctor_id)
    except CatalogUnavailableException:
        raise HTTPException(
            status_code=503, detail="Failed to check doctor catalog"
        )
    if doctor is None:
        raise HTTPException(status_code=404, detail="Doctor not found")
    return doctor
