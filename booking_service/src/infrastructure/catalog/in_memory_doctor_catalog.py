import logging
from typing import Dict, Iterable, List, Optional

from src.common.dto import Doctor
from src.ports.doctor_catalog import DoctorCatalogPort

logger = logging.getLogger(__name__)

DEFAULT_DOCTORS = [
    Doctor(
        id="1",
        name="Dr. Sarah Johnson",
        specialty="Cardiology",
        experience="15 years",
        rating=4.8,
        availability=["09:00", "10:00", "11:00", "14:00", "15:00", "16:00"],
        phone="(555) 123-4567",
        email="sarah.johnson@hospital.com",
    ),
    Doctor(
        id="2",
        name="Dr. Michael Chen",
        specialty="Pediatrics",
        experience="12 years",
        rating=4.9,
        availability=["08:00", "09:00", "10:00", "13:00", "14:00", "15:00"],
        phone="(555) 234-5678",
        email="michael.chen@hospital.com",
    ),
    Doctor(
        id="3",
        name="Dr. Emily Rodriguez",
        specialty="Dermatology",
        experience="10 years",
        rating=4.7,
        availability=["09:00", "11:00", "13:00", "14:00", "16:00"],
        phone="(555) 345-6789",
        email="emily.rodriguez@hospital.com",
    ),
    Doctor(
        id="4",
        name="Dr. David Thompson",
        specialty="General Practice",
        experience="20 years",
        rating=4.6,
        availability=[
            "08:00",
            "09:00",
            "10:00",
            "11:00",
            "13:00",
            "14:00",
            "15:00",
            "16:00",
        ],
        phone="(555) 456-7890",
        email="david.thompson@hospital.com",
    ),
]


def matches_specialty(doctor: Doctor, specialty: Optional[str]) -> bool:
    if not specialty or specialty.lower() == "all":
        return True
    return specialty.lower() in doctor.specialty.lower()


class InMemoryDoctorCatalog(DoctorCatalogPort):
    def __init__(self, doctors: Optional[Iterable[Doctor]] = None):
        if doctors is None:
            doctors = DEFAULT_DOCTORS
        self._doctors: Dict[str, Doctor] = {
            doctor.id: doctor for doctor in doctors
        }

    async def get_doctor(self, doctor_id: str) -> Optional[Doctor]:
        doctor = self._doctors.get(doctor_id)
        if doctor is None:
            logger.info(f"Doctor not found in catalog: {doctor_id}")
        return doctor

    async def list_doctors(self, specialty: Optional[str] = None) -> List[Doctor]:
        doctors = [
            doctor
            for doctor in self._doctors.values()
            if matches_specialty(doctor, specialty)
        ]
        logger.info(f"Retrieved {len(doctors)} doctors for specialty: {specialty}")
        return doctors
