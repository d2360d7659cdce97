from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, EmailStr


class Doctor(BaseModel):
    id: str
    name: str
    specialty: str
    experience: str = ""
    rating: float = 0.0
    availability: List[str] = []
    phone: str = ""
    email: str = ""


class AppointmentStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class AppointmentCreate(BaseModel):
    doctor_id: str
    patient_name: str
    patient_email: EmailStr
    patient_phone: str
    date: str
    time: str
    reason: str = ""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "doctor_id": "1",
                    "patient_name": "John Doe",
                    "patient_email": "john@example.com",
                    "patient_phone": "555-123-4567",
                    "date": "2024-12-25",
                    "time": "10:00",
                    "reason": "Regular checkup",
                }
            ]
        }
    }


class Appointment(AppointmentCreate):
    id: str
    doctor_name: str
    status: AppointmentStatus = AppointmentStatus.CONFIRMED
    created_at: datetime


class Reminder(BaseModel):
    id: str
    appointment_id: str
    patient_name: str
    patient_email: str
    patient_phone: str
    appointment_time: datetime
    fire_time: datetime
    sent: bool = False
