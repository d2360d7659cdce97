from abc import ABC, abstractmethod
from typing import List, Optional

from src.common.dto import Doctor


class DoctorCatalogPort(ABC):
    @abstractmethod
    async def get_doctor(self, doctor_id: str) -> Optional[Doctor]:
        pass

    @abstractmethod
    async def list_doctors(self, specialty: Optional[str] = None) -> List[Doctor]:
        pass

    async def doctor_exists(self, doctor_id: str) -> bool:
        return await self.get_doctor(doctor_id) is not None
