import asyncio
import logging
from typing import List, Optional

import requests
from src.common.dto import Doctor
from src.domain.exceptions import CatalogUnavailableException
from src.ports.doctor_catalog import DoctorCatalogPort

logger = logging.getLogger(__name__)


class HttpDoctorCatalog(DoctorCatalogPort):
    """Doctor catalog served by a remote service.

    Expects ``GET {base_url}/doctors`` (optionally filtered with
    ``?specialty=``) and ``GET {base_url}/doctors/{id}`` returning JSON
    doctors. Requests run in a worker thread. A 404 means the doctor does
    not exist; any other failure raises ``CatalogUnavailableException``.
    """

    def __init__(self, base_url: str, timeout: float = 5.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def get_doctor(self, doctor_id: str) -> Optional[Doctor]:
        logger.info(f"Fetching doctor {doctor_id} from catalog")
        try:
            response = await asyncio.to_thread(
                requests.get,
                f"{self.base_url}/doctors/{doctor_id}",
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error while fetching doctor {doctor_id}: {e}")
            raise CatalogUnavailableException(str(e)) from e
        if response.status_code == 404:
            logger.info(f"Doctor not found in catalog: {doctor_id}")
            return None
        if response.status_code != 200:
            logger.error(
                f"Failed to fetch doctor from catalog. Status code: {response.status_code}"
            )
            raise CatalogUnavailableException(
                f"Catalog returned status {response.status_code}"
            )
        return Doctor(**response.json())

    async def list_doctors(self, specialty: Optional[str] = None) -> List[Doctor]:
        params = {"specialty": specialty} if specialty else None
        try:
            response = await asyncio.to_thread(
                requests.get,
                f"{self.base_url}/doctors",
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error while listing doctors: {e}")
            raise CatalogUnavailableException(str(e)) from e
        if response.status_code != 200:
            logger.error(
                f"Failed to list doctors from catalog. Status code: {response.status_code}"
            )
            raise CatalogUnavailableException(
                f"Catalog returned status {response.status_code}"
            )
        doctors = [Doctor(**item) for item in response.json()]
        logger.info(f"Retrieved {len(doctors)} doctors from catalog")
        return doctors
