import logging
from typing import Optional

import requests

from motordex.core.config import Settings
from motordex.domain.errors import RegistryLookupFailed, VehicleNotFound
from motordex.domain.mapper import map_vehicle_data
from motordex.domain.models import VehicleData
from motordex.domain.patterns import normalize_plate
from motordex.ports.registry_port import VehicleRegistryPort

logger = logging.getLogger(__name__)


class VehicleDatabasesAdapter(VehicleRegistryPort):
    """
    UK registration decode from vehicledatabases.com.
    """
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.api_key = settings.require("vehicle_db_api_key")
        self.base_url = settings.vehicle_db_url.rstrip("/")
        self.timeout = settings.lookup_timeout
        self.session = session or requests.Session()

    def lookup(self, registration_number: str) -> VehicleData:
        plate = normalize_plate(registration_number)
        try:
            resp = self.session.get(
                f"{self.base_url}/{requests.utils.quote(plate, safe='')}",
                headers={"x-AuthKey": self.api_key},
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            raise RegistryLookupFailed(plate, f"timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise RegistryLookupFailed(plate, f"request failed: {exc}") from exc

        if resp.status_code == 404:
            raise VehicleNotFound(plate)
        if resp.status_code >= 400:
            logger.error("Vehicle Databases API error %s: %s", resp.status_code, resp.text[:500])
            raise RegistryLookupFailed(plate, f"HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as exc:
            raise RegistryLookupFailed(plate, "response body is not JSON") from exc

        logger.debug("Vehicle Databases API response: %s", payload)
        if not isinstance(payload, dict):
            raise RegistryLookupFailed(plate, "response body is not a JSON object")

        status = payload.get("status")
        if status != "success":
            logger.info("Vehicle lookup failed: %s", status)
            raise VehicleNotFound(plate, reason=f"status={status}")

        return map_vehicle_data(payload)
