from typing import Protocol
from motordex.domain.models import VehicleData


class VehicleRegistryPort(Protocol):
    def lookup(self, registration_number: str) -> VehicleData:
        """Raises VehicleNotFound or RegistryLookupFailed."""
        ...
