"""
Shared fixtures: a registry payload shaped like the vehicledatabases.com
UK decode response and settings with credentials.
"""

import copy

import pytest

from motordex.core.config import Settings
from motordex.domain.errors import RegistryLookupFailed
from motordex.domain.mapper import map_vehicle_data


REGISTRY_PAYLOAD = {
    "status": "success",
    "data": {
        "registration number": "YF65CVK",
        "vehicle_description": {
            "year": "2015",
            "make": "FORD",
            "model": "FOCUS ZETEC",
            "bodystyle": "5 Door Hatchback",
            "color": "BLUE",
            "engine": "998 cc",
            "cylinders": "3",
            "gears": "6 SPEED MANUAL",
            "fuel_type": "PETROL",
        },
        "vehicle_registration": {"date_first_registered": "2015-09-30"},
        "mot_tax_dues": {
            "mot_due": {"status": "Valid", "ends on": "2026-09-29"},
            "tax_due": {"status": "Taxed", "ends on": "2026-10-01"},
        },
        "vehicle_performance": {
            "power": {"bhp": "148 BHP", "kw": "92 KW"},
            "max_speed": {"mph": "120 MPH"},
        },
        "fuel_economy": {
            "combined": {"mpg": "61.4 MPG"},
            "extra_urban": {"mpg": "70.6 MPG"},
            "urban_cold": {"mpg": "50.4 MPG"},
        },
        "co2_emissions_figures": {
            "co2_emission": "105 g/km",
            "ved_co2_band": "B",
        },
    },
}



@pytest.fixture
def registry_payload():
    return copy.deepcopy(REGISTRY_PAYLOAD)


@pytest.fixture
def vehicle(registry_payload):
    return map_vehicle_data(registry_payload)


@pytest.fixture
def test_settings():
    return Settings(google_api_key="vision-key", vehicle_db_api_key="registry-key")


@pytest.fixture
def registry_timeout():
    return RegistryLookupFailed("YF65CVK", "timed out after 10.0s")
