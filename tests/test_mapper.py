"""
Unit tests for motordex/domain/mapper.py

Run with:
    pytest tests/test_mapper.py -v
"""

import pytest

from motordex.domain.errors import MappingError
from motordex.domain.mapper import VEHICLE_FIELD_PATHS, map_vehicle_data
from motordex.domain.models import VehicleData


class TestMapVehicleData:
    def test_make_and_model_copied_exactly(self, registry_payload):
        vehicle = map_vehicle_data(registry_payload)
        assert vehicle.make == "FORD"
        assert vehicle.model == "FOCUS ZETEC"

    def test_units_kept_as_text(self, registry_payload):
        vehicle = map_vehicle_data(registry_payload)
        assert vehicle.power_bhp == "148 BHP"
        assert vehicle.fuel_economy_combined == "61.4 MPG"
        assert vehicle.co2_emission == "105 g/km"

    def test_nested_keys_with_spaces(self, registry_payload):
        vehicle = map_vehicle_data(registry_payload)
        assert vehicle.registration_number == "YF65CVK"
        assert vehicle.mot_due_ends == "2026-09-29"
        assert vehicle.tax_due_ends == "2026-10-01"

    def test_urban_comes_from_urban_cold(self, registry_payload):
        assert map_vehicle_data(registry_payload).fuel_economy_urban == "50.4 MPG"

    def test_every_field_is_mapped(self):
        mapped = {name for name, _ in VEHICLE_FIELD_PATHS}
        assert mapped == set(VehicleData.model_fields)

    def test_serializes_with_registration_number_alias(self, registry_payload):
        payload = map_vehicle_data(registry_payload).model_dump(by_alias=True)
        assert payload["registrationNumber"] == "YF65CVK"
        assert payload["ved_co2_band"] == "B"
        assert "registration_number" not in payload

    def test_non_string_scalars_rendered_verbatim(self, registry_payload):
        registry_payload["data"]["vehicle_description"]["cylinders"] = 4
        assert map_vehicle_data(registry_payload).cylinders == "4"


class TestMappingErrors:
    def test_missing_nested_key(self, registry_payload):
        del registry_payload["data"]["vehicle_performance"]["power"]["bhp"]
        with pytest.raises(MappingError) as exc:
            map_vehicle_data(registry_payload)
        assert exc.value.path == "data.vehicle_performance.power.bhp"

    def test_missing_branch(self, registry_payload):
        del registry_payload["data"]["mot_tax_dues"]
        with pytest.raises(MappingError) as exc:
            map_vehicle_data(registry_payload)
        assert exc.value.path.startswith("data.mot_tax_dues")

    def test_null_leaf(self, registry_payload):
        registry_payload["data"]["vehicle_description"]["make"] = None
        with pytest.raises(MappingError):
            map_vehicle_data(registry_payload)

    def test_branch_where_leaf_expected(self, registry_payload):
        registry_payload["data"]["vehicle_description"]["model"] = {"name": "FOCUS"}
        with pytest.raises(MappingError):
            map_vehicle_data(registry_payload)

    @pytest.mark.parametrize("raw", [{}, {"status": "success"}, {"data": []}, None, []])
    def test_missing_data_object(self, raw):
        with pytest.raises(MappingError) as exc:
            map_vehicle_data(raw)
        assert exc.value.path == "data"
