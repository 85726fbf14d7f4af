from typing import Any, Mapping, Tuple

from motordex.domain.errors import MappingError
from motordex.domain.models import VehicleData

# Flat field -> path inside the registry's "data" object
VEHICLE_FIELD_PATHS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("registration_number", ("registration number",)),
    ("year", ("vehicle_description", "year")),
    ("make", ("vehicle_description", "make")),
    ("model", ("vehicle_description", "model")),
    ("bodystyle", ("vehicle_description", "bodystyle")),
    ("color", ("vehicle_description", "color")),
    ("engine", ("vehicle_description", "engine")),
    ("cylinders", ("vehicle_description", "cylinders")),
    ("gears", ("vehicle_description", "gears")),
    ("fuel_type", ("vehicle_description", "fuel_type")),
    ("date_first_registered", ("vehicle_registration", "date_first_registered")),
    ("mot_due_status", ("mot_tax_dues", "mot_due", "status")),
    ("mot_due_ends", ("mot_tax_dues", "mot_due", "ends on")),
    ("tax_due_status", ("mot_tax_dues", "tax_due", "status")),
    ("tax_due_ends", ("mot_tax_dues", "tax_due", "ends on")),
    ("power_bhp", ("vehicle_performance", "power", "bhp")),
    ("power_kw", ("vehicle_performance", "power", "kw")),
    ("max_speed_mph", ("vehicle_performance", "max_speed", "mph")),
    ("fuel_economy_combined", ("fuel_economy", "combined", "mpg")),
    ("fuel_economy_extra_urban", ("fuel_economy", "extra_urban", "mpg")),
    ("fuel_economy_urban", ("fuel_economy", "urban_cold", "mpg")),
    ("co2_emission", ("co2_emissions_figures", "co2_emission")),
    ("ved_co2_band", ("co2_emissions_figures", "ved_co2_band")),
)


def _resolve(node: Any, path: Tuple[str, ...]) -> str:
    walked = "data"
    for key in path:
        walked = f"{walked}.{key}"
        if not isinstance(node, Mapping) or key not in node:
            raise MappingError(walked)
        node = node[key]

    if node is None or isinstance(node, (Mapping, list)):
        raise MappingError(walked)
    # Upstream text is kept as-is, units included
    return node if isinstance(node, str) else str(node)


def map_vehicle_data(raw: Mapping[str, Any]) -> VehicleData:
    """
    Projects a vehicledatabases.com UK registration payload onto VehicleData.
    Raises MappingError naming the first path that is missing.
    """
    if not isinstance(raw, Mapping) or not isinstance(raw.get("data"), Mapping):
        raise MappingError("data")

    data = raw["data"]
    fields = {name: _resolve(data, path) for name, path in VEHICLE_FIELD_PATHS}
    return VehicleData(**fields)
