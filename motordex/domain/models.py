from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class Vertex(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Vision omits coordinates that are zero
    x: int = 0
    y: int = 0


class TextAnnotation(BaseModel):
    """
    One OCR-detected text block. The first annotation of an OCR result holds
    the full text of the image; the following ones are word fragments.
    """
    model_config = ConfigDict(frozen=True)

    text: str
    vertices: List[Vertex] = Field(default_factory=list)

    @classmethod
    def from_vision(cls, raw: Dict[str, Any]) -> "TextAnnotation":
        poly = raw.get("boundingPoly") or {}
        return cls(
            text=raw.get("description") or "",
            vertices=[Vertex(**v) for v in poly.get("vertices") or []],
        )


class ExtractionStrategy(str, Enum):
    FULL_TEXT = "full_text"
    SINGLE_FRAGMENT = "single_fragment"
    FRAGMENT_PAIR = "fragment_pair"
    FRAGMENT_TRIPLE = "fragment_triple"


class PlateCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    strategy: ExtractionStrategy


class VehicleData(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    registration_number: str = Field(alias="registrationNumber")
    year: str
    make: str
    model: str
    bodystyle: str
    color: str
    engine: str
    cylinders: str
    gears: str
    fuel_type: str
    date_first_registered: str
    mot_due_status: str
    mot_due_ends: str
    tax_due_status: str
    tax_due_ends: str
    power_bhp: str
    power_kw: str
    max_speed_mph: str
    fuel_economy_combined: str
    fuel_economy_extra_urban: str
    fuel_economy_urban: str
    co2_emission: str
    ved_co2_band: str


class LookupStatus(str, Enum):
    NO_TEXT_DETECTED = "no_text_detected"
    NO_VALID_PLATE_FOUND = "no_valid_plate_found"
    VEHICLE_FOUND = "vehicle_found"
    VEHICLE_NOT_FOUND = "vehicle_not_found"
    REGISTRY_LOOKUP_FAILED = "registry_lookup_failed"


class LookupResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    has_text: bool = Field(alias="hasText")
    text: List[TextAnnotation] = Field(default_factory=list)
    full_text: Optional[str] = Field(default=None, alias="fullText")
    all_text: Optional[str] = Field(default=None, alias="allText")
    license_plates: List[str] = Field(default_factory=list, alias="licensePlates")
    vehicle_data: Optional[VehicleData] = Field(default=None, alias="vehicleData")
    message: str
    status: LookupStatus

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
