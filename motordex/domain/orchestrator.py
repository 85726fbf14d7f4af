import asyncio
import logging
from typing import List, Sequence

from motordex.core.config import Settings
from motordex.domain import services
from motordex.domain.errors import MappingError, MotorDexError, VehicleNotFound
from motordex.domain.models import LookupResponse, LookupStatus, TextAnnotation, VehicleData
from motordex.domain.patterns import normalize_plate
from motordex.ports.registry_port import VehicleRegistryPort

logger = logging.getLogger(__name__)


class LookupOrchestrator:
    """
    Turns one OCR result into a LookupResponse: extract candidates, dedupe,
    look up the first plate in the registry and build the reply.
    Holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(self, settings: Settings, registry: VehicleRegistryPort):
        settings.require("vehicle_db_api_key")
        self.settings = settings
        self.registry = registry

    async def process(self, annotations: Sequence[TextAnnotation]) -> LookupResponse:
        annotations = list(annotations or [])
        for idx, ann in enumerate(annotations):
            logger.debug("Text %d: %r", idx, ann.text)

        if not annotations:
            logger.info("No text annotations found")
            return LookupResponse(
                has_text=False,
                message="No text detected in the image",
                status=LookupStatus.NO_TEXT_DETECTED,
            )

        plates = services.dedupe_candidates(services.extract_candidates(annotations))
        all_text = " | ".join(a.text for a in annotations)

        if not plates:
            return self._general_text_response(annotations, all_text)

        logger.info("License plates detected: %s", plates)
        joined = ", ".join(plates)
        response = dict(
            has_text=True,
            text=annotations,
            full_text=joined,
            all_text=all_text,
            license_plates=plates,
        )

        # Only the best candidate is ever sent to the registry
        try:
            vehicle = await self.lookup(plates[0])
        except VehicleNotFound:
            return LookupResponse(
                **response,
                message=f"License plate(s) detected: {joined} - Vehicle not found in database",
                status=LookupStatus.VEHICLE_NOT_FOUND,
            )
        except MotorDexError as exc:
            logger.error("Vehicle lookup failed: %s", exc)
            return LookupResponse(
                **response,
                message=f"License plate(s) detected: {joined} - Vehicle lookup failed, please try again",
                status=LookupStatus.REGISTRY_LOOKUP_FAILED,
            )

        return LookupResponse(
            **response,
            vehicle_data=vehicle,
            message=f"License plate detected: {plates[0]} - Vehicle found!",
            status=LookupStatus.VEHICLE_FOUND,
        )

    async def lookup(self, registration_number: str) -> VehicleData:
        plate = normalize_plate(registration_number)
        logger.info("Looking up vehicle: %s", plate)
        try:
            return await asyncio.to_thread(self.registry.lookup, plate)
        except MappingError as exc:
            logger.warning("Unexpected registry payload for %s: %s", plate, exc)
            raise VehicleNotFound(plate, reason="unexpected registry payload") from exc
        except VehicleNotFound:
            logger.warning("Vehicle not found: %s", plate)
            raise

    def _general_text_response(self, annotations: List[TextAnnotation], all_text: str) -> LookupResponse:
        text = services.meaningful_text(annotations[0].text)
        if not text:
            logger.info("No meaningful text after filtering - no license plates found")
            return LookupResponse(
                has_text=False,
                message="No meaningful text or license plates detected in the image",
                status=LookupStatus.NO_VALID_PLATE_FOUND,
            )

        logger.info("General text detected (no license plates): %r", text)
        return LookupResponse(
            has_text=True,
            text=annotations,
            full_text=text,
            all_text=all_text,
            message="Text detected but no valid UK license plates found",
            status=LookupStatus.NO_VALID_PLATE_FOUND,
        )
