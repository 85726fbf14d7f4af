from functools import lru_cache
import logging
from typing import List, Optional
from fastapi import APIRouter, UploadFile, File, HTTPException, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from motordex.ports.ocr_port import OcrPort
from motordex.ports.registry_port import VehicleRegistryPort
from motordex.adapters.ocr.google_vision_adapter import GoogleVisionAdapter
from motordex.adapters.ocr.tesseract_adapter import TesseractAdapter
from motordex.adapters.registry.vehicle_databases_adapter import VehicleDatabasesAdapter
from motordex.domain import image_utils
from motordex.domain.errors import OcrFailed, RegistryLookupFailed, VehicleNotFound
from motordex.domain.models import TextAnnotation
from motordex.domain.orchestrator import LookupOrchestrator
from motordex.core.config import Settings, settings

logger = logging.getLogger(__name__)

router = APIRouter()


class AnalyzeRequest(BaseModel):
    annotations: List[TextAnnotation] = Field(default_factory=list)


class VehicleLookupRequest(BaseModel):
    registrationNumber: Optional[str] = None


# Dependency Injection (Cached)
@lru_cache()
def get_settings() -> Settings:
    return settings

@lru_cache()
def get_ocr() -> OcrPort:
    if get_settings().ocr_engine.lower() == "tesseract":
        return TesseractAdapter()
    return GoogleVisionAdapter(get_settings())

@lru_cache()
def get_registry() -> VehicleRegistryPort:
    return VehicleDatabasesAdapter(get_settings())

@lru_cache()
def get_orchestrator() -> LookupOrchestrator:
    return LookupOrchestrator(get_settings(), get_registry())


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/upload", response_model=dict)
async def upload(
    image: UploadFile = File(...),
    ocr_service: OcrPort = Depends(get_ocr),
    orchestrator: LookupOrchestrator = Depends(get_orchestrator),
):
    if image.content_type not in image_utils.ALLOWED_CONTENT_TYPES:
        raise HTTPException(status_code=415, detail="Only JPG/PNG/WEBP supported")

    data = await image.read()
    if not data:
        raise HTTPException(status_code=400, detail="Empty file")

    if image_utils.decode_image(data) is None:
        raise HTTPException(status_code=400, detail="Could not decode image")

    try:
        annotations = await run_in_threadpool(ocr_service.annotate, data)
    except OcrFailed as exc:
        logger.error("Error processing image %s: %s", image.filename, exc)
        raise HTTPException(status_code=502, detail=str(exc))

    result = await orchestrator.process(annotations)
    return result.to_payload()


@router.post("/analyze", response_model=dict)
async def analyze(
    body: AnalyzeRequest,
    orchestrator: LookupOrchestrator = Depends(get_orchestrator),
):
    result = await orchestrator.process(body.annotations)
    return result.to_payload()


@router.post("/vehicle-lookup")
async def vehicle_lookup(
    body: VehicleLookupRequest,
    orchestrator: LookupOrchestrator = Depends(get_orchestrator),
):
    registration = (body.registrationNumber or "").strip()
    if not registration:
        return JSONResponse(status_code=400, content={"error": "Registration number is required"})

    try:
        vehicle = await orchestrator.lookup(registration)
    except VehicleNotFound:
        return JSONResponse(status_code=404, content={
            "success": False,
            "error": "Vehicle not found",
            "message": f"No vehicle found for registration number: {registration}",
        })
    except RegistryLookupFailed as exc:
        return JSONResponse(status_code=502, content={
            "success": False,
            "error": "Vehicle lookup failed",
            "message": str(exc),
        })

    return {
        "success": True,
        "vehicleData": vehicle.model_dump(mode="json", by_alias=True),
        "message": f"Vehicle details found for {registration}",
    }
