import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from motordex.api.routers import router
from motordex.core.config import settings
from motordex.core.logging import configure_logging
from motordex.domain.errors import MissingCredential

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="MotorDex Plate Lookup Service", version="1.0.0")
app.include_router(router)


@app.exception_handler(MissingCredential)
async def missing_credential_handler(request: Request, exc: MissingCredential):
    logger.error("%s", exc)
    return JSONResponse(
        status_code=503,
        content={"error": "Service not configured", "detail": str(exc)},
    )
