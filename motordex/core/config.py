from pydantic import BaseModel
import os
from dotenv import load_dotenv

from motordex.domain.errors import MissingCredential

load_dotenv()


class Settings(BaseModel):
    google_api_key: str = os.getenv("GOOGLE_API_KEY", "")
    vehicle_db_api_key: str = os.getenv("VEHICLE_DB_API_KEY", "")

    vehicle_db_url: str = os.getenv(
        "VEHICLE_DB_URL",
        "https://api.vehicledatabases.com/uk-registration-decode"
    )
    vision_url: str = os.getenv(
        "VISION_URL",
        "https://vision.googleapis.com/v1/images:annotate"
    )

    # "vision" (Google Cloud Vision) or "tesseract" (local)
    ocr_engine: str = os.getenv("OCR_ENGINE", "vision")

    lookup_timeout: float = float(os.getenv("LOOKUP_TIMEOUT", "10"))
    ocr_timeout: float = float(os.getenv("OCR_TIMEOUT", "30"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def require(self, field: str) -> str:
        """Returns a credential setting or raises MissingCredential when it is blank."""
        value = getattr(self, field, "")
        if not value or not str(value).strip():
            raise MissingCredential(field.upper())
        return value


settings = Settings()
