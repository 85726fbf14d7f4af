class MotorDexError(Exception):
    """Base class for failures raised by the plate lookup core and its adapters."""


class MissingCredential(MotorDexError):
    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"{setting} is not set in environment variables")


class OcrFailed(MotorDexError):
    """The OCR collaborator could not annotate the image."""


class VehicleNotFound(MotorDexError):
    """The registry confirmed it has no record for the plate."""

    def __init__(self, registration_number: str, reason: str = ""):
        self.registration_number = registration_number
        self.reason = reason
        detail = f"No vehicle found for registration number: {registration_number}"
        if reason:
            detail = f"{detail} ({reason})"
        super().__init__(detail)


class RegistryLookupFailed(MotorDexError):
    """Timeout, network error, 5xx or malformed body from the registry. May be transient."""

    def __init__(self, registration_number: str, reason: str):
        self.registration_number = registration_number
        self.reason = reason
        super().__init__(f"Vehicle lookup failed for {registration_number}: {reason}")


class MappingError(MotorDexError):
    """The registry payload does not have the expected shape."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Registry payload is missing '{path}'")
