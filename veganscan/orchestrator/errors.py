"""
Error taxonomy shared by the client (camera, upload) and the relay service.

Every error carries a stable code, a user-facing default message and the
HTTP status the relay answers with when it reaches the service boundary.
"""
from veganscan.orchestrator.formats import unsupported_format_message

ERR_PERMISSION_DENIED  = "PERMISSION_DENIED"
ERR_DEVICE_NOT_FOUND   = "DEVICE_NOT_FOUND"
ERR_DEVICE_BUSY        = "DEVICE_BUSY"
ERR_DEVICE_UNAVAILABLE = "DEVICE_UNAVAILABLE"
ERR_INVALID_FILE_TYPE  = "INVALID_FILE_TYPE"
ERR_UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
ERR_CAPTURE_FAILED     = "CAPTURE_FAILED"
ERR_CONTEXT            = "CONTEXT_UNAVAILABLE"
ERR_MISSING_INPUT      = "MISSING_INPUT"
ERR_ANALYSIS_FAILED    = "ANALYSIS_FAILED"

_CAMERA_PREFIX = "Could not access camera. "


class VeganScanError(Exception):
    code = "UNKNOWN"
    http_status = 500
    default_message = "An error occurred"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# ── Camera acquisition ──────────────────────────────────────────────────────

class CameraError(VeganScanError):
    pass

class PermissionDenied(CameraError):
    code = ERR_PERMISSION_DENIED
    default_message = _CAMERA_PREFIX + "Please make sure you have granted camera permissions."

class DeviceNotFound(CameraError):
    code = ERR_DEVICE_NOT_FOUND
    default_message = _CAMERA_PREFIX + "No camera found on your device."

class DeviceBusy(CameraError):
    code = ERR_DEVICE_BUSY
    default_message = _CAMERA_PREFIX + "Camera is already in use by another application."

class DeviceUnavailable(CameraError):
    code = ERR_DEVICE_UNAVAILABLE
    default_message = _CAMERA_PREFIX + "Camera API not available"

    def __init__(self, detail: str | None = None):
        super().__init__(_CAMERA_PREFIX + detail if detail else None)


# ── Upload ingestion / frame rendering ──────────────────────────────────────

class MediaError(VeganScanError):
    http_status = 400

class InvalidFileType(MediaError):
    code = ERR_INVALID_FILE_TYPE
    default_message = "Please upload an image file"

class UnsupportedFormat(MediaError):
    code = ERR_UNSUPPORTED_FORMAT
    default_message = unsupported_format_message()

class CaptureFailed(MediaError):
    code = ERR_CAPTURE_FAILED
    default_message = "Camera not ready"

class ContextUnavailable(CaptureFailed):
    code = ERR_CONTEXT
    default_message = "Could not create raster surface"


# ── Relay ───────────────────────────────────────────────────────────────────

class RelayError(VeganScanError):
    pass

class MissingInput(RelayError):
    code = ERR_MISSING_INPUT
    http_status = 400
    default_message = "No image provided"

class AnalysisFailed(RelayError):
    code = ERR_ANALYSIS_FAILED
    http_status = 500
    default_message = "Failed to analyze image"


class VisionError(Exception):
    """Raised by vision adapters; never shown to callers of the relay."""

    def __init__(self, message: str, transient: bool = False):
        super().__init__(message)
        self.transient = transient
