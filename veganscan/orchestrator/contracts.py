from dataclasses import dataclass
from typing import Literal

CameraState = Literal["idle", "requesting", "active", "failed"]
Facing = Literal["environment", "user"]

@dataclass(frozen=True)
class EncodedImage:
    data: bytes                # encoded pixels
    mime_type: str             # one of formats.SUPPORTED_FORMATS

@dataclass(frozen=True)
class UploadedFile:
    name: str
    content_type: str          # declared type, e.g. "image/jpeg" | "text/plain"
    data: bytes
