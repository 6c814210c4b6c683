import base64
import binascii
import re

SUPPORTED_FORMATS = ["image/png", "image/jpeg", "image/gif", "image/webp"]
PNG = "image/png"

_DATA_URI = re.compile(r"^data:([^;,]*)(?:;[^,]*)?,(.*)$", re.DOTALL)


def unsupported_format_message() -> str:
    return f"Unsupported image format. Please use one of: {', '.join(SUPPORTED_FORMATS)}"


def is_supported(mime_type: str | None) -> bool:
    return (mime_type or "").strip().lower() in SUPPORTED_FORMATS


def to_data_uri(image) -> str:
    b64 = base64.standard_b64encode(image.data).decode("utf-8")
    return f"data:{image.mime_type};base64,{b64}"


def parse_data_uri(uri: str) -> tuple[str, str]:
    """Split a data URI into (lower-cased mime type, base64 payload).

    Returns ("", "") when the string is not a data URI at all.
    """
    m = _DATA_URI.match(uri.strip())
    if not m:
        return "", ""
    return m.group(1).strip().lower(), m.group(2).strip()


def decode_payload(payload: str) -> bytes | None:
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None
