import io
import numpy as np
import pytest
from PIL import Image

from veganscan.services.status_store import StatusStore

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def make_image_bytes(fmt: str, width: int = 100, height: int = 100) -> bytes:
    """Encode a synthetic RGB gradient with Pillow (fmt: PNG, JPEG, GIF, WEBP, BMP)."""
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[:, :, 0] = np.linspace(0, 255, width, dtype=np.uint8)
    arr[:, :, 2] = 200
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def status():
    return StatusStore()
