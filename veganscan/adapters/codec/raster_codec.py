"""
Off-screen raster codec.

Decoding goes through Pillow, which reads all four supported formats
(OpenCV builds commonly lack GIF). GIF and WEBP animations yield their
first frame. Encoding goes through cv2.imencode so every image leaving
the client is a PNG of the raster's own dimensions.
"""
import io
import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError
from veganscan.adapters.codec.base import ImageCodec
from veganscan.orchestrator import errors

class RasterCodec(ImageCodec):
    def decode(self, data: bytes, declared_type: str):
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.seek(0)
                rgb = np.array(img.convert("RGB"))
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise errors.InvalidFileType(f"Could not read {declared_type} image: {e}") from e
        return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)

    def encode_png(self, raster) -> bytes:
        if raster is None or not isinstance(raster, np.ndarray) or raster.ndim not in (2, 3) or raster.size == 0:
            raise errors.ContextUnavailable()
        ok, buf = cv2.imencode(".png", raster)
        if not ok:
            raise errors.CaptureFailed("Failed to capture photo: PNG encoding failed")
        return bytes(buf)
