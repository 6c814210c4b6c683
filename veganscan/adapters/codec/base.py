from abc import ABC, abstractmethod

class ImageCodec(ABC):
    @abstractmethod
    def decode(self, data: bytes, declared_type: str):
        """Decode image bytes into a BGR raster (H x W x 3 uint8 ndarray)."""
        ...

    @abstractmethod
    def encode_png(self, raster) -> bytes:
        """Encode a raster as PNG bytes at its own dimensions."""
        ...
