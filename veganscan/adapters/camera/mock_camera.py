"""Mock camera: serves synthetic frames and can simulate acquisition failures."""
import numpy as np
from veganscan.adapters.camera.base import CameraAdapter

class MockHandle:
    def __init__(self, width: int, height: int, facing: str):
        self.width = width
        self.height = height
        self.facing = facing
        self.live = True

class MockCamera(CameraAdapter):
    def __init__(self, status_store, fail_with: Exception | None = None, width: int = 640, height: int = 480):
        self.status = status_store
        self.fail_with = fail_with       # raised by open() when set
        self.native = (width, height)    # resolution the "sensor" actually delivers
        self.live_handles: list[MockHandle] = []
        self.opens = 0
        self.drop_frames = False

    def open(self, facing: str = "environment", width: int = 1920, height: int = 1080):
        if self.fail_with is not None:
            self.status.log(f"mock_camera: open refused ({type(self.fail_with).__name__})")
            raise self.fail_with
        handle = MockHandle(*self.native, facing=facing)
        self.live_handles.append(handle)
        self.opens += 1
        self.status.log(f"mock_camera: open #{self.opens} ({facing}, asked {width}x{height})")
        return handle

    def read_frame(self, handle):
        if self.drop_frames or not handle.live:
            return None
        w, h = handle.width, handle.height
        # horizontal gradient so encoded frames are not trivially compressible
        row = np.linspace(0, 255, w, dtype=np.uint8)
        frame = np.zeros((h, w, 3), dtype=np.uint8)
        frame[:, :, 1] = row
        return frame

    def release(self, handle) -> None:
        if handle in self.live_handles:
            handle.live = False
            self.live_handles.remove(handle)
            self.status.log("mock_camera: released")
