"""
OpenCV webcam capture adapter.
CAMERA_INDEX env var (default 0) selects the webcam device.
CAMERA_REAR_INDEX, when set, is used when an outward-facing sensor is preferred.

OpenCV reports no reason when a device fails to open, so on Linux the
device node is inspected to tell a missing camera from a permission
problem from a device claimed by another process.
"""
import os
import sys
import cv2
from veganscan.adapters.camera.base import CameraAdapter
from veganscan.orchestrator import errors

class CV2Camera(CameraAdapter):
    def __init__(self, status_store, index: int | None = None, rear_index: int | None = None):
        self.status = status_store
        self._index = index if index is not None else int(os.getenv("CAMERA_INDEX", "0"))
        rear = os.getenv("CAMERA_REAR_INDEX")
        self._rear_index = rear_index if rear_index is not None else (int(rear) if rear else None)

    def _device_index(self, facing: str) -> int:
        if facing == "environment" and self._rear_index is not None:
            return self._rear_index
        return self._index

    def _classify_open_failure(self, index: int) -> errors.CameraError:
        if not sys.platform.startswith("linux"):
            return errors.DeviceUnavailable(f"failed to open device {index}")
        node = f"/dev/video{index}"
        if not os.path.exists(node):
            return errors.DeviceNotFound()
        if not os.access(node, os.R_OK | os.W_OK):
            return errors.PermissionDenied()
        return errors.DeviceBusy()

    def open(self, facing: str = "environment", width: int = 1920, height: int = 1080):
        index = self._device_index(facing)
        cap = cv2.VideoCapture(index)
        if not cap.isOpened():
            cap.release()
            err = self._classify_open_failure(index)
            self.status.log(f"cv2_camera: failed to open device {index} ({err.code})")
            raise err
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        # a device held by another process often opens but never yields a frame
        ret, _ = cap.read()
        if not ret:
            cap.release()
            self.status.log(f"cv2_camera: device {index} opened but produced no frame")
            raise errors.DeviceBusy()
        w = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        h = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.status.log(f"cv2_camera: device {index} open at {w}x{h}")
        return cap

    def read_frame(self, handle):
        ret, frame = handle.read()
        if not ret or frame is None:
            self.status.log("cv2_camera: frame capture failed")
            return None
        return frame

    def release(self, handle) -> None:
        if handle is not None and handle.isOpened():
            handle.release()
