from veganscan.orchestrator.contracts import CameraState, EncodedImage, Facing
from veganscan.orchestrator.formats import PNG
from veganscan.orchestrator import errors


class CameraSession:
    """
    Owns the one camera handle a UI may hold.

      idle → requesting → active → idle        (capture / cancel / teardown)
                       ↘ failed → idle         (permission or device error)

    Use as a context manager so the device is released on every exit path.
    """

    def __init__(self, camera, codec, status_store, facing: Facing = "environment",
                 width: int = 1920, height: int = 1080):
        self.camera = camera
        self.codec = codec
        self.status = status_store
        self.facing = facing
        self.width = width
        self.height = height
        self.state: CameraState = "idle"
        self.error: str | None = None
        self._handle = None

    @property
    def handle(self):
        return self._handle

    @property
    def active(self) -> bool:
        return self.state == "active" and self._handle is not None

    def _goto(self, state: CameraState):
        self.status.log(f"camera: {self.state} -> {state}")
        self.state = state

    def open(self) -> bool:
        """Request the device. Returns False (and sets self.error) on failure."""
        if self.active:
            return True

        self.error = None
        self._goto("requesting")
        try:
            handle = self.camera.open(facing=self.facing, width=self.width, height=self.height)
        except errors.CameraError as e:
            self._handle = None
            self._goto("failed")
            self.error = e.message
            self.status.log(f"camera: {e.code}: {e.message}")
            self._goto("idle")
            return False
        except Exception as e:
            self._handle = None
            self._goto("failed")
            self.error = errors.DeviceUnavailable(str(e)).message
            self.status.log(f"camera: unexpected {type(e).__name__}: {e}")
            self._goto("idle")
            return False

        self._handle = handle
        self._goto("active")
        return True

    def capture(self) -> EncodedImage:
        """Encode the current frame as PNG and end the session.

        On failure the session stays active so the user can try again.
        """
        if not self.active:
            raise errors.CaptureFailed()

        try:
            frame = self.camera.read_frame(self._handle)
        except Exception as e:
            self.status.log(f"camera: read failed {type(e).__name__}: {e}")
            raise errors.CaptureFailed(f"Failed to capture photo: {e}") from e
        if frame is None:
            raise errors.CaptureFailed("Failed to capture photo: no frame available")
        try:
            png = self.codec.encode_png(frame)
        except errors.MediaError:
            raise
        except Exception as e:
            raise errors.CaptureFailed(f"Failed to capture photo: {e}") from e

        h, w = frame.shape[:2]
        self.status.log(f"camera: captured {w}x{h}")
        self.close()
        return EncodedImage(data=png, mime_type=PNG)

    def close(self):
        """Release the device. Safe to call at any time."""
        if self._handle is None and self.state == "idle":
            return
        handle, self._handle = self._handle, None
        try:
            if handle is not None:
                self.camera.release(handle)
        finally:
            self._goto("idle")
            self.error = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
