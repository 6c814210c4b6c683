from abc import ABC, abstractmethod

class CameraAdapter(ABC):
    @abstractmethod
    def open(self, facing: str = "environment", width: int = 1920, height: int = 1080):
        """Claim a video device and return its handle.

        Raises one of errors.PermissionDenied / DeviceNotFound / DeviceBusy /
        DeviceUnavailable. Resolution and facing are best-effort.
        """
        ...

    @abstractmethod
    def read_frame(self, handle):
        """Return the current frame (BGR ndarray, native resolution) or None."""
        ...

    @abstractmethod
    def release(self, handle) -> None:
        """Stop every track held by handle. Must tolerate repeated calls."""
        ...
