from abc import ABC, abstractmethod

class CameraAdapter(ABC):
    rotation: int = 0  # degrees; the capture pipeline treats frames as upright

    def initialize(self):
        """Open the device. Default: open lazily on first capture."""

    @abstractmethod
    def capture_bytes(self) -> bytes | None:
        """Capture one frame. Returns JPEG bytes or None on failure."""
        ...

    def release_buffer(self):
        """Give a delivered frame's buffer back to the device. Default: nothing held."""

    def shut_down(self):
        """Release the device. Must tolerate being called twice."""
