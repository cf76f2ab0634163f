import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from landmark_lens.orchestrator.errors import FrameReleased


class DetectionState(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    CLASSIFYING = "classifying"


@dataclass(frozen=True)
class CaptureRequest:
    request_id: str
    timestamp: float

    @classmethod
    def new(cls) -> "CaptureRequest":
        return cls(request_id=uuid.uuid4().hex[:8], timestamp=time.time())


@dataclass
class Frame:
    """One captured image (JPEG bytes) plus its rotation hint.

    Must be released exactly once; a second release raises FrameReleased.
    """
    data: bytes
    request_id: str
    rotation: int = 0          # degrees, 0 on the reference board
    on_release: Optional[Callable[[], None]] = None
    released: bool = field(default=False, init=False)

    def release(self):
        if self.released:
            raise FrameReleased(f"frame {self.request_id} already released")
        self.released = True
        if self.on_release is not None:
            self.on_release()


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LandmarkCandidate:
    name: str
    score: float
    locations: List[GeoPoint] = field(default_factory=list)


@dataclass(frozen=True)
class LandmarkResult:
    name: str                  # e.g. "Eiffel Tower"
    latitude: float
    longitude: float
