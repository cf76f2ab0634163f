import random
from typing import List, Optional

from landmark_lens.adapters.vision.base import VisionAdapter
from landmark_lens.orchestrator.contracts import GeoPoint, LandmarkCandidate

CATALOG = [
    LandmarkCandidate("Eiffel Tower", 0.92, [GeoPoint(48.8584, 2.2945)]),
    LandmarkCandidate("Colosseum", 0.88, [GeoPoint(41.8902, 12.4922)]),
    LandmarkCandidate("Taj Mahal", 0.90, [GeoPoint(27.1751, 78.0421)]),
]

class MockVision(VisionAdapter):
    def __init__(self, status_store, candidates: Optional[List[LandmarkCandidate]] = None):
        self.status = status_store
        self._candidates = candidates

    def detect_landmarks(self, image_bytes: bytes) -> List[LandmarkCandidate]:
        if self._candidates is not None:
            return list(self._candidates)
        # Mock: ignore image, return one random catalog entry
        chosen = random.choice(CATALOG)
        self.status.log(f"mock_vision: {chosen.name}")
        return [chosen]
