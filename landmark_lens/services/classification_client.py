"""
Classification client: sends a frame to the vision adapter on its own
network worker thread, separate from the camera worker.
"""
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from landmark_lens.orchestrator.contracts import Frame, LandmarkCandidate, LandmarkResult
from landmark_lens.orchestrator.errors import ClassificationFailed


def best_result(candidates: List[LandmarkCandidate]) -> Optional[LandmarkResult]:
    """Highest-scoring candidate that carries a location, or None.

    Ties keep the service's order, so an ordered response yields its first entry.
    """
    located = [c for c in candidates if c.locations]
    if not located:
        return None
    best = max(located, key=lambda c: c.score)  # max() keeps the first of equal scores
    loc = best.locations[0]
    return LandmarkResult(name=best.name, latitude=loc.latitude, longitude=loc.longitude)


class ClassificationClient:
    def __init__(self, vision, status_store):
        self.vision = vision
        self.status = status_store
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="CloudThread")

    def classify(self, frame: Frame) -> "Future[Optional[LandmarkResult]]":
        try:
            return self._executor.submit(self._classify_once, frame)
        except RuntimeError as e:
            raise ClassificationFailed("classification worker stopped") from e

    def _classify_once(self, frame: Frame) -> Optional[LandmarkResult]:
        self.status.log(f"classify: request={frame.request_id}")
        try:
            candidates = self.vision.detect_landmarks(frame.data)
        except ClassificationFailed:
            raise
        except Exception as e:
            raise ClassificationFailed(f"{type(e).__name__}: {e}") from e
        result = best_result(candidates)
        if result is None:
            self.status.log(f"classify: request={frame.request_id} no landmark")
        else:
            self.status.log(f"classify: request={frame.request_id} -> {result.name}")
        return result

    def shutdown(self):
        self._executor.shutdown(wait=True)
