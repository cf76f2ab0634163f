from typing import List

from landmark_lens.orchestrator.contracts import LandmarkCandidate


class VisionAdapter:
    def detect_landmarks(self, image_bytes: bytes) -> List[LandmarkCandidate]:
        """Return landmark candidates for a JPEG image, best match first.

        An empty list means the service answered but found nothing.
        Failures raise ClassificationFailed.
        """
        raise NotImplementedError
