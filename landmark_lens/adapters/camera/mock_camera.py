"""Mock camera: serves JPEGs from a directory, or a synthetic grey frame."""
import random
from pathlib import Path

from landmark_lens.adapters.camera.base import CameraAdapter

class MockCamera(CameraAdapter):
    def __init__(self, status_store, image_dir: str | None = None):
        self.status = status_store
        self.image_dir = Path(image_dir) if image_dir else None
        self.captures = 0

    def capture_bytes(self) -> bytes | None:
        self.captures += 1
        if self.image_dir is not None:
            jpegs = sorted(self.image_dir.glob("*.jpg"))
            if not jpegs:
                self.status.log(f"mock_camera: no images in {self.image_dir}")
                return None
            chosen = random.choice(jpegs)
            self.status.log(f"mock_camera: serving {chosen.name}")
            return chosen.read_bytes()
        return self._synthetic_frame()

    def _synthetic_frame(self) -> bytes | None:
        # directory mode works without opencv
        import cv2
        import numpy as np

        img = np.full((480, 640, 3), 128, dtype=np.uint8)
        ok, buf = cv2.imencode(".jpg", img)
        if not ok:
            return None
        self.status.log("mock_camera: serving synthetic frame")
        return bytes(buf)
