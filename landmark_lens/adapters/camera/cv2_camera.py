"""
OpenCV webcam capture adapter.
CAMERA_INDEX env var (default 0) selects the webcam device.
"""
import os
import cv2
from landmark_lens.adapters.camera.base import CameraAdapter

IMAGE_WIDTH = 640
IMAGE_HEIGHT = 480
JPEG_QUALITY = 85

class CV2Camera(CameraAdapter):
    def __init__(self, status_store, index: int | None = None):
        self.status = status_store
        self._index = index if index is not None else int(os.getenv("CAMERA_INDEX", "0"))
        self._cap = None

    def initialize(self):
        self._open()

    def _open(self):
        if self._cap is None or not self._cap.isOpened():
            self._cap = cv2.VideoCapture(self._index)
            if not self._cap.isOpened():
                self.status.log(f"cv2_camera: failed to open device {self._index}")
                return
            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, IMAGE_WIDTH)
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, IMAGE_HEIGHT)
            self.status.log(f"cv2_camera: opened device {self._index}")

    def capture_bytes(self) -> bytes | None:
        self._open()
        if self._cap is None or not self._cap.isOpened():
            return None
        # drop the buffered frame so the picture matches the button press
        self._cap.grab()
        ret, frame = self._cap.read()
        if not ret or frame is None:
            self.status.log("cv2_camera: frame capture failed")
            return None
        ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY])
        if not ok:
            return None
        return bytes(buf)

    def shut_down(self):
        if self._cap is not None:
            if self._cap.isOpened():
                self._cap.release()
            self._cap = None
            self.status.log("cv2_camera: released")
