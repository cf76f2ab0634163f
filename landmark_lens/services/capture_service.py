"""
Capture service: one frame per call, on a dedicated camera worker thread.
A second capture() while one is outstanding is rejected with Busy, not queued.
"""
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from landmark_lens.orchestrator.contracts import CaptureRequest, Frame
from landmark_lens.orchestrator.errors import Busy, CaptureFailed


class CaptureService:
    def __init__(self, camera, status_store):
        self.camera = camera
        self.status = status_store
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="CameraBackground")
        self._lock = threading.Lock()
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def start(self):
        self.camera.initialize()

    def capture(self, request: CaptureRequest) -> "Future[Frame]":
        with self._lock:
            if self._busy:
                raise Busy("capture already in progress")
            self._busy = True
        try:
            return self._executor.submit(self._capture_once, request)
        except RuntimeError as e:
            # executor already shut down
            self._set_idle()
            raise CaptureFailed("capture worker stopped") from e

    def _capture_once(self, request: CaptureRequest) -> Frame:
        try:
            self.status.log(f"capture: request={request.request_id}")
            data = self.camera.capture_bytes()
            if not data:
                raise CaptureFailed("camera returned no frame")
            self.status.log(f"capture: request={request.request_id} {len(data)} bytes")
            return Frame(data=data, request_id=request.request_id, rotation=self.camera.rotation,
                         on_release=self.camera.release_buffer)
        except CaptureFailed:
            raise
        except Exception as e:
            raise CaptureFailed(f"{type(e).__name__}: {e}") from e
        finally:
            self._set_idle()

    def _set_idle(self):
        with self._lock:
            self._busy = False

    def shutdown(self):
        self._executor.shutdown(wait=True)
        self.camera.shut_down()
