import queue
import threading

from landmark_lens.orchestrator import errors
from landmark_lens.orchestrator.contracts import CaptureRequest, DetectionState
from landmark_lens.orchestrator.errors import Busy, CaptureFailed, ClassificationFailed, FrameReleased, HardwareUnavailable

_STOP = object()


class Orchestrator:
    """
    Button -> capture -> cloud classify -> panel, one run at a time.

    All state (DetectionState, the held Frame) lives on a single control
    thread that drains one event queue. Trigger sources and worker
    completions only post to that queue, so handlers never re-enter.

        IDLE --trigger--> CAPTURING --frame--> CLASSIFYING --done--> IDLE
                              |                                      ^
                              +------------capture failed------------+
    """

    def __init__(self, capture, classifier, sink, status_store, triggers=()):
        self.capture = capture
        self.classifier = classifier
        self.sink = sink
        self.status = status_store
        self.triggers = list(triggers)

        self._events = queue.Queue()
        self._settled = threading.Condition()
        self._pending = 0
        self._thread = None
        self._accepting = False
        self._closed = False

        self._state = DetectionState.IDLE
        self._request = None
        self._frame = None

    @property
    def state(self) -> DetectionState:
        return self._state

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ---- lifecycle -------------------------------------------------------

    def start(self):
        if self._thread is not None:
            return
        try:
            self.capture.start()
            self._thread = threading.Thread(target=self._run, name="ControlThread", daemon=True)
            self._thread.start()
            self._accepting = True
            self._register_triggers()
        except Exception:
            self.status.log("orchestrator: start failed, releasing resources")
            self.shutdown()
            raise
        self.status.log("orchestrator: started")

    def _register_triggers(self):
        available = False
        for source in self.triggers:
            try:
                source.on_activate(self.trigger)
                available = True
            except HardwareUnavailable as e:
                self.status.last_error = errors.ERR_HARDWARE_UNAVAILABLE
                self.status.log(f"orchestrator: trigger unavailable, running without it: {e}")
        self.status.trigger_available = available

    def shutdown(self):
        if self._closed:
            return
        self._closed = True
        self._accepting = False
        self.status.log("orchestrator: shutting down")

        # joins both workers; their completions land in the queue ahead of _STOP
        for worker in (self.capture, self.classifier):
            try:
                worker.shutdown()
            except Exception as e:
                self.status.log(f"orchestrator: worker shutdown error {type(e).__name__}: {e}")

        if self._thread is not None and self._thread is not threading.current_thread():
            self._events.put(_STOP)
            self._thread.join()
        self._thread = None

        self._release_frame()
        self._request = None
        self._set_state(DetectionState.IDLE)

        for source in self.triggers:
            try:
                source.close()
            except Exception as e:
                self.status.log(f"orchestrator: trigger close error {type(e).__name__}: {e}")
        self.status.log("orchestrator: stopped")

    # ---- public, any thread ----------------------------------------------

    def trigger(self):
        """Activation event. Safe to call from any thread."""
        if self._closed:
            return
        self._post(self._on_trigger)

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until no events are pending and state is IDLE."""
        with self._settled:
            return self._settled.wait_for(
                lambda: self._pending == 0 and self._state is DetectionState.IDLE, timeout)

    # ---- control thread --------------------------------------------------

    def _post(self, fn, *args):
        with self._settled:
            self._pending += 1
        self._events.put((fn, args))

    def _run(self):
        while True:
            item = self._events.get()
            if item is _STOP:
                return
            fn, args = item
            try:
                fn(*args)
            except Exception as e:
                self.status.last_error = errors.ERR_UNKNOWN
                self.status.log(f"orchestrator: handler error {type(e).__name__}: {e}")
            finally:
                with self._settled:
                    self._pending -= 1
                    self._settled.notify_all()

    def _set_state(self, state: DetectionState):
        self._state = state
        self.status.state = state

    def _on_trigger(self):
        if not self._accepting:
            self.status.log("orchestrator: trigger ignored, shutting down")
            return
        if self._state is not DetectionState.IDLE:
            self.status.log(f"orchestrator: trigger ignored, state={self._state.value}")
            return

        request = CaptureRequest.new()
        self._request = request
        self.sink.set_busy(True)
        self.sink.hide()
        self._set_state(DetectionState.CAPTURING)
        self.status.log(f"orchestrator: request={request.request_id} capturing")

        try:
            future = self.capture.capture(request)
        except Busy:
            self.status.log("orchestrator: camera busy, trigger ignored")
            self._finish()
            return
        except CaptureFailed as e:
            self.status.last_error = e.code
            self.status.log(f"orchestrator: request={request.request_id} capture failed: {e}")
            self._finish()
            return
        future.add_done_callback(lambda f: self._post(self._on_captured, request, f))

    def _on_captured(self, request, future):
        exc = future.exception()
        if exc is not None:
            self.status.last_error = getattr(exc, "code", errors.ERR_UNKNOWN)
            self.status.log(f"orchestrator: request={request.request_id} capture failed: {exc}")
            self._finish()
            return

        self._frame = future.result()
        if not self._accepting or request is not self._request:
            self.status.log(f"orchestrator: request={request.request_id} frame dropped, shutting down")
            self._finish()
            return

        self.sink.show_preview(self._frame)
        self._set_state(DetectionState.CLASSIFYING)
        self.status.log(f"orchestrator: request={request.request_id} classifying")
        try:
            future = self.classifier.classify(self._frame)
        except ClassificationFailed as e:
            self._complete(request, None, e)
            return
        future.add_done_callback(lambda f: self._post(self._on_classified, request, f))

    def _on_classified(self, request, future):
        exc = future.exception()
        self._complete(request, None if exc is not None else future.result(), exc)

    def _complete(self, request, result, error):
        try:
            self._release_frame()
            self.sink.set_busy(False)
            if error is not None:
                # panel stays collapsed, no notice
                self.status.last_error = getattr(error, "code", errors.ERR_UNKNOWN)
                self.status.log(f"orchestrator: request={request.request_id} classification failed: {error}")
            elif result is None:
                self.status.last_error = errors.ERR_NO_RESULT
                self.status.log(f"orchestrator: request={request.request_id} no landmark found")
                self.sink.show_empty()
            else:
                self.status.last_error = None
                self.status.log(f"orchestrator: request={request.request_id} done -> {result.name}")
                self.sink.show_result(result)
        finally:
            self._request = None
            self._set_state(DetectionState.IDLE)

    def _finish(self):
        try:
            self._release_frame()
            self.sink.set_busy(False)
        finally:
            self._request = None
            self._set_state(DetectionState.IDLE)

    def _release_frame(self):
        frame, self._frame = self._frame, None
        if frame is None:
            return
        try:
            frame.release()
        except FrameReleased as e:
            self.status.log(f"orchestrator: {e}")
