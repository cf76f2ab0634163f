import os
from contextlib import asynccontextmanager
from dataclasses import dataclass

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from landmark_lens.adapters.display.status_panel import StatusPanel
from landmark_lens.adapters.vision.mock_vision import MockVision
from landmark_lens.orchestrator import errors
from landmark_lens.orchestrator.contracts import DetectionState
from landmark_lens.orchestrator.state_machine import Orchestrator
from landmark_lens.services.capture_service import CaptureService
from landmark_lens.services.classification_client import ClassificationClient
from landmark_lens.services.models import HealthResponse, PanelOut, StatusResponse, TriggerResponse
from landmark_lens.services.status_store import StatusStore

load_dotenv(override=False)


@dataclass
class Runtime:
    status: StatusStore
    orchestrator: Orchestrator
    camera_name: str
    vision_name: str


def build_camera(status: StatusStore):
    # Camera adapter: CAMERA_ADAPTER env var, cv2 (default) | mock
    if os.getenv("CAMERA_ADAPTER", "cv2").lower() == "cv2":
        try:
            from landmark_lens.adapters.camera.cv2_camera import CV2Camera
            return CV2Camera(status)
        except ImportError:
            status.log("camera: opencv not installed, falling back to MockCamera")
    try:
        from landmark_lens.adapters.camera.mock_camera import MockCamera
        return MockCamera(status, image_dir=os.getenv("MOCK_CAMERA_DIR"))
    except Exception as e:
        status.log(f"camera: no usable camera adapter: {type(e).__name__}: {e}")
        raise


def build_vision(status: StatusStore):
    # Vision adapter: VISION_ADAPTER env var, google (default) | mock
    if os.getenv("VISION_ADAPTER", "google").lower() == "google":
        from landmark_lens.adapters.vision.cloud_vision import CloudVision
        vision = CloudVision(status)
        if vision.ready:
            return vision
        status.log("vision: CloudVision not ready, falling back to MockVision")
    return MockVision(status)


def build_triggers(status: StatusStore):
    # TRIGGER_ADAPTER env var, gpio (default) | none; POST /trigger always works
    if os.getenv("TRIGGER_ADAPTER", "gpio").lower() == "gpio":
        from landmark_lens.adapters.trigger.gpio_button import GpioButtonTrigger
        return [GpioButtonTrigger(status)]
    return []


def build_runtime() -> Runtime:
    status = StatusStore()
    camera = build_camera(status)
    vision = build_vision(status)
    status.log(f"camera adapter: {type(camera).__name__}")
    status.log(f"vision adapter: {type(vision).__name__}")
    orch = Orchestrator(
        capture=CaptureService(camera, status),
        classifier=ClassificationClient(vision, status),
        sink=StatusPanel(status),
        status_store=status,
        triggers=build_triggers(status),
    )
    return Runtime(status=status, orchestrator=orch,
                   camera_name=type(camera).__name__, vision_name=type(vision).__name__)


def create_app(runtime_factory=build_runtime) -> FastAPI:
    holder: dict[str, Runtime] = {}

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        rt = runtime_factory()
        holder["rt"] = rt
        rt.orchestrator.start()
        try:
            yield
        finally:
            rt.orchestrator.shutdown()

    app = FastAPI(title="landmark-lens", lifespan=lifespan)

    def runtime() -> Runtime:
        rt = holder.get("rt")
        if rt is None:
            raise HTTPException(status_code=503, detail="not started")
        return rt

    @app.get("/status", response_model=StatusResponse)
    def get_status():
        status = runtime().status
        panel = status.panel
        return StatusResponse(
            state=status.state.value,
            busy=status.busy,
            panel=PanelOut(expanded=panel.expanded, name=panel.name,
                           latitude=panel.latitude, longitude=panel.longitude),
            notice=status.active_notice(),
            preview_seq=status.preview_seq,
            last_error=status.last_error,
            trigger_available=status.trigger_available,
            logs=status.recent_logs(),
        )

    @app.post("/trigger", response_model=TriggerResponse)
    def trigger_once():
        """Software button press, same path as the GPIO button."""
        rt = runtime()
        if rt.orchestrator.state is not DetectionState.IDLE:
            rt.status.log("TRIGGER ignored: busy")
            return TriggerResponse(ok=False, error=errors.ERR_BUSY.lower())
        rt.status.log("TRIGGER via http")
        rt.orchestrator.trigger()
        return TriggerResponse(ok=True)

    @app.get("/preview.jpg")
    def preview():
        jpeg = runtime().status.preview_jpeg
        if jpeg is None:
            raise HTTPException(status_code=404, detail="no frame captured yet")
        return Response(content=jpeg, media_type="image/jpeg",
                        headers={"Cache-Control": "no-store"})

    @app.get("/health", response_model=HealthResponse)
    def health():
        rt = runtime()
        running = rt.orchestrator.running
        return HealthResponse(
            api=True,
            camera_adapter=rt.camera_name,
            vision_adapter=rt.vision_name,
            trigger_available=rt.status.trigger_available,
            degraded=not rt.status.trigger_available,
            all_ok=running,
        )

    return app


app = create_app()
