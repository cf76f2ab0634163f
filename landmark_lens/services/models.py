from pydantic import BaseModel
from typing import Literal, Optional

StateName = Literal["idle", "capturing", "classifying"]

class PanelOut(BaseModel):
    expanded: bool
    name: Optional[str] = None
    latitude: Optional[str] = None    # rounded display string, e.g. "48.86"
    longitude: Optional[str] = None

class StatusResponse(BaseModel):
    state: StateName
    busy: bool
    panel: PanelOut
    notice: Optional[str] = None      # transient "not found" toast, None once expired
    preview_seq: int                  # changes whenever /preview.jpg has a new frame
    last_error: Optional[str] = None
    trigger_available: bool           # False: GPIO button missing, /trigger still works
    logs: list[str]

class TriggerResponse(BaseModel):
    ok: bool
    error: Optional[str] = None

class HealthResponse(BaseModel):
    api: bool
    camera_adapter: str
    vision_adapter: str
    trigger_available: bool
    degraded: bool
    all_ok: bool
