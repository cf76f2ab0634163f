"""
Presentation sink backed by the StatusStore.
The kiosk page polls GET /status and renders the bottom sheet from it.
"""
import os

from landmark_lens.adapters.display.base import PresentationSink
from landmark_lens.orchestrator.contracts import Frame, LandmarkResult
from landmark_lens.orchestrator.rounding import format_coordinate
from landmark_lens.services.status_store import PanelState

NOT_FOUND_TEXT = "Unable to detect the Location"


class StatusPanel(PresentationSink):
    def __init__(self, status_store, notice_seconds: float | None = None):
        self.status = status_store
        self.notice_seconds = notice_seconds if notice_seconds is not None else float(os.getenv("NOTICE_SECONDS", "2.0"))

    def show_result(self, result: LandmarkResult):
        self.status.panel = PanelState(
            expanded=True,
            name=result.name,
            latitude=format_coordinate(result.latitude),
            longitude=format_coordinate(result.longitude),
        )
        self.status.log(f"panel: {result.name} ({self.status.panel.latitude}, {self.status.panel.longitude})")

    def show_empty(self):
        self.status.set_notice(NOT_FOUND_TEXT, self.notice_seconds)
        self.status.log(f"panel: notice '{NOT_FOUND_TEXT}'")

    def hide(self):
        self.status.panel.expanded = False

    def set_busy(self, busy: bool):
        self.status.set_busy(busy)

    def show_preview(self, frame: Frame):
        self.status.preview_jpeg = frame.data
        self.status.preview_seq += 1
