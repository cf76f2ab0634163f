"""
Tests for the StatusStore-backed presentation sink.
"""
import time

from landmark_lens.adapters.display.status_panel import NOT_FOUND_TEXT, StatusPanel
from landmark_lens.orchestrator.contracts import Frame, LandmarkResult
from landmark_lens.services.status_store import MAX_LOG_LINES


class TestStatusPanel:
    def test_show_result_expands_with_rounded_coordinates(self, status):
        StatusPanel(status).show_result(LandmarkResult("Eiffel Tower", 48.8584, 2.2945))
        assert status.panel.expanded
        assert status.panel.name == "Eiffel Tower"
        assert status.panel.latitude == "48.86"
        assert status.panel.longitude == "2.29"

    def test_hide_collapses_panel(self, status):
        panel = StatusPanel(status)
        panel.show_result(LandmarkResult("Eiffel Tower", 48.8584, 2.2945))
        panel.hide()
        assert not status.panel.expanded

    def test_show_empty_is_transient(self, status):
        panel = StatusPanel(status, notice_seconds=0.05)
        panel.show_empty()
        assert status.active_notice() == NOT_FOUND_TEXT
        assert not status.panel.expanded
        time.sleep(0.1)
        assert status.active_notice() is None

    def test_busy_and_preview(self, status):
        panel = StatusPanel(status)
        panel.set_busy(True)
        assert status.busy
        panel.show_preview(Frame(data=b"jpeg", request_id="r1"))
        assert status.preview_jpeg == b"jpeg"
        assert status.preview_seq == 1
        panel.set_busy(False)
        assert not status.busy

    def test_notice_seconds_from_env(self, status, monkeypatch):
        monkeypatch.setenv("NOTICE_SECONDS", "7.5")
        assert StatusPanel(status).notice_seconds == 7.5


class TestStatusStoreLog:
    def test_log_is_bounded(self, status):
        for i in range(MAX_LOG_LINES + 25):
            status.log(f"line {i}")
        logs = status.recent_logs()
        assert len(logs) == MAX_LOG_LINES
        assert logs[-1] == f"line {MAX_LOG_LINES + 24}"
