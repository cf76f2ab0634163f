import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Optional, List

from landmark_lens.orchestrator.contracts import DetectionState

_logger = logging.getLogger("landmark_lens")

MAX_LOG_LINES = 200


@dataclass
class PanelState:
    expanded: bool = False
    name: Optional[str] = None
    latitude: Optional[str] = None   # display strings, already rounded
    longitude: Optional[str] = None


@dataclass
class StatusStore:
    busy: bool = False
    state: DetectionState = DetectionState.IDLE
    last_error: Optional[str] = None
    panel: PanelState = field(default_factory=PanelState)
    notice: Optional[str] = None
    notice_expires_at: float = 0.0   # time.monotonic() deadline
    preview_jpeg: Optional[bytes] = None
    preview_seq: int = 0             # bumped on every new preview frame
    trigger_available: bool = False  # False = degraded, /trigger only
    logs: List[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def set_busy(self, v: bool):
        self.busy = v

    def set_notice(self, text: str, seconds: float):
        self.notice = text
        self.notice_expires_at = time.monotonic() + seconds

    def active_notice(self) -> Optional[str]:
        if self.notice and time.monotonic() < self.notice_expires_at:
            return self.notice
        return None

    def log(self, msg: str):
        _logger.info(msg)
        with self._lock:
            self.logs.append(msg)
            if len(self.logs) > MAX_LOG_LINES:
                self.logs = self.logs[-MAX_LOG_LINES:]

    def recent_logs(self) -> List[str]:
        with self._lock:
            return list(self.logs)
