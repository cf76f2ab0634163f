ERR_BUSY = "BUSY"
ERR_HARDWARE_UNAVAILABLE = "HARDWARE_UNAVAILABLE"
ERR_CAPTURE_FAILED = "CAPTURE_FAILED"
ERR_CLASSIFICATION_FAILED = "CLASSIFICATION_FAILED"
ERR_NO_RESULT = "NO_RESULT"
ERR_UNKNOWN = "UNKNOWN"


class PipelineError(Exception):
    code = ERR_UNKNOWN


class HardwareUnavailable(PipelineError):
    """Trigger line could not be opened; the app keeps running without it."""
    code = ERR_HARDWARE_UNAVAILABLE


class Busy(PipelineError):
    code = ERR_BUSY


class CaptureFailed(PipelineError):
    code = ERR_CAPTURE_FAILED


class ClassificationFailed(PipelineError):
    code = ERR_CLASSIFICATION_FAILED

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class FrameReleased(PipelineError):
    pass
