from landmark_lens.orchestrator.contracts import Frame, LandmarkResult


class PresentationSink:
    """Display panel. Called only from the orchestrator's control thread."""

    def show_result(self, result: LandmarkResult):
        raise NotImplementedError

    def show_empty(self):
        raise NotImplementedError

    def hide(self):
        raise NotImplementedError

    def set_busy(self, busy: bool):
        raise NotImplementedError

    def show_preview(self, frame: Frame):
        """Optional: show the captured picture. Default: ignore."""
