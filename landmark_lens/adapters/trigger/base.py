from abc import ABC, abstractmethod
from typing import Callable


class TriggerSource(ABC):
    @abstractmethod
    def on_activate(self, callback: Callable[[], None]):
        """Register callback for each activation edge.

        Raises HardwareUnavailable if the input line cannot be opened.
        """
        ...

    def close(self):
        """Release the input line. Safe to call twice."""
