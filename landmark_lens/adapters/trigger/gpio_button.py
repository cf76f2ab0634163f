"""
Physical push button on a GPIO line (gpiozero).
Wired pressed-when-low with the internal pull-up, as on the doorbell board.
BUTTON_GPIO_PIN env var (default BCM21) selects the line.
"""
import os
from typing import Callable

from landmark_lens.adapters.trigger.base import TriggerSource
from landmark_lens.orchestrator.errors import HardwareUnavailable


class GpioButtonTrigger(TriggerSource):
    def __init__(self, status_store, pin: str | None = None, bounce_time: float | None = None):
        self.status = status_store
        self.pin = pin or os.getenv("BUTTON_GPIO_PIN", "BCM21")
        self.bounce_time = bounce_time if bounce_time is not None else float(os.getenv("BUTTON_BOUNCE_S", "0.05"))
        self._button = None

    def on_activate(self, callback: Callable[[], None]):
        try:
            from gpiozero import Button
        except ImportError as e:
            raise HardwareUnavailable("gpiozero not installed") from e

        try:
            self._button = Button(self.pin, pull_up=True, bounce_time=self.bounce_time)
        except Exception as e:
            # gpiozero raises its own GPIOZeroError tree plus OSError from the pin factory
            raise HardwareUnavailable(f"cannot open GPIO {self.pin}: {e}") from e

        def _pressed():
            self.status.log("gpio_button: pressed")
            callback()

        self._button.when_pressed = _pressed
        self.status.log(f"gpio_button: registered on {self.pin}")

    def close(self):
        if self._button is None:
            return
        button, self._button = self._button, None
        button.when_pressed = None
        button.close()
        self.status.log(f"gpio_button: released {self.pin}")
