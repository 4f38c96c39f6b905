"""Fixed-interval pacing for calls against the shared YouTube quota."""

import time
from typing import Callable


class Pacer:
    """Keep at least ``delay_seconds`` between successive external calls.

    The first call goes straight through. Each later call sleeps for whatever
    is left of the interval since the previous one started.
    """

    def __init__(
        self,
        delay_seconds: float,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.delay_seconds = delay_seconds
        self._sleep = sleep
        self._clock = clock
        self._last_call: float | None = None

    def wait(self) -> None:
        if self._last_call is not None and self.delay_seconds > 0:
            remaining = self.delay_seconds - (self._clock() - self._last_call)
            if remaining > 0:
                self._sleep(remaining)
        self._last_call = self._clock()
