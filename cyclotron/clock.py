"""Wall-clock frame timing."""

import time


class FrameClock:
    """
    Reports the seconds elapsed between successive ``get_delta`` calls.

    The first call measures from construction (or the last ``start``).

    Parameters
    ----------
    timer : callable, optional
        Monotonic time source in seconds, ``time.perf_counter`` by default.
    """

    def __init__(self, timer=time.perf_counter):
        self._timer = timer
        self.start()

    def start(self):
        self._last = self._timer()

    def get_delta(self):
        now = self._timer()
        delta = now - self._last
        self._last = now
        return delta
