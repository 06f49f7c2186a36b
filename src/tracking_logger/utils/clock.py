import time
from typing import Callable, Optional

class FixedRateClock:
    """
    Next-fire bookkeeping for a host loop that runs faster than the sample rate.

    Each due() call that fires advances the target by exactly one interval, so
    the sample rate does not drift with the host's update jitter.
    """
    __slots__ = ("interval", "next_fire", "_now")

    def __init__(self, interval: float, now_func: Callable[[], float] = time.monotonic):
        if interval <= 0:
            raise ValueError("Interval must be positive.")
        self.interval: float = interval
        self.next_fire: Optional[float] = None
        self._now = now_func

    @property
    def is_armed(self) -> bool:
        return self.next_fire is not None

    def now(self) -> float:
        return self._now()

    def arm(self, now: Optional[float] = None) -> float:
        # First fire is one interval after arming, never at arming time
        start = self._now() if now is None else now
        self.next_fire = start + self.interval
        return self.next_fire

    def due(self, now: Optional[float] = None) -> bool:
        if self.next_fire is None:
            return False

        current = self._now() if now is None else now
        if current < self.next_fire:
            return False

        self.next_fire += self.interval
        return True
