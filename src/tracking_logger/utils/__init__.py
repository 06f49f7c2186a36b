from .clock import FixedRateClock
from .logging import ThrottledLogger

__all__ = ["FixedRateClock", "ThrottledLogger"]
