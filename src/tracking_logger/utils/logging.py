import time
import logging

class ThrottledLogger:
    """Emits at most one record per interval, prefixed with the number of suppressed calls."""

    def __init__(self, logger: logging.Logger, interval_sec: float = 5.0) -> None:
        self._logger = logger
        self._interval = interval_sec
        self._last_log_time: float | None = None
        self._counter = 0

    def log(self, level: int, message: str, *args, **kwargs) -> bool:
        self._counter += 1
        now = time.monotonic()

        if self._last_log_time is None or now - self._last_log_time >= self._interval:
            self._logger.log(level, "[%d] " + message, self._counter, *args, **kwargs)
            self._last_log_time = now
            self._counter = 0
            return True
        return False

    def debug(self, message: str, *args, **kwargs) -> bool:
        return self.log(logging.DEBUG, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> bool:
        return self.log(logging.WARNING, message, *args, **kwargs)
