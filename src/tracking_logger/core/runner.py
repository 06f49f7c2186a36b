import asyncio
import logging
from typing import Optional

from .recorder import SessionRecorder

logger = logging.getLogger(__name__)

class SessionRunner:
    """
    Host-side fixed-update loop for a SessionRecorder.

    Calls recorder.update() at the host rate from a single asyncio task; the
    recorder itself decides when a sample is due. Stopping always attempts
    the final write, including after cancellation.
    """
    def __init__(
        self,
        recorder: SessionRecorder,
        host_rate_hz: int = 50,
        participant_id: Optional[str] = None,
    ):
        if host_rate_hz <= 0:
            raise ValueError("host_rate_hz must be positive.")
        self.recorder = recorder
        self.participant_id = participant_id
        self._period_s = 1.0 / host_rate_hz
        self._stop_event = asyncio.Event()
        self._loop_task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None

    async def start(self) -> None:
        if self._loop_task is not None:
            return

        logger.info("Starting SessionRunner...")
        self.recorder.start(self.participant_id)
        self._stop_event.clear()
        self._loop_task = asyncio.create_task(self._update_loop())
        logger.info("SessionRunner active.")

    async def stop(self) -> bool:
        """Stops the update loop and performs the final write. Returns its result."""
        logger.info("Stopping SessionRunner...")
        self._stop_event.set()

        if self._loop_task:
            try:
                await self._loop_task
            except Exception:
                logger.exception("Update loop ended with an error.")
            self._loop_task = None

        saved = self.recorder.finalize()
        logger.info("SessionRunner stopped.")
        return saved

    async def run_for(self, duration_s: float) -> bool:
        """Records for duration_s seconds, or until cancelled."""
        await self.start()
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=duration_s)
        except asyncio.TimeoutError:
            pass
        finally:
            saved = await self.stop()
        return saved

    async def _update_loop(self) -> None:
        """Hot loop."""
        stop_event = self._stop_event
        period = self._period_s

        try:
            while not stop_event.is_set():
                try:
                    self.recorder.update()
                except Exception:
                    logger.exception("Recorder update failed; continuing with the next update.")

                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=period)
                except asyncio.TimeoutError:
                    pass

        except asyncio.CancelledError:
            logger.info("Runner loop cancelled unexpectedly.")
