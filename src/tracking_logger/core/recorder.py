import logging
import time
from pathlib import Path
from typing import Callable, Optional

from ..configs import AppSettings
from ..factories import create_session_paths, create_session_writer
from ..models import EventSample, InteractionMode, Pose, SessionLog
from ..utils import FixedRateClock, ThrottledLogger
from ..writers import SessionPaths, SessionWriter
from .classifier import InputClassifier
from .gaze import GazeResolver, GazeTarget
from .protocols import Collaborators
from .scheduler import CheckpointScheduler
from .state import RecorderState

logger = logging.getLogger(__name__)


class SessionRecorder:
    """
    Records one participant's session at a fixed tick rate.

    The host drives the recorder: start() once, then tick() (or update()
    from a faster loop) at the configured interval, and finalize() when the
    session ends. The recorder owns all session state; it starts no threads
    or timers of its own.
    """

    def __init__(
        self,
        collaborators: Collaborators,
        settings: AppSettings,
        writer: Optional[SessionWriter] = None,
        paths: Optional[SessionPaths] = None,
        classifier: Optional[InputClassifier] = None,
        resolver: Optional[GazeResolver] = None,
        now_func: Callable[[], float] = time.monotonic,
    ):
        self.collaborators = collaborators
        self.settings = settings
        self.interval: float = settings.recorder.tick_interval_s

        self.writer = writer or create_session_writer(settings)
        self.paths = paths or create_session_paths(settings, self.writer.storage)
        self.classifier = classifier or InputClassifier()
        self.resolver = resolver or GazeResolver(
            collaborators.world_probe,
            collaborators.ui_probe,
            max_distance=settings.recorder.max_gaze_distance,
        )
        self.scheduler = CheckpointScheduler(self.interval, settings.recorder.checkpoint_period_s)
        self.clock = FixedRateClock(self.interval, now_func)

        self._excluded_scenes = frozenset(settings.scenes.excluded_scenes)
        self._pause_scene = settings.scenes.pause_scene

        self._state = RecorderState.UNINITIALIZED
        self._log: Optional[SessionLog] = None
        self.output_path: Optional[Path] = None
        self.tick_count: int = 0
        self._final_result: bool = False

        self._state_logger = ThrottledLogger(logger, interval_sec=5.0)
        self._input_logger = ThrottledLogger(logger, interval_sec=1.0)

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is RecorderState.ACTIVE

    @property
    def log(self) -> Optional[SessionLog]:
        return self._log

    @property
    def participant_id(self) -> Optional[str]:
        return self._log.participant_id if self._log else None

    # --- Lifecycle ---

    def start(self, participant_id: Optional[str] = None, now: Optional[float] = None) -> Path:
        """
        Assigns the participant identity and output path, then arms the clock.

        An explicitly passed id wins over settings.participant_id; without
        either, the identity policy decides (storage scan or sentinel id).
        """
        if self._state is not RecorderState.UNINITIALIZED:
            logger.warning(f"Session already started for participant {self.participant_id}.")
            return self.output_path

        scene_id = self.collaborators.scene.current_scene()
        suffix = self.paths.suffix_for_scene(scene_id)
        pid = self._resolve_participant(participant_id or self.settings.participant_id, suffix)

        self._log = SessionLog(pid)
        self.output_path = self.paths.unique_path(
            self.paths.path_for(pid, suffix, self.writer.extension)
        )
        self.tick_count = 0
        self.clock.arm(now)
        self._state = RecorderState.ACTIVE

        logger.info(f"Tracking started for participant {pid}{suffix}. Output: {self.output_path}")
        return self.output_path

    def _resolve_participant(self, supplied: Optional[str], suffix: str) -> str:
        if supplied:
            return supplied

        identity = self.settings.identity
        if identity.policy == "scan":
            try:
                return self.paths.next_participant_id(suffix)
            except OSError:
                logger.exception("Participant id scan failed; falling back to the sentinel id.")
        else:
            logger.error(f"No participant id supplied. Recording as '{identity.sentinel_id}'.")
        return identity.sentinel_id

    def update(self, now: Optional[float] = None) -> Optional[EventSample]:
        """Fixed-update hook: ticks only when the next-fire time has been reached."""
        if not self.is_active or not self.clock.due(now):
            return None
        return self.tick()

    def tick(self) -> Optional[EventSample]:
        """
        Runs one pass of the sampling pipeline.

        Returns the recorded sample, or None when the current scene produces
        no sample (excluded or pause scene) or the recorder is not active.
        """
        if not self.is_active:
            self._state_logger.warning("Tick ignored, recorder is %s.", self._state.name)
            return None

        scene_id = self.collaborators.scene.current_scene()
        if scene_id in self._excluded_scenes:
            return None
        if scene_id == self._pause_scene:
            self._log.add_paused(self.interval)
            return None

        controls = self.collaborators.controls.read_controls()
        mode = self.classifier.classify_state(controls)
        self._input_logger.debug(
            "Trigger value: %.3f, joystick magnitude: %.3f -> %s",
            controls.trigger, controls.joystick_magnitude, mode.value,
        )

        pose = self.collaborators.pose.current_pose()
        target = self.resolver.resolve(mode, pose)

        sample = self._build_sample(scene_id, mode, pose, target)
        self._log.append(sample)
        self.tick_count += 1

        if self.scheduler.should_checkpoint(self.tick_count):
            self.checkpoint()

        return sample

    def checkpoint(self) -> bool:
        """Partial write of the full log, overwriting the previous checkpoint."""
        if not self.is_active:
            return False
        logger.info(f"Checkpoint: {len(self._log)} samples -> {self.output_path}")
        return self.writer.write(self._log, self.output_path)

    def finalize(self) -> bool:
        """
        Final, authoritative write. Terminal: later ticks are ignored.

        Returns True if the session file was written.
        """
        if self._state is RecorderState.UNINITIALIZED:
            logger.warning("Finalize called before the session was started. Nothing to write.")
            return False
        if self._state is RecorderState.TERMINATED:
            return self._final_result

        self._state = RecorderState.TERMINATED
        self._final_result = self.writer.write(self._log, self.output_path)

        if self._final_result:
            logger.info(
                f"Session saved to {self.output_path}: {len(self._log)} samples, "
                f"{self._log.paused_duration:.2f}s paused."
            )
        else:
            logger.error(f"Final write failed. {len(self._log)} samples could not be saved to {self.output_path}.")
        return self._final_result

    # --- Helpers ---

    def _build_sample(
        self,
        scene_id: str,
        mode: InteractionMode,
        pose: Pose,
        target: GazeTarget,
    ) -> EventSample:
        return EventSample(
            participant_id=self._log.participant_id,
            timestamp=self.tick_count * self.interval,
            position=pose.position,
            orientation_euler=pose.orientation_euler,
            interaction_mode=mode,
            map_open=mode.map_open,
            gaze_target_name=target.name,
            gaze_target_point=target.point,
            gaze_screen_point=self._screen_point(),
            scene_id=scene_id,
        )

    def _screen_point(self) -> Optional[tuple[float, float]]:
        estimator = self.collaborators.gaze_estimator
        if estimator is None:
            return self.settings.gaze.placeholder_screen_point
        return estimator.screen_point()
