import math

from ..models import ControllerState, InteractionMode

TRIGGER_THRESHOLD = 0.1
JOYSTICK_THRESHOLD = 0.1


class InputClassifier:
    """
    Maps raw controller readings to a discrete InteractionMode.

    The trigger counts as held at or above its threshold, the joystick only
    strictly above its threshold.
    """

    def __init__(
        self,
        trigger_threshold: float = TRIGGER_THRESHOLD,
        joystick_threshold: float = JOYSTICK_THRESHOLD,
    ):
        self.trigger_threshold = trigger_threshold
        self.joystick_threshold = joystick_threshold

    def classify(self, trigger_value: float, joystick_vector: tuple[float, float]) -> InteractionMode:
        holding_trigger = trigger_value >= self.trigger_threshold
        holding_joystick = math.hypot(*joystick_vector) > self.joystick_threshold

        if holding_trigger and holding_joystick:
            return InteractionMode.TRIGGER_AND_JOYSTICK
        if holding_trigger:
            return InteractionMode.TRIGGER
        if holding_joystick:
            return InteractionMode.JOYSTICK
        return InteractionMode.NONE

    def classify_state(self, state: ControllerState) -> InteractionMode:
        return self.classify(state.trigger, state.joystick)
