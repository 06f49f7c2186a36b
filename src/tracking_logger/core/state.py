from enum import Enum, auto


class RecorderState(Enum):
    """
    Lifecycle of a SessionRecorder.

    Transitions only go forward: a terminated recorder is never reused.
    """
    UNINITIALIZED = auto()  # Created, no participant or output path yet.
    ACTIVE = auto() # Session started, ticks produce samples.
    TERMINATED = auto() # Final write attempted, ticks are ignored.
