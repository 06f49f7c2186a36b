class CheckpointScheduler:
    """
    Decides after which ticks the session log is flushed to storage.

    A checkpoint falls on every period_ticks-th recorded tick, never on tick 0,
    which bounds the data lost on a crash to one checkpoint period.
    """

    def __init__(self, tick_interval_s: float, checkpoint_period_s: float):
        if tick_interval_s <= 0 or checkpoint_period_s <= 0:
            raise ValueError("Tick interval and checkpoint period must be positive.")
        self.period_ticks = max(1, round(checkpoint_period_s / tick_interval_s))

    def should_checkpoint(self, tick_count: int) -> bool:
        return tick_count > 0 and tick_count % self.period_ticks == 0
