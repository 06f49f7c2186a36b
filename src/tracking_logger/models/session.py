from typing import Iterable, Iterator

from .sample import EventSample


class SessionLog:
    """
    Append-only, ordered record of one participant's session.

    Insertion order is temporal order. Samples are never removed or replaced;
    the only other mutable figure is the time spent in the pause scene.
    """

    def __init__(
        self,
        participant_id: str,
        samples: Iterable[EventSample] = (),
        paused_duration: float = 0.0,
    ):
        self._participant_id = participant_id
        self._samples: list[EventSample] = []
        self._paused_duration = 0.0

        for sample in samples:
            self.append(sample)
        self.add_paused(paused_duration)

    @property
    def participant_id(self) -> str:
        return self._participant_id

    @property
    def samples(self) -> tuple[EventSample, ...]:
        return tuple(self._samples)

    @property
    def paused_duration(self) -> float:
        return self._paused_duration

    @property
    def elapsed(self) -> float:
        """Timestamp of the latest sample, 0.0 for an empty log."""
        return self._samples[-1].timestamp if self._samples else 0.0

    def append(self, sample: EventSample) -> None:
        if sample.participant_id != self._participant_id:
            raise ValueError(
                f"Sample belongs to participant {sample.participant_id!r}, "
                f"log belongs to {self._participant_id!r}."
            )
        self._samples.append(sample)

    def add_paused(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("Paused duration cannot decrease.")
        self._paused_duration += seconds

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[EventSample]:
        return iter(tuple(self._samples))

    def __repr__(self) -> str:
        return (
            f"<SessionLog participant={self._participant_id!r} "
            f"samples={len(self._samples)} paused={self._paused_duration:.2f}s>"
        )
