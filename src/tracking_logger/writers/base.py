from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from ..models import SessionLog


class SessionEncoder(ABC):
    """
    Abstract Base Class for all session log encodings.

    An encoder turns a complete SessionLog into the bytes of one file and
    back. Encoders are stateless with respect to the log, so the same log
    can be encoded for every checkpoint and for the final write.
    """

    # File extension without the leading dot, e.g. "json".
    extension: ClassVar[str]

    # False when the file has no place for participant_id and paused_duration
    # outside the samples; SessionWriter then keeps them in a summary sidecar.
    stores_session_fields: ClassVar[bool] = True

    @abstractmethod
    def encode(self, log: SessionLog) -> bytes:
        """Serializes the whole log, samples in append order."""
        raise NotImplementedError

    @abstractmethod
    def decode(self, data: bytes, participant_id: Optional[str] = None) -> SessionLog:
        """
        Rebuilds a SessionLog from bytes produced by encode().

        Args:
            data: The encoded file content.
            participant_id: Fallback identity for encodings that only store it
                            per sample and therefore lose it for an empty log.
        """
        raise NotImplementedError
