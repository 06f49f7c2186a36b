import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from ..configs import Encoding, SceneSettings
from .storage import FileStorage

logger = logging.getLogger(__name__)


class SessionPaths:
    """
    Names session files and hands out participant identities.

    Files are named <base_dir>/<prefix><id><suffix>.<ext>. The one-letter
    suffix encodes the scene category of a two-phase experiment: every
    participant records a primary-category session first and a
    secondary-category session later under the same numeric id.
    """

    def __init__(
        self,
        base_dir: Path,
        scenes: SceneSettings,
        prefix: str = "VR_VP_",
        extensions: Iterable[str] = tuple(e.value for e in Encoding),
        storage: Optional[FileStorage] = None,
    ):
        self.base_dir = base_dir
        self.scenes = scenes
        self.prefix = prefix
        self.extensions = tuple(extensions)
        self.storage = storage or FileStorage()
        self._name_pattern = re.compile(rf"^{re.escape(prefix)}(\d+)[A-Za-z]?$")

    def suffix_for_scene(self, scene_id: str) -> str:
        if not self.scenes.use_category_suffix:
            return ""
        if self.scenes.primary_marker in scene_id:
            return self.scenes.primary_suffix
        return self.scenes.secondary_suffix

    def path_for(self, participant_id: str, suffix: str, extension: str) -> Path:
        return self.base_dir / f"{self.prefix}{participant_id}{suffix}.{extension}"

    def has_session(self, participant_id: str, suffix: str) -> bool:
        """True if a file in any known encoding exists for this id and suffix."""
        return any(
            self.storage.exists(self.path_for(participant_id, suffix, ext))
            for ext in self.extensions
        )

    def highest_numeric_id(self) -> int:
        highest = 0
        for name in self.storage.list_names(self.base_dir):
            stem, _, extension = name.rpartition(".")
            if not stem or extension not in self.extensions:
                continue
            match = self._name_pattern.match(stem)
            if match:
                highest = max(highest, int(match.group(1)))
        return highest

    def next_participant_id(self, suffix: str) -> str:
        """
        Scans sequential ids starting at 1.

        Primary category (or no suffix): first id without any session file.
        Secondary category: first id whose primary session exists but whose
        secondary session does not.
        """
        upper = self.highest_numeric_id()

        if suffix == self.scenes.secondary_suffix and self.scenes.use_category_suffix:
            primary = self.scenes.primary_suffix
            for candidate in range(1, upper + 1):
                pid = str(candidate)
                if self.has_session(pid, primary) and not self.has_session(pid, suffix):
                    return pid
            logger.warning(
                "No %s-session awaits its %s-session; assigning a fresh participant id.",
                primary, suffix,
            )

        for candidate in range(1, upper + 2):
            pid = str(candidate)
            if not any(self.has_session(pid, s) for s in self._all_suffixes()):
                return pid

        # Unreachable: upper + 1 is always free
        raise RuntimeError("Participant id scan exhausted.")

    def unique_path(self, path: Path) -> Path:
        """Returns path, or the first free '<stem>_<n><ext>' variant if it is taken."""
        if not self.storage.exists(path):
            return path

        counter = 2
        while True:
            candidate = path.with_name(f"{path.stem}_{counter}{path.suffix}")
            if not self.storage.exists(candidate):
                logger.warning(f"Session file {path.name} already exists; writing to {candidate.name} instead.")
                return candidate
            counter += 1

    def _all_suffixes(self) -> tuple[str, ...]:
        if not self.scenes.use_category_suffix:
            return ("",)
        return (self.scenes.primary_suffix, self.scenes.secondary_suffix)
