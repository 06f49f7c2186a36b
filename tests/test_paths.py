from pathlib import Path

import pytest

from tracking_logger.configs import SceneSettings
from tracking_logger.writers import FileStorage, SessionPaths


def _touch(directory: Path, *names: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_text("x")


@pytest.fixture
def paths(tmp_path) -> SessionPaths:
    return SessionPaths(tmp_path, SceneSettings())


def test_suffix_from_scene_category(paths):
    assert paths.suffix_for_scene("Schloss_Innenhof") == "S"
    assert paths.suffix_for_scene("Marktplatz") == "M"
    assert paths.suffix_for_scene("Tutorial") == "M"


def test_suffix_disabled(tmp_path):
    paths = SessionPaths(tmp_path, SceneSettings(use_category_suffix=False))

    assert paths.suffix_for_scene("Schloss") == ""


def test_path_layout(paths, tmp_path):
    assert paths.path_for("3", "S", "csv") == tmp_path / "VR_VP_3S.csv"


def test_empty_directory_starts_at_one(paths):
    assert paths.next_participant_id("S") == "1"


def test_missing_directory_starts_at_one(tmp_path):
    paths = SessionPaths(tmp_path / "does-not-exist", SceneSettings())

    assert paths.next_participant_id("S") == "1"


def test_two_phase_scan(paths, tmp_path):
    _touch(
        tmp_path,
        "VR_VP_1S.csv", "VR_VP_2S.csv", "VR_VP_3S.csv",
        "VR_VP_1M.csv", "VR_VP_2M.csv",
    )

    assert paths.next_participant_id("M") == "3"
    assert paths.next_participant_id("S") == "4"


def test_scan_considers_every_encoding(paths, tmp_path):
    _touch(tmp_path, "VR_VP_1S.json", "VR_VP_2S.parquet")

    assert paths.next_participant_id("S") == "3"
    assert paths.next_participant_id("M") == "1"


def test_secondary_without_waiting_primary_gets_fresh_id(paths, tmp_path, caplog):
    _touch(tmp_path, "VR_VP_1S.csv", "VR_VP_1M.csv")

    assert paths.next_participant_id("M") == "2"
    assert "awaits" in caplog.text


def test_secondary_in_empty_directory_terminates(paths):
    assert paths.next_participant_id("M") == "1"


def test_scan_ignores_unrelated_files(paths, tmp_path):
    _touch(tmp_path, "VR_VP_9S.txt", "notes.csv", "VR_VP_P07S.csv")

    assert paths.next_participant_id("S") == "1"


def test_scan_without_suffixes(tmp_path):
    paths = SessionPaths(tmp_path, SceneSettings(use_category_suffix=False))
    _touch(tmp_path, "VR_VP_1.json", "VR_VP_2.csv")

    assert paths.next_participant_id("") == "3"


class MemoryStorage(FileStorage):
    """Storage without a local directory behind it."""

    def __init__(self, paths):
        self.paths = set(paths)

    def exists(self, path: Path) -> bool:
        return path in self.paths

    def list_names(self, directory: Path) -> list[str]:
        return [p.name for p in self.paths if p.parent == directory]


def test_scan_lists_through_storage():
    base = Path("/sessions")
    storage = MemoryStorage([base / "VR_VP_1S.json", base / "VR_VP_2S.json", base / "VR_VP_1M.json"])
    paths = SessionPaths(base, SceneSettings(), storage=storage)

    assert paths.highest_numeric_id() == 2
    assert paths.next_participant_id("M") == "2"
    assert paths.next_participant_id("S") == "3"


def test_scan_ignores_summary_sidecars(paths, tmp_path):
    _touch(tmp_path, "VR_VP_4S.csv.summary.json")

    assert paths.highest_numeric_id() == 0
    assert paths.next_participant_id("S") == "1"


def test_unique_path_keeps_free_path(paths, tmp_path):
    path = tmp_path / "VR_VP_5S.json"

    assert paths.unique_path(path) == path


def test_unique_path_never_overwrites(paths, tmp_path, caplog):
    _touch(tmp_path, "VR_VP_5S.json", "VR_VP_5S_2.json")

    assert paths.unique_path(tmp_path / "VR_VP_5S.json") == tmp_path / "VR_VP_5S_3.json"
    assert "already exists" in caplog.text
