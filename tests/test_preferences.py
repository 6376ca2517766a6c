"""Tests for the preference store."""

import json
from pathlib import Path

import pytest

from linear_shorthand.errors import CacheError
from linear_shorthand.models import Metadata, Preferences
from linear_shorthand.preferences import CACHE_FILE_NAME, PreferenceStore


@pytest.fixture
def empty_store(tmp_path: Path) -> PreferenceStore:
    """Create a store with no file on disk."""
    return PreferenceStore(tmp_path / "user-data")


def test_read_missing_file(empty_store: PreferenceStore) -> None:
    """Test that a missing file reads as empty preferences."""
    assert empty_store.read() == Preferences()


@pytest.mark.parametrize("content", ["", "not json {", "[]", '{"teams": [{"name": "no id"}]}'])
def test_read_corrupt_file(empty_store: PreferenceStore, content: str) -> None:
    """Test that empty or corrupt files read as empty preferences."""
    empty_store.data_dir.mkdir(parents=True)
    empty_store.cache_file.write_text(content)
    assert empty_store.read() == Preferences()


def test_load_raises_cache_error(empty_store: PreferenceStore) -> None:
    """Test that the strict loader reports corrupt files."""
    empty_store.data_dir.mkdir(parents=True)
    empty_store.cache_file.write_text("not json {")
    with pytest.raises(CacheError):
        empty_store._load()


def test_write_then_read_round_trips_choices(
    empty_store: PreferenceStore, sample_metadata: Metadata, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that explicit choices survive a write and read."""
    monkeypatch.setattr("linear_shorthand.preferences._now_ms", lambda: 1_700_000_000_000)

    written = empty_store.write(
        Preferences(metadata=sample_metadata),
        {"teams": "team-eng", "projects": "proj-web", "users": "user-alice", "priorities": 2},
    )
    read = empty_store.read()

    assert read == written
    assert read.metadata == sample_metadata
    assert read.teams_choice.value == "team-eng"
    assert read.projects_choice.value == "proj-web"
    assert read.users_choice.value == "user-alice"
    assert read.priorities_choice.value == 2
    assert read.teams_choice.timestamp == 1_700_000_000_000


def test_unspecified_choices_keep_value_and_timestamp(
    empty_store: PreferenceStore, sample_metadata: Metadata, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that a write only stamps the fields it changes."""
    monkeypatch.setattr("linear_shorthand.preferences._now_ms", lambda: 1000)
    empty_store.write(Preferences(metadata=sample_metadata), {"teams": "team-eng"})

    monkeypatch.setattr("linear_shorthand.preferences._now_ms", lambda: 2000)
    empty_store.write(empty_store.read(), {"teams": None, "users": "user-bob"})

    read = empty_store.read()
    assert read.teams_choice.value == "team-eng"
    assert read.teams_choice.timestamp == 1000
    assert read.users_choice.value == "user-bob"
    assert read.users_choice.timestamp == 2000
    assert read.projects_choice.value is None
    assert read.projects_choice.timestamp is None


def test_no_priority_is_a_choice(empty_store: PreferenceStore) -> None:
    """Test that priority 0 is stored rather than treated as unset."""
    empty_store.write(Preferences(), {"priorities": 0})
    assert empty_store.read().priorities_choice.value == 0


def test_file_format(empty_store: PreferenceStore, sample_metadata: Metadata) -> None:
    """Test the keys written to the JSON document."""
    empty_store.write(Preferences(metadata=sample_metadata), {"teams": "team-eng"})
    data = json.loads((empty_store.data_dir / CACHE_FILE_NAME).read_text())

    assert data["teamsChoice"] == "team-eng"
    assert isinstance(data["teamsChoiceTimestamp"], int)
    assert data["projectsChoice"] is None
    assert data["projectsChoiceTimestamp"] is None
    assert [t["id"] for t in data["teams"]] == ["team-eng", "team-des", "team-ops"]
    assert data["projects"][1]["teamIds"] == ["team-eng", "team-des"]


def test_pretty_write(empty_store: PreferenceStore) -> None:
    """Test that pretty output is indented."""
    empty_store.write(Preferences(), pretty=True)
    assert "\n  " in empty_store.cache_file.read_text()
