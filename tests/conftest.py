"""Shared fixtures for linear-shorthand tests."""

import logging
from pathlib import Path
from unittest.mock import MagicMock, Mock

import pytest
import structlog

from linear_shorthand.config import Settings
from linear_shorthand.linear import LinearClient
from linear_shorthand.models import Metadata, Preferences, Project, Team, User
from linear_shorthand.preferences import PreferenceStore


@pytest.fixture
def sample_metadata() -> Metadata:
    """Create a small workspace: three teams, four projects, three users."""
    return Metadata(
        teams=(
            Team(id="team-eng", name="Engineering", key="ENG", created_at="2022-01-01T00:00:00.000Z", is_member=True),
            Team(id="team-des", name="Design", key="DES", created_at="2021-06-01T00:00:00.000Z", is_member=False),
            Team(id="team-ops", name="Operations", key="OPS", created_at="2023-03-01T00:00:00.000Z", is_member=True),
        ),
        projects=(
            Project(id="proj-web", name="Website", team_ids=("team-eng",)),
            Project(id="proj-mob", name="Mobile App", team_ids=("team-eng", "team-des")),
            Project(id="proj-brand", name="Brand Refresh", team_ids=("team-des",)),
            Project(id="proj-orphan", name="Orphan", team_ids=()),
        ),
        users=(
            User(id="user-ulysses", name="Ulysses Grant", display_name="u", email="ulysses@example.com"),
            User(id="user-alice", name="Alice Smith", display_name="alice", email="alice@example.com", is_me=True),
            User(id="user-bob", name="Bob Jones", display_name="bobby", email="bob.jones@example.com"),
        ),
    )


@pytest.fixture
def sample_preferences(sample_metadata: Metadata) -> Preferences:
    """Preferences holding the sample metadata and no choices."""
    return Preferences(metadata=sample_metadata)


@pytest.fixture
def store(tmp_path: Path, sample_preferences: Preferences) -> PreferenceStore:
    """Create a preference store already holding the sample metadata."""
    store = PreferenceStore(tmp_path / "user-data")
    store.write(sample_preferences)
    return store


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at the temporary data directory."""
    return Settings(token="lin_api_test", data_dir=tmp_path / "user-data")


@pytest.fixture
def mock_client(sample_metadata: Metadata) -> Mock:
    """Create a mock Linear client."""
    client = MagicMock(spec=LinearClient)
    client.fetch_metadata.return_value = sample_metadata
    return client


@pytest.fixture
def no_background_refresh(monkeypatch: pytest.MonkeyPatch) -> Mock:
    """Replace the background refresh with a mock so tests start no threads."""
    refresh = MagicMock()
    monkeypatch.setattr("linear_shorthand.metadata.start_background_refresh", refresh)
    return refresh


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Silence structlog so command output can be asserted on."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
