"""Cache policy for workspace metadata."""

import threading
from dataclasses import replace

import structlog

from linear_shorthand.linear import LinearClient
from linear_shorthand.models import Preferences
from linear_shorthand.preferences import PreferenceStore

logger = structlog.get_logger()


def refresh_metadata(store: PreferenceStore, client: LinearClient) -> Preferences:
    """Fetch fresh metadata and persist it, keeping the stored choices."""
    metadata = client.fetch_metadata()
    previous = store.read()
    return store.write(replace(previous, metadata=metadata))


def _refresh_quietly(store: PreferenceStore, client: LinearClient) -> None:
    try:
        refresh_metadata(store, client)
        logger.debug("Background metadata refresh finished")
    except Exception as e:
        logger.warning("Background metadata refresh failed", error=str(e))


def start_background_refresh(store: PreferenceStore, client: LinearClient) -> threading.Thread:
    """Refresh the metadata cache on a separate thread.

    Callers must not join the returned thread: the current run keeps using the
    snapshot it already has and only the next run sees the refreshed cache.
    Failures are logged and never reach the caller.
    """
    thread = threading.Thread(target=_refresh_quietly, args=(store, client), name="metadata-refresh")
    thread.start()
    return thread


def load_metadata(store: PreferenceStore, client: LinearClient, background: bool = True) -> Preferences:
    """Return preferences with usable metadata.

    Metadata is stale when any of teams, projects or users is empty; it is then
    fetched synchronously and persisted. A fresh cache is returned as is and,
    if ``background`` is set, refreshed for the next run.
    """
    preferences = store.read()
    if not preferences.metadata.is_complete:
        logger.info("Metadata cache missing or incomplete, fetching")
        return store.write(replace(preferences, metadata=client.fetch_metadata()))

    logger.debug("Using cached metadata")
    if background:
        start_background_refresh(store, client)
    return preferences
