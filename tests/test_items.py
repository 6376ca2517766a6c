"""Tests for launcher list items."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from linear_shorthand.items import (
    EPOCH,
    FilterItem,
    create_error_item,
    create_navigation_item,
    filter_by_words,
    format_relative_date,
    format_subtitle,
    metadata_items,
    render,
    sort_by_date_descending,
    wrap_results,
)
from linear_shorthand.models import Metadata

NOW = datetime(2024, 6, 15, 18, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=30), "just now"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(hours=8), "8 hours ago"),
        (timedelta(hours=10), "Today"),
        (timedelta(days=1, hours=2), "Yesterday"),
        (timedelta(days=3), "3 days ago"),
        (timedelta(days=7), "1 week ago"),
        (timedelta(days=20), "2 weeks ago"),
        (timedelta(days=45), "1 month ago"),
        (timedelta(days=200), "6 months ago"),
    ],
)
def test_format_relative_date(delta: timedelta, expected: str) -> None:
    """Test the relative date wording."""
    assert format_relative_date(NOW - delta, now=NOW) == expected


def test_format_relative_date_with_time() -> None:
    """Test the optional time suffix."""
    date = datetime(2024, 6, 14, 9, 5, tzinfo=timezone.utc)
    assert format_relative_date(date, now=NOW, include_time=True) == "Yesterday @ 9:05 AM"
    date = datetime(2024, 6, 15, 7, 30, tzinfo=timezone.utc)
    assert format_relative_date(date, now=NOW, include_time=True) == "Today @ 7:30 AM"


def test_format_relative_date_old() -> None:
    """Test that dates older than a year are shown in full."""
    assert format_relative_date(datetime(2022, 3, 4, tzinfo=timezone.utc), now=NOW) == "March 4, 2022"


def test_format_subtitle() -> None:
    """Test the subtitle layout with and without extra parts."""
    date = NOW - timedelta(days=3)
    assert format_subtitle("alice", date, now=NOW) == " ⮑ alice • 3 days ago"
    assert format_subtitle("alice", date, ["ENG-1", "Todo"], now=NOW) == " ⮑ alice • ENG-1 Todo • 3 days ago"


def test_filter_by_words() -> None:
    """Test that all words must match, in any order, case-insensitively."""
    items = [
        FilterItem(title="Fix login bug", subtitle=" ⮑ alice"),
        FilterItem(title="Login page redesign", subtitle=" ⮑ bob"),
    ]
    assert filter_by_words(items, "bug LOGIN") == [items[0]]
    assert filter_by_words(items, "login") == items
    assert filter_by_words(items, "bob") == [items[1]]
    assert filter_by_words(items, "  ") == items
    assert filter_by_words(items, None) == items


def test_navigation_item_sorts_last() -> None:
    """Test that navigation items are placed after dated items."""
    older = FilterItem(title="older", date=NOW - timedelta(days=2))
    newer = FilterItem(title="newer", date=NOW)
    navigation = create_navigation_item(title="Create a new issue", arg="")

    result = wrap_results([older, newer], navigation)

    assert [item.title for item in result] == ["newer", "older", "Create a new issue"]
    assert navigation.date == EPOCH


def test_sort_by_date_descending_is_stable() -> None:
    """Test that items with equal dates keep their order."""
    items = [FilterItem(title=str(i), date=NOW) for i in range(3)]
    assert [item.title for item in sort_by_date_descending(items)] == ["0", "1", "2"]


def test_metadata_items(sample_metadata: Metadata) -> None:
    """Test rendering cached entities."""
    items = metadata_items(sample_metadata)

    assert len(items) == 10
    eng = next(item for item in items if item.uid == "team-eng")
    assert eng.arg == "-ENG"
    assert "ENG" in eng.subtitle
    mobile = next(item for item in items if item.uid == "proj-mob")
    assert mobile.arg == "-MobileApp"
    assert "Engineering, Design" in mobile.subtitle
    bob = next(item for item in items if item.uid == "user-bob")
    assert bob.title == "bobby"
    assert bob.arg == "-bob.jones"


def test_render() -> None:
    """Test the launcher JSON document."""
    output = json.loads(render([create_error_item("Error occurred", "boom")]))
    assert output == {"items": [{"title": "Error occurred", "subtitle": "boom", "arg": "", "icon": {"path": "icon.png"}}]}
