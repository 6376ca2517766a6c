"""Launcher list items built from cached metadata."""

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from linear_shorthand.models import Metadata

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
DEFAULT_ICON = "icon.png"


@dataclass
class FilterItem:
    """One selectable row in the launcher."""

    title: str
    subtitle: str = ""
    arg: str = ""
    icon_path: str = DEFAULT_ICON
    source: str | None = None
    date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    uid: str | None = None

    def to_dict(self) -> dict[str, Any]:
        item: dict[str, Any] = {
            "title": self.title,
            "subtitle": self.subtitle,
            "arg": self.arg,
            "icon": {"path": self.icon_path},
        }
        if self.uid:
            item["uid"] = self.uid
        return item


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _clock(value: datetime) -> str:
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {'AM' if value.hour < 12 else 'PM'}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit if count == 1 else unit + 's'} ago"


def format_relative_date(date: datetime, now: datetime | None = None, include_time: bool = False) -> str:
    """Describe ``date`` relative to ``now``, e.g. "3 hours ago" or "Yesterday @ 9:15 AM"."""
    date = _aware(date)
    now = _aware(now) if now else datetime.now(timezone.utc)
    elapsed = max((now - date).total_seconds(), 0)
    days = int(elapsed // 86400)
    time_str = f" @ {_clock(date)}" if include_time else ""

    if days == 0:
        hours = int(elapsed // 3600)
        if hours == 0:
            minutes = int(elapsed // 60)
            return "just now" if minutes < 2 else f"{minutes} minutes ago"
        if hours <= 8:
            return _plural(hours, "hour")
        return f"Today{time_str}"
    if days == 1:
        return f"Yesterday{time_str}"
    if days < 7:
        return f"{days} days ago{time_str}"
    if days < 30:
        return _plural(days // 7, "week")
    if days < 365:
        return _plural(days // 30, "month")
    return f"{date:%B} {date.day}, {date.year}"


def format_subtitle(
    user: str | None,
    date: datetime,
    additional: Sequence[str] = (),
    include_time: bool = False,
    now: datetime | None = None,
) -> str:
    """Build a ``⮑ user • extra • date`` subtitle."""
    parts = [" ⮑", user, "•"]
    if additional:
        parts.extend([*additional, "•"])
    parts.append(format_relative_date(date, now=now, include_time=include_time))
    return " ".join(p for p in parts if p)


def sort_by_date_descending(items: Iterable[FilterItem]) -> list[FilterItem]:
    return sorted(items, key=lambda item: _aware(item.date), reverse=True)


def create_navigation_item(title: str, arg: str, subtitle: str = "", icon_path: str = DEFAULT_ICON, uid: str | None = None) -> FilterItem:
    """Navigation items are dated at the epoch so they sort last."""
    return FilterItem(title=title, subtitle=subtitle, arg=arg, icon_path=icon_path, date=EPOCH, uid=uid)


def create_error_item(title: str, subtitle: str = "", arg: str = "") -> FilterItem:
    return FilterItem(title=title, subtitle=subtitle, arg=arg, date=EPOCH)


def wrap_results(items: Iterable[FilterItem], navigation_item: FilterItem) -> list[FilterItem]:
    return sort_by_date_descending([*items, navigation_item])


def filter_by_words(items: Iterable[FilterItem], query: str | None) -> list[FilterItem]:
    """Keep items whose title and subtitle contain every query word, in any order."""
    words = (query or "").lower().split()
    if not words:
        return list(items)
    return [item for item in items if all(w in f"{item.title} {item.subtitle}".lower() for w in words)]


def _parse_date(value: str | None) -> datetime:
    if not value:
        return EPOCH
    return _aware(datetime.fromisoformat(value.replace("Z", "+00:00")))


def metadata_items(metadata: Metadata) -> list[FilterItem]:
    """Render cached teams, projects and users as launcher items."""
    items = []
    for team in metadata.teams:
        created = _parse_date(team.created_at)
        extra = [team.key] if team.key else []
        items.append(
            FilterItem(
                title=team.name,
                subtitle=format_subtitle("team", created, extra),
                arg=f"-{team.key or team.name}",
                source="teams",
                date=created,
                uid=team.id,
            )
        )
    for project in metadata.projects:
        owners = [team.name for team in metadata.teams if team.id in project.team_ids]
        items.append(
            FilterItem(
                title=project.name,
                subtitle=" ⮑ project" + (f" • {', '.join(owners)}" if owners else ""),
                arg=f"-{project.name.replace(' ', '')}",
                source="projects",
                date=EPOCH,
                uid=project.id,
            )
        )
    for user in metadata.users:
        items.append(
            FilterItem(
                title=user.label,
                subtitle=" ⮑ user" + (f" • {user.email}" if user.email else ""),
                arg=f"-{user.email_local_part or user.name.split()[0]}",
                source="users",
                date=EPOCH,
                uid=user.id,
            )
        )
    return items


def render(items: Iterable[FilterItem]) -> str:
    """Serialize items as the launcher's ``{"items": [...]}`` JSON document."""
    return json.dumps({"items": [item.to_dict() for item in items]})
