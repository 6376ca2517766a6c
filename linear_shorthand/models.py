"""Data models for linear-shorthand."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Team:
    """A Linear team."""

    id: str
    name: str
    key: str = ""
    created_at: str | None = None
    is_member: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "key": self.key,
            "createdAt": self.created_at,
            "isMember": self.is_member,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Team":
        return cls(
            id=data["id"],
            name=data["name"],
            key=data.get("key") or "",
            created_at=data.get("createdAt"),
            is_member=bool(data.get("isMember", False)),
        )


@dataclass(frozen=True)
class Project:
    """A Linear project and the teams that own it."""

    id: str
    name: str
    team_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "teamIds": list(self.team_ids)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        return cls(id=data["id"], name=data["name"], team_ids=tuple(data.get("teamIds") or ()))


@dataclass(frozen=True)
class User:
    """A Linear workspace member."""

    id: str
    name: str
    display_name: str | None = None
    email: str | None = None
    is_me: bool = False

    @property
    def label(self) -> str:
        """Name shown to the user: display name, falling back to the full name."""
        return self.display_name or self.name

    @property
    def email_local_part(self) -> str | None:
        if not self.email:
            return None
        return self.email.split("@")[0]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name,
            "email": self.email,
            "isMe": self.is_me,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=data["id"],
            name=data["name"],
            display_name=data.get("displayName"),
            email=data.get("email"),
            is_me=bool(data.get("isMe", False)),
        )


@dataclass(frozen=True)
class Priority:
    """One alias of a Linear priority level (0-4)."""

    id: int
    label: str


# Several aliases share a level; the first label listed for a level is its display label.
PRIORITIES: tuple[Priority, ...] = (
    Priority(0, "No priority"),
    Priority(1, "urgent"),
    Priority(1, "p0"),
    Priority(1, "1"),
    Priority(1, "u"),
    Priority(2, "high"),
    Priority(2, "p1"),
    Priority(2, "2"),
    Priority(2, "h"),
    Priority(3, "medium"),
    Priority(3, "p2"),
    Priority(3, "3"),
    Priority(3, "m"),
    Priority(4, "low"),
    Priority(4, "p3"),
    Priority(4, "4"),
    Priority(4, "l"),
)


def priority_label(priority_id: int | None) -> str | None:
    """Return the display label for a priority level."""
    for priority in PRIORITIES:
        if priority.id == priority_id:
            return priority.label
    return None


@dataclass(frozen=True)
class Metadata:
    """Snapshot of the workspace entities a command can refer to."""

    teams: tuple[Team, ...] = ()
    projects: tuple[Project, ...] = ()
    users: tuple[User, ...] = ()
    priorities: tuple[Priority, ...] = PRIORITIES

    @property
    def is_complete(self) -> bool:
        """True when none of the fetched entity lists is empty."""
        return bool(self.teams and self.projects and self.users)

    def team(self, team_id: str | None) -> Team | None:
        return next((t for t in self.teams if t.id == team_id), None)

    def project(self, project_id: str | None) -> Project | None:
        return next((p for p in self.projects if p.id == project_id), None)

    def user(self, user_id: str | None) -> User | None:
        return next((u for u in self.users if u.id == user_id), None)


@dataclass(frozen=True)
class Choice:
    """A persisted explicit choice and when it last changed (ms since epoch)."""

    value: str | int | None = None
    timestamp: int | None = None


CHOICE_FIELDS = ("teams", "projects", "users", "priorities")


@dataclass(frozen=True)
class Preferences:
    """Everything persisted between runs: metadata snapshot plus last explicit choices."""

    metadata: Metadata = field(default_factory=Metadata)
    teams_choice: Choice = field(default_factory=Choice)
    projects_choice: Choice = field(default_factory=Choice)
    users_choice: Choice = field(default_factory=Choice)
    priorities_choice: Choice = field(default_factory=Choice)

    def choice(self, name: str) -> Choice:
        return getattr(self, f"{name}_choice")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "teams": [t.to_dict() for t in self.metadata.teams],
            "projects": [p.to_dict() for p in self.metadata.projects],
            "users": [u.to_dict() for u in self.metadata.users],
        }
        for name in CHOICE_FIELDS:
            choice = self.choice(name)
            data[f"{name}Choice"] = choice.value
            data[f"{name}ChoiceTimestamp"] = choice.timestamp
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Preferences":
        metadata = Metadata(
            teams=tuple(Team.from_dict(t) for t in data.get("teams") or ()),
            projects=tuple(Project.from_dict(p) for p in data.get("projects") or ()),
            users=tuple(User.from_dict(u) for u in data.get("users") or ()),
        )
        choices = {
            f"{name}_choice": Choice(data.get(f"{name}Choice"), data.get(f"{name}ChoiceTimestamp"))
            for name in CHOICE_FIELDS
        }
        return cls(metadata=metadata, **choices)


@dataclass(frozen=True)
class Resolution:
    """Parameters resolved from a command, with the tokens nothing claimed."""

    team_id: str | None = None
    team_name: str | None = None
    project_id: str | None = None
    project_name: str | None = None
    assignee_id: str | None = None
    assignee_name: str | None = None
    priority_id: int | None = None
    priority_label: str | None = None
    unmatched: tuple[str, ...] = ()


@dataclass
class Issue:
    """An issue created on Linear."""

    id: str
    identifier: str
    url: str | None = None
    assignee_name: str | None = None
