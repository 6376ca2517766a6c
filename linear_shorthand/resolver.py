"""Resolve flag tokens into issue parameters and fill the gaps from preferences."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from functools import reduce
from typing import Any

import structlog

from linear_shorthand.matching import best_match
from linear_shorthand.models import Metadata, Preferences, Priority, Project, Resolution, Team, User, priority_label

logger = structlog.get_logger()


@dataclass(frozen=True)
class _Pass:
    """How one entity kind claims a token."""

    kind: str
    candidates: Callable[[Resolution, Metadata], Sequence[Any]]
    strings_of: Callable[[Any], Iterable[str | None]]
    assign: Callable[[Resolution, Any], Resolution]


def _team_projects(resolution: Resolution, metadata: Metadata) -> list[Project]:
    if resolution.team_id is None:
        return list(metadata.projects)
    return [p for p in metadata.projects if resolution.team_id in p.team_ids]


def _assign_priority(resolution: Resolution, priority: Priority) -> Resolution:
    return replace(resolution, priority_id=priority.id, priority_label=priority_label(priority.id))


def _assign_user(resolution: Resolution, user: User) -> Resolution:
    return replace(resolution, assignee_id=user.id, assignee_name=user.label)


def _assign_team(resolution: Resolution, team: Team) -> Resolution:
    return replace(resolution, team_id=team.id, team_name=team.name)


def _assign_project(resolution: Resolution, project: Project) -> Resolution:
    return replace(resolution, project_id=project.id, project_name=project.name)


# Priority goes first so short aliases like -h are not taken as user names;
# project goes last so it can be restricted to the resolved team.
PASSES: tuple[_Pass, ...] = (
    _Pass("priority", lambda r, m: m.priorities, lambda p: [p.label], _assign_priority),
    _Pass("assignee", lambda r, m: m.users, lambda u: [u.name, u.display_name, u.email_local_part], _assign_user),
    _Pass("team", lambda r, m: m.teams, lambda t: [t.name, t.key], _assign_team),
    _Pass("project", _team_projects, lambda p: [p.name], _assign_project),
)


def _apply_pass(resolution: Resolution, step: _Pass, metadata: Metadata) -> Resolution:
    candidates = step.candidates(resolution, metadata)
    # Later tokens win, so scan from the end.
    for index in reversed(range(len(resolution.unmatched))):
        token = resolution.unmatched[index]
        match = best_match(token, candidates, step.strings_of)
        if match is not None:
            logger.debug("Resolved token", kind=step.kind, token=token)
            remaining = resolution.unmatched[:index] + resolution.unmatched[index + 1 :]
            return replace(step.assign(resolution, match), unmatched=remaining)
    return resolution


def resolve_parameters(flag_tokens: Sequence[str], metadata: Metadata) -> Resolution:
    """Match flag tokens to a priority, assignee, team and project.

    Each kind claims at most one token. Tokens no kind claims are left in
    ``Resolution.unmatched`` in their original order.
    """
    start = Resolution(unmatched=tuple(flag_tokens))
    resolution = reduce(lambda acc, step: _apply_pass(acc, step, metadata), PASSES, start)
    logger.debug("Resolved parameters", unmatched=list(resolution.unmatched))
    return resolution


def _created_at(team: Team) -> datetime:
    if not team.created_at:
        return datetime.max.replace(tzinfo=timezone.utc)
    created = datetime.fromisoformat(team.created_at.replace("Z", "+00:00"))
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created


def default_team_id(metadata: Metadata) -> str | None:
    """Return the oldest team the caller is a member of."""
    teams = sorted((t for t in metadata.teams if t.is_member), key=_created_at)
    return teams[0].id if teams else None


def apply_defaults(resolution: Resolution, preferences: Preferences) -> Resolution:
    """Fill unresolved parameters from persisted choices and the metadata snapshot.

    Explicitly resolved fields are never overwritten.
    """
    metadata = preferences.metadata
    team_id = resolution.team_id
    project_id = resolution.project_id

    if team_id is None and project_id is None:
        team_id = preferences.teams_choice.value
        project_id = preferences.projects_choice.value
    elif team_id is None:
        project = metadata.project(project_id)
        if project is not None and project.team_ids:
            team_id = project.team_ids[0]
        else:
            team_id = preferences.teams_choice.value

    if not team_id and not project_id:
        team_id = default_team_id(metadata)

    assignee_id = resolution.assignee_id
    if assignee_id is None:
        assignee_id = preferences.users_choice.value

    priority_id = resolution.priority_id
    if priority_id is None:
        priority_id = preferences.priorities_choice.value

    team_name = resolution.team_name
    if team_id and not team_name:
        team = metadata.team(team_id)
        team_name = team.name if team else None

    project_name = resolution.project_name
    if project_id and not project_name:
        project = metadata.project(project_id)
        project_name = project.name if project else None

    assignee_name = resolution.assignee_name
    if assignee_id and not assignee_name:
        user = metadata.user(assignee_id)
        assignee_name = user.label if user else None

    label = resolution.priority_label
    if priority_id is not None and not label:
        label = priority_label(priority_id)

    return replace(
        resolution,
        team_id=team_id,
        team_name=team_name,
        project_id=project_id,
        project_name=project_name,
        assignee_id=assignee_id,
        assignee_name=assignee_name,
        priority_id=priority_id,
        priority_label=label,
    )
