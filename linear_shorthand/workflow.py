"""From raw shorthand to a created Linear issue."""

from dataclasses import dataclass, field
from typing import Any

import structlog

from linear_shorthand.config import Settings
from linear_shorthand.errors import ValidationError
from linear_shorthand.linear import LinearClient
from linear_shorthand.metadata import load_metadata
from linear_shorthand.models import Issue, Preferences, Resolution
from linear_shorthand.parser import parse_input
from linear_shorthand.preferences import PreferenceStore
from linear_shorthand.resolver import apply_defaults, resolve_parameters

logger = structlog.get_logger()


@dataclass(frozen=True)
class TitleValidation:
    valid: bool
    message: str | None = None


def validate_title(title: str) -> TitleValidation:
    """Require a title of at least two words."""
    words = title.split()
    if not words:
        return TitleValidation(False, "Please provide a title")
    if len(words) == 1:
        return TitleValidation(False, "Please provide a more descriptive title with multiple words")
    return TitleValidation(True)


@dataclass(frozen=True)
class Workflow:
    """Everything derived from one command before the issue is submitted."""

    input: str
    preferences: Preferences
    params: Resolution
    title: str
    title_validation: TitleValidation
    explicit_choices: dict[str, Any] = field(default_factory=dict)


def _client_for(settings: Settings) -> LinearClient:
    return LinearClient(settings.require_token(), dry_run=settings.dry_run, timeout=settings.timeout)


def process_workflow(
    raw: str,
    settings: Settings,
    store: PreferenceStore | None = None,
    client: LinearClient | None = None,
) -> Workflow:
    """Parse, resolve and default the parameters of a command and validate its title.

    Nothing is written and no issue is created here.
    """
    parsed = parse_input(raw)
    store = store or PreferenceStore(settings.data_dir)
    client = client or _client_for(settings)

    preferences = load_metadata(store, client)
    resolution = resolve_parameters(parsed.flag_tokens, preferences.metadata)

    # Only what the user typed this time is remembered for next time.
    explicit_choices = {
        "teams": resolution.team_id,
        "projects": resolution.project_id,
        "users": resolution.assignee_id,
        "priorities": resolution.priority_id,
    }
    params = apply_defaults(resolution, preferences)

    title = " ".join(word.strip() for word in (*resolution.unmatched, *parsed.title_tokens))
    validation = validate_title(title)
    logger.debug(
        "Workflow processed",
        team=params.team_name,
        project=params.project_name,
        assignee=params.assignee_name,
        priority=params.priority_label,
        title=title,
        valid=validation.valid,
    )

    return Workflow(
        input=raw,
        preferences=preferences,
        params=params,
        title=title,
        title_validation=validation,
        explicit_choices=explicit_choices,
    )


def create_issue_from_input(
    raw: str,
    settings: Settings,
    store: PreferenceStore | None = None,
    client: LinearClient | None = None,
) -> Issue:
    """Create a Linear issue from a shorthand command.

    Raises:
        ConfigurationError: If no API token is configured
        ValidationError: If the title is missing or a single word
        TransportError: If a request to Linear fails
        RemoteError: If Linear rejects the request
    """
    if not raw or not raw.strip():
        raise ValidationError("Please provide an issue title")

    store = store or PreferenceStore(settings.data_dir)
    client = client or _client_for(settings)
    workflow = process_workflow(raw, settings, store=store, client=client)

    if not workflow.title_validation.valid:
        raise ValidationError(workflow.title_validation.message)

    store.write(workflow.preferences, workflow.explicit_choices, pretty=settings.dry_run)

    params = workflow.params
    return client.create_issue(
        team_id=params.team_id or None,
        project_id=params.project_id or None,
        assignee_id=params.assignee_id or None,
        priority=params.priority_id or 0,
        title=workflow.title,
    )
