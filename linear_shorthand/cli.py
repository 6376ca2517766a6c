"""CLI for linear-shorthand."""

import sys
from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from linear_shorthand.config import load_settings
from linear_shorthand.config_commands import config_app
from linear_shorthand.errors import LinearShorthandError
from linear_shorthand.items import create_error_item, create_navigation_item, filter_by_words, metadata_items, render, wrap_results
from linear_shorthand.linear import LinearClient
from linear_shorthand.metadata import refresh_metadata
from linear_shorthand.preferences import PreferenceStore
from linear_shorthand.workflow import create_issue_from_input

logger = structlog.get_logger()

# -h is the "high priority" alias, so only --help shows help.
app = App(
    help="Linear Shorthand - create Linear issues from free-text shorthand",
    help_flags=["--help"],
)

app.command(config_app)

Words = Annotated[str, Parameter(allow_leading_hyphen=True)]


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


@app.command
def create(*words: Words) -> None:
    """Create an issue, e.g. ``lsh create -eng -u -h fix the login bug``.

    Flags pick the team, project, assignee and priority by fuzzy match; every
    other word becomes the title.
    """
    settings = load_settings()
    issue = create_issue_from_input(" ".join(words), settings)
    print(issue.identifier)


@app.command
def refresh() -> None:
    """Fetch teams, projects and users and update the local cache."""
    settings = load_settings()
    client = LinearClient(settings.require_token(), dry_run=settings.dry_run, timeout=settings.timeout)
    preferences = refresh_metadata(PreferenceStore(settings.data_dir), client)
    metadata = preferences.metadata
    print(f"Cached {len(metadata.teams)} team(s), {len(metadata.projects)} project(s), {len(metadata.users)} user(s)")


@app.command(name="filter")
def filter_items(*query: Words) -> None:
    """Print cached teams, projects and users as launcher items matching the query."""
    try:
        settings = load_settings()
        metadata = PreferenceStore(settings.data_dir).read().metadata
        items = filter_by_words(metadata_items(metadata), " ".join(query))
        navigation = create_navigation_item(title="Create a new issue", arg=" ".join(query), subtitle=" ⮑ lsh create")
        print(render(wrap_results(items, navigation)))
    except LinearShorthandError as e:
        logger.error("Filter failed", error=str(e))
        print(render([create_error_item("Error occurred", str(e))]))


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    try:
        app(tokens)
    except LinearShorthandError as e:
        logger.error("Command failed", error=str(e), error_type=type(e).__name__)
        print(str(e))
        sys.exit(1)


if __name__ == "__main__":
    app.meta()
