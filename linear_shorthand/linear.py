"""Linear GraphQL API client using requests."""

import json
from typing import Any

import requests
import structlog

from linear_shorthand.errors import ConfigurationError, RemoteError, TransportError
from linear_shorthand.models import Issue, Metadata, Project, Team, User

logger = structlog.get_logger()

API_URL = "https://api.linear.app/graphql"

METADATA_QUERY = """
query {
  teams {
    nodes {
      id
      key
      name
      createdAt
      members {
        nodes {
          id
          isMe
        }
      }
    }
  }
  projects {
    nodes {
      id
      name
      teams {
        nodes {
          id
        }
      }
    }
  }
  users {
    nodes {
      id
      name
      email
      displayName
      isMe
    }
  }
}
"""

CREATE_ISSUE_MUTATION = """
mutation CreateIssue($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue {
      id
      identifier
      url
      assignee {
        displayName
      }
    }
  }
}
"""


def _nodes(connection: dict[str, Any] | None) -> list[dict[str, Any]]:
    return (connection or {}).get("nodes") or []


def team_from_node(node: dict[str, Any]) -> Team:
    return Team(
        id=node["id"],
        name=node["name"],
        key=node.get("key") or "",
        created_at=node.get("createdAt"),
        is_member=any(member.get("isMe") for member in _nodes(node.get("members"))),
    )


def project_from_node(node: dict[str, Any]) -> Project:
    return Project(
        id=node["id"],
        name=node["name"],
        team_ids=tuple(team["id"] for team in _nodes(node.get("teams"))),
    )


def user_from_node(node: dict[str, Any]) -> User:
    return User(
        id=node["id"],
        name=node["name"],
        display_name=node.get("displayName"),
        email=node.get("email"),
        is_me=bool(node.get("isMe")),
    )


class LinearClient:
    """Thin client for the two Linear operations this tool needs."""

    def __init__(self, token: str | None, dry_run: bool = False, timeout: float = 30) -> None:
        """Initialize the client.

        Args:
            token: Linear personal API key
            dry_run: Print the create mutation instead of sending it
            timeout: Request timeout in seconds
        """
        if not token:
            raise ConfigurationError("LINEAR_API_KEY is not set")
        self.token = token
        self.dry_run = dry_run
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json", "Authorization": token})
        logger.debug("Linear client initialized", dry_run=dry_run)

    def _execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a GraphQL document and return its ``data`` payload.

        Raises:
            TransportError: On network failure or a non-2xx response
            RemoteError: When the response carries GraphQL errors
        """
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables

        try:
            response = self.session.post(API_URL, data=json.dumps(payload), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Linear request failed", error=str(e))
            raise TransportError(f"Linear API request failed: {e}") from e

        if not response.ok:
            logger.error("Linear returned an error status", status=response.status_code, body=response.text)
            raise TransportError(
                f"Fetch Error: {response.status_code} {response.reason or 'unknown'}",
                status=response.status_code,
                body=response.text,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError("Linear returned a non-JSON response", status=response.status_code, body=response.text) from e

        errors = body.get("errors")
        if errors:
            message = errors[0].get("message", "Unknown GraphQL error")
            logger.error("GraphQL error", message=message)
            raise RemoteError(message)

        return body.get("data") or {}

    def fetch_metadata(self) -> Metadata:
        """Fetch teams, projects and users."""
        logger.info("Fetching Linear metadata")
        data = self._execute(METADATA_QUERY)
        metadata = Metadata(
            teams=tuple(team_from_node(n) for n in _nodes(data.get("teams"))),
            projects=tuple(project_from_node(n) for n in _nodes(data.get("projects"))),
            users=tuple(user_from_node(n) for n in _nodes(data.get("users"))),
        )
        logger.info(
            "Linear metadata fetched",
            teams=len(metadata.teams),
            projects=len(metadata.projects),
            users=len(metadata.users),
        )
        return metadata

    def create_issue(
        self,
        team_id: str | None,
        project_id: str | None,
        assignee_id: str | None,
        priority: int,
        title: str,
    ) -> Issue:
        """Create an issue and return it."""
        variables = {
            "input": {
                "teamId": team_id,
                "projectId": project_id,
                "assigneeId": assignee_id,
                "priority": priority,
                "title": title,
            }
        }
        logger.info("Creating Linear issue", team_id=team_id, project_id=project_id, priority=priority, title=title)

        if self.dry_run:
            print(json.dumps(variables, indent=2))
            logger.info("Dry run, mutation not sent")
            return Issue(id="dry-run", identifier="DRY-RUN")

        data = self._execute(CREATE_ISSUE_MUTATION, variables)
        result = data.get("issueCreate") or {}
        node = result.get("issue")
        if not result.get("success") or not node:
            raise RemoteError("Linear did not create the issue")

        assignee = node.get("assignee") or {}
        issue = Issue(
            id=node["id"],
            identifier=node["identifier"],
            url=node.get("url"),
            assignee_name=assignee.get("displayName"),
        )
        logger.info("Linear issue created", identifier=issue.identifier)
        return issue
