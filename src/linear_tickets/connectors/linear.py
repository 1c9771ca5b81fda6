"""Linear remote access layer.

All Linear API calls go through GraphQL at a single endpoint (by default
https://api.linear.app/graphql). Every document below is static; values only
ever travel as variables.

Linear priority values: 0=No priority, 1=Urgent, 2=High, 3=Medium, 4=Low.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from ..config import Settings, get_settings
from ..models import (
    Team,
    Ticket,
    TicketCreate,
    TicketUpdate,
    User,
    WorkflowState,
    map_issue,
    map_user,
)
from .exceptions import NotFound, RemoteOperationFailed, TrackerError
from .graphql import GraphQLClient

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 100

# ---------------------------------------------------------------------------
# Query / mutation documents (kept together so they are easy to audit)
# ---------------------------------------------------------------------------

_ISSUE_FIELDS = """
      id
      identifier
      title
      description
      url
      priority
      priorityLabel
      state { id name }
      assignee { id name email active }
"""

# -- Issues ----------------------------------------------------------------

_CREATE_ISSUE_MUTATION = """
mutation CreateIssue($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue {%s    }
  }
}
""" % _ISSUE_FIELDS

_GET_ISSUE_QUERY = """
query GetIssue($id: String!) {
  issue(id: $id) {%s  }
}
""" % _ISSUE_FIELDS

_SEARCH_ISSUE_QUERY = """
query SearchIssue($filter: IssueFilter) {
  issues(filter: $filter, first: 1) {
    nodes {%s    }
  }
}
""" % _ISSUE_FIELDS

_UPDATE_ISSUE_MUTATION = """
mutation UpdateIssue($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) {
    success
    issue {%s    }
  }
}
""" % _ISSUE_FIELDS

_LIST_ISSUES_QUERY = """
query ListIssues($filter: IssueFilter, $first: Int!) {
  issues(filter: $filter, first: $first, orderBy: updatedAt) {
    nodes {%s    }
  }
}
""" % _ISSUE_FIELDS

# -- Users / teams / states ------------------------------------------------

_LIST_USERS_QUERY = """
query ListUsers {
  users {
    nodes { id name email active }
  }
}
"""

_LIST_TEAMS_QUERY = """
query ListTeams {
  teams {
    nodes { id key name }
  }
}
"""

_LIST_WORKFLOW_STATES_QUERY = """
query ListWorkflowStates($teamId: String!) {
  team(id: $teamId) {
    states {
      nodes { id name }
    }
  }
}
"""

_IDENTIFIER_RE = re.compile(r"^([A-Za-z0-9]+)-(\d+)$")


def split_identifier(identifier: str) -> Optional[Tuple[str, int]]:
    """Split ``ENG-123`` into ``("ENG", 123)``; None if it is not one."""
    match = _IDENTIFIER_RE.match(identifier.strip())
    if not match:
        return None
    return match.group(1), int(match.group(2))


def _nodes(data: Dict[str, Any], *path: str) -> List[Dict[str, Any]]:
    """Walk ``path`` into ``data`` and return the connection's nodes."""
    connection: Any = data
    for key in path:
        connection = (connection or {}).get(key)
    return list((connection or {}).get("nodes") or [])


class LinearClient:
    """Client for the Linear GraphQL API.

    Holds nothing but the credential; every call fetches fresh state.
    """

    def __init__(self, api_key: str, endpoint: Optional[str] = None):
        if endpoint is None:
            endpoint = get_settings().linear_api_url
        self._graphql = GraphQLClient(
            endpoint=endpoint,
            auth_header="Authorization",
            auth_value=f"Bearer {api_key}",
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "LinearClient":
        settings = settings or get_settings()
        if not settings.linear_api_key:
            raise ValueError("LINEAR_API_KEY is not configured")
        return cls(settings.linear_api_key, endpoint=settings.linear_api_url)

    async def _execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._graphql.execute(query, variables)

    # -- Issues ------------------------------------------------------------

    async def create_ticket(self, ticket: TicketCreate) -> Ticket:
        """Create an issue. Raises RemoteOperationFailed if Linear rejects it."""
        data = await self._execute(_CREATE_ISSUE_MUTATION, {"input": ticket.to_input()})
        payload = data.get("issueCreate") or {}
        if not payload.get("success") or not payload.get("issue"):
            raise RemoteOperationFailed("Failed to create ticket")

        created = map_issue(payload["issue"])
        logger.info("Created ticket %s", created.identifier)
        return created

    async def get_ticket(self, identifier: str) -> Ticket:
        """Fetch an issue by its identifier.

        The single-issue endpoint does not accept identifiers on every
        deployment, so a miss or failure there falls back to a filtered
        search on team key and issue number.

        Raises:
            NotFound: If neither path finds the issue.
        """
        try:
            data = await self._execute(_GET_ISSUE_QUERY, {"id": identifier})
            issue = data.get("issue")
            if issue:
                return map_issue(issue)
            logger.debug("Primary lookup returned no issue for %s", identifier)
        except TrackerError as exc:
            logger.debug("Primary lookup failed for %s: %s", identifier, exc)

        return await self._search_ticket(identifier)

    async def _search_ticket(self, identifier: str) -> Ticket:
        parts = split_identifier(identifier)
        if parts is None:
            raise NotFound(identifier)

        team_key, number = parts
        data = await self._execute(
            _SEARCH_ISSUE_QUERY,
            {
                "filter": {
                    "team": {"key": {"eq": team_key.upper()}},
                    "number": {"eq": number},
                }
            },
        )
        nodes = _nodes(data, "issues")
        if not nodes:
            raise NotFound(identifier)
        return map_issue(nodes[0])

    async def update_ticket(self, identifier: str, updates: TicketUpdate) -> Ticket:
        """Apply a partial update to an issue.

        Mutations need the internal id, so the issue is looked up first.
        Only fields present in ``updates`` are sent.
        """
        ticket = await self.get_ticket(identifier)

        data = await self._execute(
            _UPDATE_ISSUE_MUTATION,
            {"id": ticket.id, "input": updates.to_input()},
        )
        payload = data.get("issueUpdate") or {}
        if not payload.get("success") or not payload.get("issue"):
            raise RemoteOperationFailed("Failed to update ticket")

        logger.info("Updated ticket %s (%s)", ticket.identifier, ", ".join(updates.to_input()))
        return map_issue(payload["issue"])

    async def assign_ticket(self, identifier: str, user_id: str) -> Ticket:
        return await self.update_ticket(identifier, TicketUpdate(assignee_id=user_id))

    async def list_tickets(
        self,
        team_key: str,
        status: Optional[str] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> List[Ticket]:
        """List a team's issues, most recently updated first.

        The filter always matches the team key and adds the state name only
        when ``status`` is given; the document itself never changes.
        """
        if not 1 <= limit <= MAX_LIST_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_LIST_LIMIT}")

        issue_filter: Dict[str, Any] = {"team": {"key": {"eq": team_key}}}
        if status:
            issue_filter["state"] = {"name": {"eq": status}}

        data = await self._execute(
            _LIST_ISSUES_QUERY,
            {"filter": issue_filter, "first": limit},
        )
        return [map_issue(node) for node in _nodes(data, "issues")[:limit]]

    # -- Users / teams / states --------------------------------------------

    async def get_users(self) -> List[User]:
        data = await self._execute(_LIST_USERS_QUERY)
        return [map_user(node) for node in _nodes(data, "users")]

    async def get_teams(self) -> List[Team]:
        data = await self._execute(_LIST_TEAMS_QUERY)
        return [Team(**node) for node in _nodes(data, "teams")]

    async def get_workflow_states(self, team_id: str) -> List[WorkflowState]:
        data = await self._execute(_LIST_WORKFLOW_STATES_QUERY, {"teamId": team_id})
        return [WorkflowState(**node) for node in _nodes(data, "team", "states")]
