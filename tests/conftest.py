"""Test configuration and fixtures."""

import os
from typing import Dict, List, Optional

import pytest

# Set test environment variables BEFORE importing the package
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("LINEAR_API_KEY", None)

from linear_tickets.config import get_settings
from linear_tickets.connectors.exceptions import NotFound, RemoteOperationFailed
from linear_tickets.models import (
    Team,
    Ticket,
    TicketCreate,
    TicketStatus,
    TicketUpdate,
    User,
    WorkflowState,
    PRIORITY_LABELS,
)


def make_issue_node(
    identifier: str = "ENG-123",
    title: str = "Fix login bug",
    description: Optional[str] = "Users cannot log in",
    state: Optional[dict] = None,
    priority: int = 2,
    assignee: Optional[dict] = None,
    issue_id: str = "issue-uuid-123",
) -> dict:
    """Build an issue node shaped like Linear's GraphQL response."""
    return {
        "id": issue_id,
        "identifier": identifier,
        "title": title,
        "description": description,
        "url": f"https://linear.app/acme/issue/{identifier}",
        "priority": priority,
        "priorityLabel": PRIORITY_LABELS[priority],
        "state": state or {"id": "state-todo", "name": "Todo"},
        "assignee": assignee,
    }


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached process-wide; reset them around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def issue_node():
    return make_issue_node()


@pytest.fixture
def make_issue():
    """Factory fixture for custom issue nodes."""
    return make_issue_node


class FakeLinearClient:
    """In-memory stand-in for LinearClient.

    Mirrors LinearClient's public coroutine API and records every call so
    tests can assert which remote operations were (or were not) made.
    """

    def __init__(self):
        self.teams: List[Team] = [
            Team(id="team-eng", key="ENG", name="Engineering"),
            Team(id="team-prd", key="PRD", name="Product"),
        ]
        self.states: Dict[str, List[WorkflowState]] = {
            "team-eng": [
                WorkflowState(id="state-todo", name="Todo"),
                WorkflowState(id="state-progress", name="In Progress"),
                WorkflowState(id="state-done", name="Done"),
            ],
            "team-prd": [WorkflowState(id="state-prd-backlog", name="Backlog")],
        }
        self.users: List[User] = [
            User(id="user-1", name="Ada", email="ada@example.com", active=True),
            User(id="user-2", name="Grace", email="grace@example.com", active=False),
        ]
        self.tickets: Dict[str, Ticket] = {}
        self.calls: List[tuple] = []
        self.fail_mutations = False
        self._numbers: Dict[str, int] = {}

    def _team(self, team_id: str) -> Team:
        return next(t for t in self.teams if t.id == team_id)

    def add_ticket(self, team_key: str, title: str, **fields) -> Ticket:
        number = self._numbers.get(team_key, 0) + 1
        self._numbers[team_key] = number
        identifier = f"{team_key}-{number}"
        ticket = Ticket(
            id=f"id-{identifier}",
            identifier=identifier,
            title=title,
            description=fields.get("description"),
            status=fields.get("status", TicketStatus(id="state-todo", name="Todo")),
            priority=fields.get("priority", 0),
            priority_label=PRIORITY_LABELS[fields.get("priority", 0)],
            assignee=fields.get("assignee"),
            url=f"https://linear.app/acme/issue/{identifier}",
        )
        self.tickets[identifier] = ticket
        return ticket

    async def create_ticket(self, ticket: TicketCreate) -> Ticket:
        self.calls.append(("create_ticket", ticket))
        if self.fail_mutations:
            raise RemoteOperationFailed("Failed to create ticket")
        team = self._team(ticket.team_id)
        assignee = next((u for u in self.users if u.id == ticket.assignee_id), None)
        return self.add_ticket(
            team.key, ticket.title, description=ticket.description, assignee=assignee
        )

    async def get_ticket(self, identifier: str) -> Ticket:
        self.calls.append(("get_ticket", identifier))
        if identifier not in self.tickets:
            raise NotFound(identifier)
        return self.tickets[identifier]

    async def update_ticket(self, identifier: str, updates: TicketUpdate) -> Ticket:
        self.calls.append(("update_ticket", identifier, updates))
        ticket = await self.get_ticket(identifier)
        if self.fail_mutations:
            raise RemoteOperationFailed("Failed to update ticket")
        changes = {}
        if updates.title is not None:
            changes["title"] = updates.title
        if updates.description is not None:
            changes["description"] = updates.description
        if updates.priority is not None:
            changes["priority"] = updates.priority
            changes["priority_label"] = PRIORITY_LABELS[updates.priority]
        if updates.state_id is not None:
            state = next(
                s for states in self.states.values() for s in states
                if s.id == updates.state_id
            )
            changes["status"] = TicketStatus(id=state.id, name=state.name)
        if updates.assignee_id is not None:
            changes["assignee"] = next(u for u in self.users if u.id == updates.assignee_id)
        updated = ticket.model_copy(update=changes)
        self.tickets[identifier] = updated
        return updated

    async def assign_ticket(self, identifier: str, user_id: str) -> Ticket:
        return await self.update_ticket(identifier, TicketUpdate(assignee_id=user_id))

    async def list_tickets(self, team_key: str, status: Optional[str] = None, limit: int = 50):
        self.calls.append(("list_tickets", team_key, status, limit))
        tickets = [
            t for t in reversed(list(self.tickets.values()))
            if t.identifier.split("-")[0] == team_key
            and (status is None or t.status.name == status)
        ]
        return tickets[:limit]

    async def get_users(self) -> List[User]:
        self.calls.append(("get_users",))
        return list(self.users)

    async def get_teams(self) -> List[Team]:
        self.calls.append(("get_teams",))
        return list(self.teams)

    async def get_workflow_states(self, team_id: str) -> List[WorkflowState]:
        self.calls.append(("get_workflow_states", team_id))
        return list(self.states.get(team_id, []))

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_client() -> FakeLinearClient:
    return FakeLinearClient()
