"""Canonical ticket and user shapes.

Read-through projections of Linear state. Nothing here is persisted;
``map_issue`` is the one place that knows the remote issue shape.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Linear priority values: 0=No priority, 1=Urgent, 2=High, 3=Medium, 4=Low.
PRIORITY_LABELS: Dict[int, str] = {
    0: "No priority",
    1: "Urgent",
    2: "High",
    3: "Medium",
    4: "Low",
}


class User(BaseModel):
    id: str
    name: str
    email: str = ""
    active: bool = True


class Team(BaseModel):
    id: str
    key: str
    name: str


class WorkflowState(BaseModel):
    id: str
    name: str


class TicketStatus(BaseModel):
    id: str
    name: str


class Ticket(BaseModel):
    """A Linear issue as rendered to the host.

    ``identifier`` (e.g. ``ENG-123``) is the only key callers use; ``id`` is
    needed for mutation calls.
    """

    id: str
    identifier: str
    title: str
    description: Optional[str] = None
    status: TicketStatus
    priority: int = 0
    priority_label: str = PRIORITY_LABELS[0]
    assignee: Optional[User] = None
    url: str = ""


class TicketCreate(BaseModel):
    """Input for issueCreate."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    team_id: str = Field(alias="teamId")
    description: Optional[str] = None
    assignee_id: Optional[str] = Field(default=None, alias="assigneeId")

    def to_input(self) -> Dict[str, Any]:
        """IssueCreateInput with only the supplied fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class TicketUpdate(BaseModel):
    """Sparse input for issueUpdate. Absent fields are never sent."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    state_id: Optional[str] = Field(default=None, alias="stateId")
    priority: Optional[int] = Field(default=None, ge=0, le=4)
    assignee_id: Optional[str] = Field(default=None, alias="assigneeId")

    def to_input(self) -> Dict[str, Any]:
        """IssueUpdateInput with only the supplied fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def is_empty(self) -> bool:
        return not self.to_input()


def map_user(node: Dict[str, Any]) -> User:
    return User(
        id=node["id"],
        name=node.get("name") or "",
        email=node.get("email") or "",
        active=node.get("active", True),
    )


def map_issue(issue: Dict[str, Any]) -> Ticket:
    """Normalize a remote issue node into a Ticket.

    ``state`` becomes ``status``, a null ``assignee`` becomes ``None``,
    scalars pass through unchanged.
    """
    state = issue.get("state") or {}
    assignee = issue.get("assignee")
    priority = issue.get("priority")
    if priority is None:
        priority = 0
    priority = int(priority)

    return Ticket(
        id=issue["id"],
        identifier=issue["identifier"],
        title=issue["title"],
        description=issue.get("description"),
        status=TicketStatus(id=state.get("id", ""), name=state.get("name", "")),
        priority=priority,
        priority_label=issue.get("priorityLabel") or PRIORITY_LABELS.get(priority, str(priority)),
        assignee=map_user(assignee) if assignee else None,
        url=issue.get("url") or "",
    )
