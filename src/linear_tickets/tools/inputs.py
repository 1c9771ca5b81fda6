"""Input contracts for the Linear tools.

Each model is both the validator run before a handler is invoked and the
source of the tool's JSON Schema ``inputSchema``. Field aliases are the
camelCase names the host sends.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..connectors.linear import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT


class ToolArgs(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class CreateTicketArgs(ToolArgs):
    title: str = Field(min_length=1, description="Title of the ticket")
    team_key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("teamKey", "projectKey"),
        description="Team key (e.g., 'ENG', 'PRD')",
    )
    description: Optional[str] = Field(
        default=None, description="Detailed description of the ticket"
    )
    assignee_id: Optional[str] = Field(
        default=None, alias="assigneeId", description="User ID to assign the ticket to"
    )


class ReadTicketArgs(ToolArgs):
    identifier: str = Field(min_length=1, description="Ticket identifier (e.g., 'ENG-123')")


class UpdateTicketArgs(ToolArgs):
    identifier: str = Field(min_length=1, description="Ticket identifier (e.g., 'ENG-123')")
    title: Optional[str] = Field(default=None, min_length=1, description="New title")
    description: Optional[str] = Field(default=None, description="New description")
    status: Optional[str] = Field(
        default=None, description="New status name (e.g., 'In Progress')"
    )
    priority: Optional[int] = Field(
        default=None,
        ge=0,
        le=4,
        description="Priority (0=none, 1=urgent, 2=high, 3=medium, 4=low)",
    )


class AssignTicketArgs(ToolArgs):
    identifier: str = Field(min_length=1, description="Ticket identifier (e.g., 'ENG-123')")
    user_id: str = Field(
        min_length=1, alias="userId", description="User ID to assign the ticket to"
    )


class ListTicketsArgs(ToolArgs):
    team_key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("teamKey", "projectKey"),
        description="Team key (e.g., 'ENG', 'PRD')",
    )
    status: Optional[str] = Field(default=None, description="Filter by status name")
    limit: int = Field(
        default=DEFAULT_LIST_LIMIT,
        ge=1,
        le=MAX_LIST_LIMIT,
        description=f"Maximum number of tickets to return (default: {DEFAULT_LIST_LIMIT})",
    )

    @field_validator("limit", mode="before")
    @classmethod
    def default_limit(cls, v):
        return DEFAULT_LIST_LIMIT if v is None else v


class GetUsersArgs(ToolArgs):
    pass
