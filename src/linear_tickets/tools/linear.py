"""Linear ticket tools.

Six operations exposed to the host: create, read, update, assign and list
tickets, and list users. Handlers resolve team keys and status names,
call LinearClient, and render text. Assignee ids are taken as given;
callers look them up with ``linear_get_users`` first.
"""

import logging
from typing import Any, Dict

from ..connectors.exceptions import ResolutionFailed
from ..connectors.linear import LinearClient
from ..models import TicketCreate, TicketUpdate
from .formatting import format_ticket, format_ticket_list, format_user_list
from .inputs import (
    AssignTicketArgs,
    CreateTicketArgs,
    GetUsersArgs,
    ListTicketsArgs,
    ReadTicketArgs,
    UpdateTicketArgs,
)
from .registry import ToolRegistry
from .resolution import resolve_status, resolve_team

logger = logging.getLogger(__name__)


class LinearTools:
    """Handlers for the Linear tools, bound to one LinearClient."""

    def __init__(self, client: LinearClient):
        self.client = client

    def build_registry(self) -> ToolRegistry:
        """Return a registry holding all six tools."""
        registry = ToolRegistry()
        registry.tool(
            name="linear_create_ticket",
            description=(
                "Create a new ticket/issue in Linear. "
                "Returns the created ticket's identifier and URL."
            ),
            args_model=CreateTicketArgs,
            failure_prefix="Failed to create ticket",
        )(self.create_ticket)
        registry.tool(
            name="linear_read_ticket",
            description="Get full details of a Linear ticket by its identifier (e.g., 'ENG-123').",
            args_model=ReadTicketArgs,
            failure_prefix="Failed to get ticket",
        )(self.read_ticket)
        registry.tool(
            name="linear_update_ticket",
            description="Update an existing Linear ticket. All fields except identifier are optional.",
            args_model=UpdateTicketArgs,
            failure_prefix="Failed to update ticket",
        )(self.update_ticket)
        registry.tool(
            name="linear_assign_ticket",
            description="Assign a Linear ticket to a specific user.",
            args_model=AssignTicketArgs,
            failure_prefix="Failed to assign ticket",
        )(self.assign_ticket)
        registry.tool(
            name="linear_list_tickets",
            description="List tickets in a Linear team, optionally filtered by status.",
            args_model=ListTicketsArgs,
            failure_prefix="Failed to list tickets",
        )(self.list_tickets)
        registry.tool(
            name="linear_get_users",
            description=(
                "Get a list of all users in the Linear workspace. "
                "Useful for finding user IDs for assignment."
            ),
            args_model=GetUsersArgs,
            failure_prefix="Failed to get users",
        )(self.get_users)
        return registry

    # -- Handlers ----------------------------------------------------------

    async def create_ticket(self, args: CreateTicketArgs) -> str:
        try:
            team = await resolve_team(self.client, args.team_key)
        except ResolutionFailed as exc:
            return str(exc)

        ticket = await self.client.create_ticket(TicketCreate(
            title=args.title,
            team_id=team.id,
            description=args.description,
            assignee_id=args.assignee_id,
        ))
        return f"Created ticket **{ticket.identifier}**\n\nURL: {ticket.url}"

    async def read_ticket(self, args: ReadTicketArgs) -> str:
        ticket = await self.client.get_ticket(args.identifier)
        return format_ticket(ticket)

    async def update_ticket(self, args: UpdateTicketArgs) -> str:
        """Apply whichever fields were supplied.

        A status that cannot be resolved never blocks the other fields: an
        unknown team skips the status silently, an unknown status name is
        reported after the update.
        """
        # Blank text counts as not supplied; it never overwrites remote values
        fields: Dict[str, Any] = {
            "title": args.title or None,
            "description": args.description or None,
            "priority": args.priority,
        }
        status_note = None

        if args.status:
            try:
                state = await resolve_status(self.client, args.identifier, args.status)
            except ResolutionFailed as exc:
                logger.warning("Status not applied to %s: %s", args.identifier, exc)
                status_note = str(exc)
            else:
                if state is not None:
                    fields["state_id"] = state.id

        updates = TicketUpdate(**fields)
        if updates.is_empty():
            if status_note:
                # Raises NotFound for a missing ticket before reporting the status
                await self.client.get_ticket(args.identifier)
                return status_note
            return f"Nothing to update for **{args.identifier}**."

        ticket = await self.client.update_ticket(args.identifier, updates)
        text = f"Updated ticket:\n\n{format_ticket(ticket)}"
        if status_note:
            text += f"\n\n{status_note}"
        return text

    async def assign_ticket(self, args: AssignTicketArgs) -> str:
        ticket = await self.client.assign_ticket(args.identifier, args.user_id)
        assignee = ticket.assignee.name if ticket.assignee else "user"
        return f"Assigned **{ticket.identifier}** to {assignee}"

    async def list_tickets(self, args: ListTicketsArgs) -> str:
        try:
            team = await resolve_team(self.client, args.team_key)
        except ResolutionFailed as exc:
            return str(exc)

        tickets = await self.client.list_tickets(team.key, args.status, args.limit)
        heading = team.key
        if args.status:
            heading += f" ({args.status})"
        return f"**Tickets in {heading}:**\n\n{format_ticket_list(tickets)}"

    async def get_users(self, args: GetUsersArgs) -> str:
        users = await self.client.get_users()
        return f"**Linear Users:**\n\n{format_user_list(users)}"
