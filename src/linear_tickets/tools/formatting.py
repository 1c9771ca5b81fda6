"""Text rendering for tool results."""

from typing import List, Sequence

from ..models import Ticket, User


def format_ticket(ticket: Ticket) -> str:
    lines: List[str] = [
        f"**{ticket.identifier}**: {ticket.title}",
        f"Status: {ticket.status.name}",
        f"Priority: {ticket.priority_label}",
        f"Assignee: {ticket.assignee.name}" if ticket.assignee else "Assignee: Unassigned",
    ]
    if ticket.description:
        lines.append(f"\nDescription:\n{ticket.description}")
    lines.append(f"\nURL: {ticket.url}")
    return "\n".join(lines)


def format_ticket_list(tickets: Sequence[Ticket]) -> str:
    if not tickets:
        return "No tickets found."

    lines = []
    for t in tickets:
        line = f"- **{t.identifier}**: {t.title} [{t.status.name}]"
        if t.assignee:
            line += f" (@{t.assignee.name})"
        lines.append(line)
    return "\n".join(lines)


def format_user_list(users: Sequence[User]) -> str:
    if not users:
        return "No users found."

    lines = []
    for u in users:
        line = f"- **{u.name}** ({u.email}) - ID: `{u.id}`"
        if not u.active:
            line += " [inactive]"
        lines.append(line)
    return "\n".join(lines)
