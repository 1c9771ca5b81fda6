"""Data models for Linear Tickets."""

from .ticket import (
    PRIORITY_LABELS,
    Team,
    Ticket,
    TicketCreate,
    TicketStatus,
    TicketUpdate,
    User,
    WorkflowState,
    map_issue,
    map_user,
)

__all__ = [
    "PRIORITY_LABELS",
    "Team",
    "Ticket",
    "TicketCreate",
    "TicketStatus",
    "TicketUpdate",
    "User",
    "WorkflowState",
    "map_issue",
    "map_user",
]
