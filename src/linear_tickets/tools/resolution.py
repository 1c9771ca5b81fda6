"""Resolution of human-readable references into Linear ids.

Team keys and status names are matched case-insensitively. A miss raises
ResolutionFailed carrying every valid alternative so the caller can
correct itself.
"""

import logging
from typing import Optional

from ..connectors.exceptions import ResolutionFailed
from ..connectors.linear import LinearClient
from ..models import Team, WorkflowState

logger = logging.getLogger(__name__)


def team_key_from_identifier(identifier: str) -> str:
    """``ENG-123`` -> ``ENG``."""
    return identifier.split("-", 1)[0]


async def resolve_team(client: LinearClient, team_key: str) -> Team:
    """Find the team whose key matches ``team_key``.

    Raises:
        ResolutionFailed: Listing every available team key.
    """
    teams = await client.get_teams()
    wanted = team_key.strip().lower()
    for team in teams:
        if team.key.lower() == wanted:
            return team
    raise ResolutionFailed("team", team_key, [t.key for t in teams])


async def resolve_status(
    client: LinearClient,
    identifier: str,
    status_name: str,
) -> Optional[WorkflowState]:
    """Find the workflow state named ``status_name`` on the ticket's team.

    Returns None when the ticket's team cannot be resolved; the caller
    skips the status change in that case.

    Raises:
        ResolutionFailed: If the team exists but has no such state.
    """
    team_key = team_key_from_identifier(identifier)
    try:
        team = await resolve_team(client, team_key)
    except ResolutionFailed:
        logger.warning(
            "Team %r for %s not found; skipping status change to %r",
            team_key, identifier, status_name,
        )
        return None

    states = await client.get_workflow_states(team.id)
    wanted = status_name.strip().lower()
    for state in states:
        if state.name.lower() == wanted:
            return state
    raise ResolutionFailed("status", status_name, [s.name for s in states])
