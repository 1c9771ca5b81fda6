"""Tracker-specific exception types.

Raised by the remote access layer (GraphQLClient, LinearClient). The tool
dispatch layer catches TrackerError at the tool boundary and renders the
message as text, so none of these ever reach the host.
"""

from typing import List, Optional, Sequence


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportFailure(TrackerError):
    """Network or HTTP-level failure reaching the remote service."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response_body: str = "",
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)


class TrackerAuthError(TransportFailure):
    """Authentication or authorization failure (401/403)."""

    pass


class RemoteOperationFailed(TrackerError):
    """The remote accepted the request but reported a semantic failure.

    Covers GraphQL ``errors`` payloads and mutations returning
    ``success: false``.
    """

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        self.errors = errors or []
        super().__init__(message)


class NotFound(TrackerError):
    """Ticket lookup exhausted every lookup path with zero results."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Ticket {identifier} not found")


class ResolutionFailed(TrackerError):
    """A human-readable reference could not be mapped to an id."""

    def __init__(self, kind: str, value: str, alternatives: Sequence[str]):
        self.kind = kind
        self.value = value
        self.alternatives = list(alternatives)
        super().__init__(self._render())

    def _render(self) -> str:
        if self.kind == "team":
            label, plural = "Team with key", "teams"
        else:
            label, plural = self.kind.capitalize(), f"{self.kind}es"
        return (
            f'{label} "{self.value}" not found. '
            f"Available {plural}: {', '.join(self.alternatives)}"
        )


class InputValidationError(TrackerError):
    """Tool arguments violated the declared input contract."""

    pass
