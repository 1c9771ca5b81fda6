"""Remote access layer for the Linear GraphQL API."""

from .exceptions import (
    InputValidationError,
    NotFound,
    RemoteOperationFailed,
    ResolutionFailed,
    TrackerAuthError,
    TrackerError,
    TransportFailure,
)
from .graphql import GraphQLClient
from .linear import LinearClient

__all__ = [
    "GraphQLClient",
    "InputValidationError",
    "LinearClient",
    "NotFound",
    "RemoteOperationFailed",
    "ResolutionFailed",
    "TrackerAuthError",
    "TrackerError",
    "TransportFailure",
]
