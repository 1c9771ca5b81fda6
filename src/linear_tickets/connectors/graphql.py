"""Lightweight async GraphQL client.

Sends one document per call over the shared HTTP client. Each call is a
single attempt; failures are translated into the tracker exception types
and left to the caller.
"""

import logging
from typing import Any, Dict, Optional, Set

import httpx

from .exceptions import RemoteOperationFailed, TrackerAuthError, TransportFailure

logger = logging.getLogger(__name__)

# Status codes reported as authentication failures
AUTH_FAILURE_CODES: Set[int] = {401, 403}


class GraphQLClient:
    """Async GraphQL client bound to one endpoint and one credential."""

    def __init__(
        self,
        endpoint: str,
        auth_header: str = "Authorization",
        auth_value: str = "",
    ):
        self.endpoint = endpoint
        self.auth_header = auth_header
        self.auth_value = auth_value

    async def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Execute a single GraphQL query or mutation.

        Args:
            query: GraphQL document. Never built from runtime values.
            variables: Optional variables bound to the document.

        Returns:
            The "data" portion of the response.

        Raises:
            TrackerAuthError: On HTTP 401/403.
            TransportFailure: On any other HTTP status error or network error.
            RemoteOperationFailed: If the response contains GraphQL errors.
        """
        from .http_client import get_http_client

        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        client = get_http_client()
        try:
            response = await client.post(
                self.endpoint,
                json=payload,
                headers={
                    self.auth_header: self.auth_value,
                    "Content-Type": "application/json",
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status in AUTH_FAILURE_CODES:
                raise TrackerAuthError(
                    f"Authentication failed: HTTP {status}",
                    status_code=status,
                ) from exc
            raise TransportFailure(
                f"Linear API error: HTTP {status}",
                status_code=status,
                response_body=exc.response.text[:500],
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("Request to %s failed: %s", self.endpoint, type(exc).__name__)
            raise TransportFailure(
                f"Request to Linear failed: {type(exc).__name__}"
            ) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportFailure(
                "Linear API returned a non-JSON response",
                status_code=response.status_code,
            ) from exc

        if "errors" in body and body["errors"]:
            error_messages = "; ".join(
                e.get("message", "Unknown error") for e in body["errors"]
            )
            raise RemoteOperationFailed(
                f"GraphQL error: {error_messages}",
                errors=body["errors"],
            )

        return body.get("data") or {}
