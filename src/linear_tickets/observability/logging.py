"""Logging for Linear tool calls.

Every record emitted while a tool call is being dispatched carries the
tool name and a short per-call request id, so the GraphQL traffic of one
call can be picked out of the host's log. Output always goes to stderr;
when serving over stdio, stdout belongs to the MCP transport.
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Dict, Iterator, Optional

# Set by ToolRegistry.call for the duration of one dispatch
_tool_name: ContextVar[Optional[str]] = ContextVar("tool_name", default=None)
_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def set_log_context(
    tool_name: Optional[str] = None,
    request_id: Optional[str] = None,
):
    """Set contextual logging fields for the current async context."""
    if tool_name is not None:
        _tool_name.set(tool_name)
    if request_id is not None:
        _request_id.set(request_id)


def clear_log_context():
    """Clear all contextual logging fields."""
    _tool_name.set(None)
    _request_id.set(None)


@contextmanager
def tool_call_context(tool_name: str, request_id: str) -> Iterator[None]:
    """Tag every record logged inside the block with one tool call."""
    set_log_context(tool_name=tool_name, request_id=request_id)
    try:
        yield
    finally:
        clear_log_context()


def current_call_context() -> Dict[str, str]:
    """The tool call fields in effect, omitting unset ones."""
    fields = {"tool_name": _tool_name.get(), "request_id": _request_id.get()}
    return {key: value for key, value in fields.items() if value}


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for hosts that ingest structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **current_call_context(),
        }

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


class HumanReadableFormatter(logging.Formatter):
    """Single-line format with a ``[tool=..., req=...]`` suffix during calls."""

    _LABELS = {"tool_name": "tool", "request_id": "req"}

    def format(self, record: logging.LogRecord) -> str:
        msg = (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"{record.levelname:8s} {record.name}: {record.getMessage()}"
        )

        context = current_call_context()
        if context:
            suffix = ", ".join(f"{self._LABELS[k]}={v}" for k, v in context.items())
            msg += f" [{suffix}]"

        if record.exc_info and record.exc_info[1]:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


def configure_logging(environment: str = "development", log_level: str = "INFO"):
    """Install a single stderr handler on the root logger.

    Args:
        environment: "production" for JSON lines, anything else for plain text.
        log_level: Level name; unknown names fall back to INFO.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if environment == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
