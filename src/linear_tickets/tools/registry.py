"""Tool registry: the dispatch table between the host and the handlers."""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp import types
from pydantic import BaseModel, ValidationError

from ..connectors.exceptions import InputValidationError, TrackerError
from ..observability.logging import tool_call_context

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Awaitable[str]]


def input_schema(args_model: Type[BaseModel]) -> Dict[str, Any]:
    """JSON Schema for a tool's arguments, flattened for LLM consumption.

    Optional fields are emitted as their plain type instead of
    ``anyOf: [T, null]``, and pydantic's generated titles are dropped.
    """
    schema = args_model.model_json_schema()
    properties: Dict[str, Any] = {}
    for name, prop in schema.get("properties", {}).items():
        prop = dict(prop)
        prop.pop("title", None)
        variants = [v for v in prop.pop("anyOf", []) if v.get("type") != "null"]
        if len(variants) == 1:
            prop = {**variants[0], **prop}
        if prop.get("default", ...) is None:
            del prop["default"]
        properties[name] = prop

    result: Dict[str, Any] = {"type": "object", "properties": properties}
    if schema.get("required"):
        result["required"] = list(schema["required"])
    return result


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


@dataclass
class ToolDefinition:
    """A callable operation with its declared input contract."""

    name: str
    description: str
    args_model: Type[BaseModel]
    handler: ToolHandler
    failure_prefix: str

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=input_schema(self.args_model),
        )

    def parse_arguments(self, arguments: Optional[Dict[str, Any]]) -> BaseModel:
        try:
            return self.args_model.model_validate(arguments or {})
        except ValidationError as exc:
            raise InputValidationError(
                f"invalid arguments: {_describe_validation_error(exc)}"
            ) from exc


class ToolRegistry:
    """Registry of tool definitions keyed by tool name."""

    def __init__(self):
        self._tools: Dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition):
        """Register a tool definition."""
        if definition.name in self._tools:
            raise ValueError(f"Tool already registered: {definition.name}")
        self._tools[definition.name] = definition
        logger.debug("Registered tool: %s", definition.name)

    def tool(self, name: str, description: str, args_model: Type[BaseModel], failure_prefix: str):
        """Decorator to register a handler coroutine as a tool."""
        def decorator(handler: ToolHandler) -> ToolHandler:
            self.register(ToolDefinition(
                name=name,
                description=description,
                args_model=args_model,
                handler=handler,
                failure_prefix=failure_prefix,
            ))
            return handler
        return decorator

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def list_tool_names(self) -> List[str]:
        return list(self._tools.keys())

    def list_tools(self) -> List[types.Tool]:
        return [definition.to_mcp_tool() for definition in self._tools.values()]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    async def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """Validate arguments, run the handler and render the outcome as text.

        Never raises: every failure becomes ``"<failure prefix>: <message>"``.
        Arguments are validated before the handler runs, so a contract
        violation never reaches the network.
        """
        definition = self._tools.get(name)
        if definition is None:
            return f"Unknown tool: {name}"

        with tool_call_context(name, uuid.uuid4().hex[:12]):
            try:
                args = definition.parse_arguments(arguments)
                logger.info("Tool call: %s", name)
                return await definition.handler(args)
            except TrackerError as e:
                logger.warning("Tool %s failed: %s", name, e)
                return f"{definition.failure_prefix}: {e}"
            except Exception as e:
                logger.exception("Error executing tool '%s'", name)
                return f"{definition.failure_prefix}: {e}"
