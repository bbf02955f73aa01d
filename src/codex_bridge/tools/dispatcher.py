"""Route tool calls to their handlers and fold every outcome into a response envelope."""

from __future__ import annotations

import inspect
from typing import Any, Dict, Mapping, Optional

from mcp.types import CallToolResult
from pydantic import ValidationError

from ..exceptions import CodexToolError, ToolValidationError, UnknownToolError
from ..logger import get_logger
from .models import ToolCallRequest, ToolCallResult
from .registry import ToolRegistry

logger = get_logger(__name__)


class ToolDispatcher:
    """Stateless request/response dispatcher over a ToolRegistry.

    One call in, one envelope out. Handler failures never propagate: errors
    raised as ``CodexToolError`` carry their own response text, anything else is
    rendered as ``Error: <message>``.
    """

    def __init__(self, registry: ToolRegistry) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Registry used to resolve tool names to definitions.
        """
        self._registry = registry

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> CallToolResult:
        """Dispatch a named tool call.

        Args:
            name: Tool name as sent by the client.
            arguments: Raw argument mapping; ``None`` means no arguments.

        Returns:
            The response envelope. ``isError`` is set for every failure.
        """
        request = ToolCallRequest(name=name, arguments=dict(arguments or {}))
        return (await self.handle(request)).to_envelope()

    async def handle(self, request: ToolCallRequest) -> ToolCallResult:
        """Handle a single tool call request.

        Args:
            request: The normalized tool call.

        Returns:
            The result of the call, including any error.
        """
        logger.info("Dispatching tool call '%s'.", request.name)
        try:
            text = await self._invoke(request)
        except CodexToolError as exc:
            logger.info("Tool '%s' answered with an error: %s", request.name, type(exc).__name__)
            return ToolCallResult(name=request.name, text=str(exc), is_error=True)
        except (UnknownToolError, ToolValidationError) as exc:
            logger.warning("Rejected tool call '%s': %s", request.name, exc)
            return ToolCallResult(name=request.name, text=f"Error: {exc}", is_error=True)
        except Exception as exc:
            logger.error("Unhandled failure in tool '%s': %s", request.name, exc, exc_info=True)
            return ToolCallResult(name=request.name, text=f"Error: {exc}", is_error=True)

        return ToolCallResult(name=request.name, text=text)

    async def _invoke(self, request: ToolCallRequest) -> str:
        tool_def = self._registry.get(request.name)
        if tool_def is None:
            raise UnknownToolError(request.name)

        function_args = self._validate_arguments(request.name, request.arguments, tool_def.args_model)

        result = tool_def.func(**function_args)
        if inspect.isawaitable(result):
            result = await result
        return str(result)

    @staticmethod
    def _validate_arguments(name: str, arguments: Dict[str, Any], args_model: Any) -> Dict[str, Any]:
        if args_model is None:
            return arguments
        try:
            validated = args_model(**arguments)
        except ValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}" for err in exc.errors()
            )
            raise ToolValidationError(f"Invalid arguments for '{name}': {details}") from exc
        # Field-by-field so nested values stay as validated objects.
        return {field: getattr(validated, field) for field in type(validated).model_fields}
