"""Tool registry abstraction and helper utilities."""

import inspect
from abc import abstractmethod, ABC
from typing import Callable, Dict, Any, Union, Optional, cast

from pydantic import ConfigDict, create_model

from ..models import ToolDefinition
from ..schema import SchemaValidator, ToolParameterFactory
from ...exceptions import ToolRegistrationError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry(ABC):
    """
    A central registry of the tools a server exposes.

    This class holds the tool declarations advertised to clients and
    maps tool names to their actual Python implementations.
    """

    def __init__(self) -> None:
        """Initialize the ToolRegistry."""
        self.tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition, Callable],
        description: Optional[str] = None,
        func: Optional[Callable] = None,
    ) -> ToolDefinition:
        """
        Register a new tool.

        A tool is registered either from a ready `ToolDefinition`, from a callable whose
        signature and docstring describe it, or from a name plus such a callable.

        Args:
            name_or_tool: Either a `ToolDefinition` object, the name of the tool (str), or a Callable.
            description: Optional description overriding the callable's docstring.
            func: The callable implementing the tool. Required if `name_or_tool` is a string.

        Returns:
            The registered definition.

        Raises:
            ToolRegistrationError: If `func` is missing for a named tool or if the tool already exists.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        elif callable(name_or_tool):
            tool = self._generate_tool_definition(name_or_tool, description=description)
        else:
            if func is None:
                raise ToolRegistrationError("If passing name as string, func is required.")
            tool = self._generate_tool_definition(func, name=name_or_tool, description=description)

        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.info("Successfully registered tool: '%s'", tool.name)
        return tool

    def tool(self, func: Callable) -> Callable:
        """A decorator to expose a function as a tool.

        Args:
            func: The function to decorate.

        Returns:
            The original function, after registering it as a tool.
        """
        self.register(func)
        return func

    def get(self, name: str) -> Optional[ToolDefinition]:
        """Look up a registered tool by name."""
        return self.tools.get(name)

    @property
    @abstractmethod
    def tool_object(self) -> Any:
        """Constructs the tool listing in the shape the transport expects.

        Returns:
            The transport-specific tool representation.
        """
        pass

    def _generate_tool_definition(
        self, func: Callable, name: Optional[str] = None, description: Optional[str] = None
    ) -> ToolDefinition:
        """Generate a ToolDefinition from a callable.

        Args:
            func: The function (or bound method) to generate a definition for.
            name: Optional name override for the tool.
            description: Optional description override for the tool.

        Returns:
            A ToolDefinition carrying the argument model and its sanitized JSON schema.

        Raises:
            ToolValidationError: If the function is missing a docstring or parameter descriptions.
        """
        tool_name = name or func.__name__
        if description is None:
            description = self._get_docstring_from_func(func, tool_name)

        fields = self._build_fields(inspect.signature(func), tool_name)

        # Unknown keys are rejected rather than silently dropped.
        args_model = create_model(
            f"{tool_name}Params",
            __config__=ConfigDict(extra="forbid"),
            **cast(Dict[str, Any], fields),
        )

        return ToolDefinition(
            name=tool_name,
            description=description,
            func=func,
            parameters=SchemaValidator.input_schema_for(args_model),
            args_model=args_model,
        )

    @staticmethod
    def _get_docstring_from_func(func: Callable, tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. Clients need a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc

    @staticmethod
    def _build_fields(signature: inspect.Signature, tool_name: str) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue
            ft = ToolParameterFactory.build_field_tuple(param_name=param_name, param=param, tool_name=tool_name)
            fields[param_name] = (ft.annotation, ft.field)
        return fields
