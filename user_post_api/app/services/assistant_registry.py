"""
Capability registry for the AI assistant.

The assistant can call *tools* (functions that fetch or compute data)
and render *components* (UI elements filled with props it chooses).
Both are registered here under a unique name together with pydantic
models describing their inputs and outputs.  Descriptors are checked
when they are registered, so a broken registration fails at start-up
rather than when the assistant first tries to use it.

Handlers are called with an instance of their input model and may be
plain functions or coroutines.  They may return an instance of the
output model or a dict; either way the result is validated against the
output model before it is handed back.
"""

from __future__ import annotations

import inspect
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import InternalError, NotFoundError, ValidationError


logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_]*")


class RegistrationError(ValueError):
    """A tool or component descriptor is invalid."""


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    handler: Callable[[Any], Any]
    input_model: Type[BaseModel]
    output_model: Type[BaseModel]
    kind: str = field(default="tool", init=False)


@dataclass(frozen=True)
class ComponentDescriptor:
    name: str
    description: str
    props_model: Type[BaseModel]
    kind: str = field(default="component", init=False)


def _is_model(value: Any) -> bool:
    return isinstance(value, type) and issubclass(value, BaseModel)


def _first_error(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else error["msg"]


class CapabilityRegistry:
    """Name-to-descriptor mapping for assistant tools and components."""

    def __init__(self) -> None:
        self._tools: Dict[str, ToolDescriptor] = {}
        self._components: Dict[str, ComponentDescriptor] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    @staticmethod
    def _check_common(name: str, description: str, taken: Dict[str, Any]) -> None:
        if not isinstance(name, str) or not NAME_PATTERN.fullmatch(name):
            raise RegistrationError(f"Invalid capability name: {name!r}")
        if name in taken:
            raise RegistrationError(f"Capability {name!r} is already registered")
        if not isinstance(description, str) or not description.strip():
            raise RegistrationError(f"Capability {name!r} needs a description")

    def register_tool(
        self,
        name: str,
        description: str,
        handler: Callable[[Any], Any],
        input_model: Type[BaseModel],
        output_model: Type[BaseModel],
    ) -> ToolDescriptor:
        self._check_common(name, description, self._tools)
        if not callable(handler):
            raise RegistrationError(f"Tool {name!r} handler is not callable")
        if not _is_model(input_model) or not _is_model(output_model):
            raise RegistrationError(f"Tool {name!r} schemas must be pydantic models")
        descriptor = ToolDescriptor(
            name=name,
            description=description.strip(),
            handler=handler,
            input_model=input_model,
            output_model=output_model,
        )
        self._tools[name] = descriptor
        logger.debug("Registered tool %s", name)
        return descriptor

    def register_component(
        self,
        name: str,
        description: str,
        props_model: Type[BaseModel],
    ) -> ComponentDescriptor:
        self._check_common(name, description, self._components)
        if not _is_model(props_model):
            raise RegistrationError(f"Component {name!r} props schema must be a pydantic model")
        descriptor = ComponentDescriptor(
            name=name,
            description=description.strip(),
            props_model=props_model,
        )
        self._components[name] = descriptor
        logger.debug("Registered component %s", name)
        return descriptor

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get_tool(self, name: str) -> ToolDescriptor:
        try:
            return self._tools[name]
        except KeyError:
            raise NotFoundError(f"Unknown tool: {name}") from None

    def get_component(self, name: str) -> ComponentDescriptor:
        try:
            return self._components[name]
        except KeyError:
            raise NotFoundError(f"Unknown component: {name}") from None

    def describe_tools(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "input_schema": tool.input_model.model_json_schema(),
                "output_schema": tool.output_model.model_json_schema(),
            }
            for tool in self._tools.values()
        ]

    def describe_components(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": component.name,
                "description": component.description,
                "props_schema": component.props_model.model_json_schema(),
            }
            for component in self._components.values()
        ]

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    async def invoke_tool(self, name: str, arguments: Any = None) -> Dict[str, Any]:
        """Validate ``arguments``, run the tool and return its validated output."""
        tool = self.get_tool(name)
        try:
            parsed = tool.input_model.model_validate(arguments if arguments is not None else {})
        except PydanticValidationError as exc:
            raise ValidationError(_first_error(exc)) from exc

        logger.info("Invoking tool %s", name)
        result = tool.handler(parsed)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, BaseModel):
            result = result.model_dump()
        try:
            output = tool.output_model.model_validate(result)
        except PydanticValidationError as exc:
            logger.error("Tool %s returned invalid output: %s", name, exc)
            raise InternalError(f"Tool {name} returned invalid output") from exc
        return output.model_dump(by_alias=True)

    def validate_component_props(self, name: str, props: Any = None) -> Dict[str, Any]:
        """Return ``props`` validated against the component's schema."""
        component = self.get_component(name)
        try:
            parsed = component.props_model.model_validate(props if props is not None else {})
        except PydanticValidationError as exc:
            raise ValidationError(_first_error(exc)) from exc
        return parsed.model_dump(by_alias=True)
