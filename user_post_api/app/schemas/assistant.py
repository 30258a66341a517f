"""
Pydantic schemas for the assistant capability registry.

Tool inputs/outputs and component props double as the JSON schemas the
assistant sees, so field names follow what the front-end components
expect (``User``/``Posts`` in chart data) rather than Python style.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .session import SessionUser


class ChartDatum(BaseModel):
    User: str = Field(..., description="User name")
    Posts: int = Field(..., description="Number of posts")


class NoArguments(BaseModel):
    """Input of tools that take no arguments.  Unknown keys are ignored."""


class UsersChartData(BaseModel):
    """Output of the ``getUsersData`` tool."""

    data: List[ChartDatum] = Field(..., description="Array of user data with their post counts")
    title: Optional[str] = None
    description: Optional[str] = None


class BarChartProps(BaseModel):
    data: List[ChartDatum] = Field(..., description="Array of user data with User names and Posts counts")
    title: Optional[str] = Field(None, description="Optional chart title")
    description: Optional[str] = Field(None, description="Optional chart description")


class AddUserFormProps(BaseModel):
    """The add-user form takes no props; it renders empty."""


class ToolRead(BaseModel):
    name: str
    description: str
    input_schema: Dict[str, Any]
    output_schema: Dict[str, Any]


class ComponentRead(BaseModel):
    name: str
    description: str
    props_schema: Dict[str, Any]


class ToolResult(BaseModel):
    tool: str
    result: Dict[str, Any]


class ComponentRender(BaseModel):
    component: str
    props: Dict[str, Any]


class AssistantContext(BaseModel):
    """Context helpers passed to the assistant with every message."""

    user: Optional[SessionUser] = None
