"""
Assistant endpoints for API v1.

Expose the registered tools and components with their JSON schemas,
run tools on the assistant's behalf and validate component props before
rendering.  Unknown names answer 404 and invalid arguments 400.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends

from user_post_api.app.core.security import get_session_user
from user_post_api.app.schemas.assistant import (
    AssistantContext,
    ComponentRead,
    ComponentRender,
    ToolRead,
    ToolResult,
)
from user_post_api.app.schemas.session import SessionUser
from user_post_api.app.services.assistant_catalog import registry


router = APIRouter()


@router.get("/tools", response_model=List[ToolRead])
async def list_tools() -> List[ToolRead]:
    return registry.describe_tools()


@router.post("/tools/{name}", response_model=ToolResult)
async def invoke_tool(name: str, arguments: Any = Body(None)) -> ToolResult:
    """Run tool ``name`` with the JSON body as its arguments."""
    result = await registry.invoke_tool(name, arguments)
    return ToolResult(tool=name, result=result)


@router.get("/components", response_model=List[ComponentRead])
async def list_components() -> List[ComponentRead]:
    return registry.describe_components()


@router.post("/components/{name}", response_model=ComponentRender)
async def render_component(name: str, props: Any = Body(None)) -> ComponentRender:
    """Validate props for component ``name`` and echo the normalised props."""
    return ComponentRender(component=name, props=registry.validate_component_props(name, props))


@router.get("/context", response_model=AssistantContext)
async def get_context(user: Optional[SessionUser] = Depends(get_session_user)) -> AssistantContext:
    """Context helpers sent along with assistant messages."""
    return AssistantContext(user=user)
