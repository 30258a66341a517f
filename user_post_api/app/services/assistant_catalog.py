"""
Tools and components offered to the AI assistant.

``build_registry`` registers everything the assistant may use; the
module-level ``registry`` is the instance served by the API.  The
descriptions are written for the model: they tell it when to call a
tool and which component to render with the result.
"""

import logging

from ..core.errors import InternalError
from ..schemas.assistant import (
    AddUserFormProps,
    BarChartProps,
    ChartDatum,
    NoArguments,
    UsersChartData,
)
from .assistant_registry import CapabilityRegistry
from .user_service import UserService


logger = logging.getLogger(__name__)


async def get_users_data(_: NoArguments) -> UsersChartData:
    """Summarise post counts per user for the bar chart.

    Users without a name are labelled with their email.  A listing
    failure is reported inside the chart data rather than raised, so
    the assistant can tell the user what went wrong.
    """
    try:
        users = await UserService.list_users()
    except InternalError:
        logger.error("getUsersData could not list users")
        return UsersChartData(data=[], title="Error", description="Failed to fetch data")
    return UsersChartData(
        data=[ChartDatum(User=user.name or user.email, Posts=len(user.posts)) for user in users],
        title="User Posts Summary",
        description="Total posts per user",
    )


def build_registry() -> CapabilityRegistry:
    registry = CapabilityRegistry()
    registry.register_tool(
        name="getUsersData",
        description=(
            "Fetches the summary of posts for each user. Returns data formatted for "
            "displaying in a bar chart showing user names and their post counts. After "
            "calling this tool, you MUST render the BarChart component with the returned "
            "data. Use this when the user asks for a summary of users, a user table "
            "summary, or user statistics."
        ),
        handler=get_users_data,
        input_model=NoArguments,
        output_model=UsersChartData,
    )
    registry.register_component(
        name="BarChart",
        description=(
            "Renders a bar chart of user statistics: one bar per user with its post "
            "count, plus an optional title and description. Always use this component "
            "to display user summaries, and render it immediately with the data "
            "returned by the getUsersData tool."
        ),
        props_model=BarChartProps,
    )
    registry.register_component(
        name="AddUserForm",
        description=(
            "Renders a form that adds a user with email (required) and name (optional) "
            "together with their first post: title (required), content (optional) and "
            "published status. Render it with empty props whenever the user asks to "
            "add, create or insert user data; do not just describe the form. The form "
            "validates its input and submits it to the users API."
        ),
        props_model=AddUserFormProps,
    )
    return registry


registry = build_registry()
