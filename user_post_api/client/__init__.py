"""
Python client for the User Post Assistant API.

``UserPostAPI`` talks to the users endpoints, ``AddUserForm`` drives the
add-user form the assistant renders, ``HttpThreadNotifier`` reports
results to the assistant thread and ``ChatPanel`` models the
collapsible chat panel.
"""

from .add_user_form import AddUserForm, describe_creation
from .api_client import UserPostAPI
from .chat_panel import ChatPanel, PanelEvent, PanelState, shortcut_text
from .thread import HttpThreadNotifier, ThreadNotifier, notifier_from_settings

__all__ = [
    "AddUserForm",
    "ChatPanel",
    "HttpThreadNotifier",
    "PanelEvent",
    "PanelState",
    "ThreadNotifier",
    "UserPostAPI",
    "describe_creation",
    "notifier_from_settings",
    "shortcut_text",
]
