"""
Server access to the process settings.

``Settings`` and the shared ``settings`` instance are defined in
``user_post_api.config``; the service modules import them from here.
"""

from user_post_api.config import Settings, settings

__all__ = ["Settings", "settings"]
