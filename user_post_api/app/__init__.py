"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (users, assistant, session) exposes a router
defined in ``api/v1/endpoints``; versioning is handled by grouping
routers under the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
