"""
Top-level package for the User Post Assistant API.

The HTTP service lives in ``app`` and the Python client (API client,
add-user form orchestration, chat panel state) in ``client``.
"""

__all__ = []
