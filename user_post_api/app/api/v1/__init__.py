"""
Version 1 of the HTTP API: users, assistant capabilities and session.

``router.api_router`` is mounted at ``/api/v1`` by ``create_app``.
"""
