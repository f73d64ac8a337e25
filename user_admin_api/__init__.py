"""
Top-level package for the User Admin API.

All functionality lives in submodules under ``app``; import
``user_admin_api.app.main`` for the ASGI application.
"""

__all__ = []
