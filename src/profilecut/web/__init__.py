"""REST API for profile cutting estimates.

Run with ``uvicorn profilecut.web.app:app``.
"""

from profilecut.web.app import create_app

__all__ = ["create_app"]
