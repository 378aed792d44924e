"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from sitechat.api import app

    uvicorn sitechat.api:app --port 3000
"""

from sitechat.api.app import app

__all__ = ["app"]
