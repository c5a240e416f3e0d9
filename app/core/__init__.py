"""Core module - Settings, logging, and HTTP exceptions.

Import submodules directly where needed:

    from app.core.logging import setup_logging
    from app.core.exceptions import NotFoundError
"""

from app.core.config import settings

__all__ = [
    "settings",
]
