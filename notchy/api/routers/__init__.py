"""
API routers.

Exports: chat_router, health_router, study_aids_router
"""

from notchy.api.routers.chat import router as chat_router
from notchy.api.routers.health import router as health_router
from notchy.api.routers.study_aids import router as study_aids_router

__all__ = ["chat_router", "health_router", "study_aids_router"]
