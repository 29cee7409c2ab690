"""Bot handlers module."""

from .common import router as common_router
from .match import router as match_router

__all__ = ["common_router", "match_router"]
