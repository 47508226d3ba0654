"""API route modules."""
from .stats import router as stats_router
from .nutrition import router as nutrition_router
from .progress import router as progress_router

__all__ = [
    "stats_router",
    "nutrition_router",
    "progress_router",
]
