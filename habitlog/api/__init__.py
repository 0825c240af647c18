from fastapi import APIRouter

from habitlog.api.auth import router as auth_router
from habitlog.api.habits import router as habits_router
from habitlog.api.logs import router as logs_router
from habitlog.api.stats import router as stats_router
from habitlog.api.time_entries import router as time_entries_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(habits_router)
router.include_router(logs_router)
router.include_router(time_entries_router)
router.include_router(stats_router)

__all__ = ["router"]
