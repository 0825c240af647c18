from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from habitlog.api.deps import get_current_user_id, get_db
from habitlog.crud import get_habit_stats, get_user_stats

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/user")
def stats_user(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)) -> Dict[str, Any]:
    return get_user_stats(db, user_id)


@router.get("/habit/{habit_id}")
def stats_habit(habit_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)) -> Dict[str, Any]:
    return get_habit_stats(db, user_id, habit_id)
