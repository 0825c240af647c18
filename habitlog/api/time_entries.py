from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from habitlog.api.deps import get_current_user_id, get_db
from habitlog.api.serializers import entry_dict
from habitlog.crud import add_interval, delete_interval, list_intervals
from habitlog.schemas import TimeEntryIn

router = APIRouter(prefix="/api/time-entries", tags=["time-entries"])


@router.get("/log/{log_id}")
def entries_for_log(log_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    return [entry_dict(e) for e in list_intervals(db, user_id, log_id)]


@router.post("/habit/{habit_id}/date/{date}", status_code=status.HTTP_201_CREATED)
def entries_add(
    habit_id: int,
    date: str,
    payload: TimeEntryIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    result = add_interval(db, user_id, habit_id, date, payload.start_time, payload.end_time)
    return {**result, "entry": entry_dict(result["entry"])}


@router.delete("/{entry_id}")
def entries_delete(entry_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)) -> Dict[str, Any]:
    return delete_interval(db, user_id, entry_id)
