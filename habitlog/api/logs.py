from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from habitlog.api.deps import get_current_user_id, get_db
from habitlog.api.serializers import habit_dict, log_dict
from habitlog.crud import delete_log, get_daily_summary, get_habit_logs, get_logs_by_date, upsert_log
from habitlog.errors import InvalidInputError
from habitlog.schemas import LogUpsertIn

router = APIRouter(prefix="/api/logs", tags=["logs"])


def _require_date(date: Optional[str]) -> str:
    if not date:
        raise InvalidInputError("Date is required")
    return date


@router.get("/daily")
def logs_daily(
    date: Optional[str] = None,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    summary = get_daily_summary(db, user_id, _require_date(date))
    return {
        "date": summary["date"].isoformat(),
        "habits": [
            {**habit_dict(item["habit"]), "scheduled": item["scheduled"], "log": log_dict(item["log"])}
            for item in summary["habits"]
        ],
    }


@router.get("")
def logs_by_date(
    date: Optional[str] = None,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> List[Dict[str, Any]]:
    return [log_dict(log) for log in get_logs_by_date(db, user_id, _require_date(date))]


@router.get("/habit/{habit_id}")
def logs_for_habit(
    habit_id: int,
    startDate: Optional[str] = None,
    limit: int = 30,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> List[Dict[str, Any]]:
    return [log_dict(log) for log in get_habit_logs(db, user_id, habit_id, start_date=startDate, limit=limit)]


@router.post("/habit/{habit_id}")
def logs_upsert(
    habit_id: int,
    payload: LogUpsertIn,
    response: Response,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    changes = payload.model_dump(exclude_unset=True, exclude={"date"})
    log, created = upsert_log(db, user_id, habit_id, payload.date, changes)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return log_dict(log)


@router.delete("/habit/{habit_id}")
def logs_delete(
    habit_id: int,
    date: Optional[str] = None,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Dict[str, str]:
    delete_log(db, user_id, habit_id, _require_date(date))
    return {"message": "Log deleted successfully"}
