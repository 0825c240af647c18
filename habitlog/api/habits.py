from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from habitlog.api.deps import get_current_user_id, get_db
from habitlog.api.serializers import habit_dict
from habitlog.crud import create_habit, delete_habit, get_owned_habit, list_habits, update_habit
from habitlog.schemas import HabitCreateIn, HabitUpdateIn

router = APIRouter(prefix="/api/habits", tags=["habits"])


@router.get("")
def habits_list(
    active: Optional[bool] = None,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> List[Dict[str, Any]]:
    return [habit_dict(h) for h in list_habits(db, user_id, active=active)]


@router.post("", status_code=status.HTTP_201_CREATED)
def habits_create(
    payload: HabitCreateIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    return habit_dict(create_habit(db, user_id, payload.model_dump()))


@router.get("/{habit_id}")
def habits_get(habit_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)) -> Dict[str, Any]:
    return habit_dict(get_owned_habit(db, user_id, habit_id))


@router.put("/{habit_id}")
def habits_update(
    habit_id: int,
    payload: HabitUpdateIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    return habit_dict(update_habit(db, user_id, habit_id, payload.model_dump(exclude_unset=True)))


@router.delete("/{habit_id}")
def habits_delete(habit_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)) -> Dict[str, str]:
    delete_habit(db, user_id, habit_id)
    return {"message": "Habit deleted successfully"}
