from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from habitlog.api.deps import get_current_user_id, get_db
from habitlog.crud import authenticate, create_user, get_user
from habitlog.schemas import LoginIn, RegisterIn, UserOut
from habitlog.security import create_token

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, db: Session = Depends(get_db)) -> Dict[str, Any]:
    user = create_user(db, payload.name, payload.email, payload.password)
    return {"token": create_token(user.id), "user": UserOut.model_validate(user).model_dump()}


@router.post("/login")
def login(payload: LoginIn, db: Session = Depends(get_db)) -> Dict[str, Any]:
    user = authenticate(db, payload.email, payload.password)
    return {"token": create_token(user.id), "user": UserOut.model_validate(user).model_dump()}


@router.get("/me")
def me(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)) -> Dict[str, Any]:
    return {"user": UserOut.model_validate(get_user(db, user_id)).model_dump()}
