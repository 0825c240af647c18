from typing import Iterator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from habitlog.crud import get_user
from habitlog.errors import UnauthorizedError
from habitlog.security import decode_token


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> int:
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("No authentication token")

    user_id = decode_token(authorization.split(" ", 1)[1].strip())
    if user_id is None:
        raise UnauthorizedError("Invalid or expired token")
    if get_user(db, user_id) is None:
        raise UnauthorizedError("User not found")
    return user_id
