from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from habitlog.crud import create_habit, upsert_log
from habitlog.db import make_engine, make_session_factory
from habitlog.models import Base, User
from habitlog.security import create_token, hash_password

TODAY = date(2026, 10, 19)


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def _make_user(db, name: str, email: str) -> User:
    user = User(name=name, email=email, password_hash=hash_password("secret123"))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db):
    return _make_user(db, "Ada", "ada@example.com")


@pytest.fixture
def other_user(db):
    return _make_user(db, "Bob", "bob@example.com")


@pytest.fixture
def make_habit(db, user):
    def _make(owner=None, **fields):
        data = {"name": "Read", "tracking_type": "completion"}
        data.update(fields)
        return create_habit(db, (owner or user).id, data)

    return _make


@pytest.fixture
def log_day(db, user):
    """Write a completion log for a habit on a given day."""

    def _log(habit, day, completed=True, owner=None):
        log, _ = upsert_log(db, (owner or user).id, habit.id, day, {"completed": completed})
        return log

    return _log


@pytest.fixture
def client(session_factory):
    from api_main import create_app

    return TestClient(create_app(session_factory))


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_token(user.id)}"}
