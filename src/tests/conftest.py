import os

# must be set before core.config is imported
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SEQ_SERVER_URL"] = ""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from api.api_v1.deps import get_db
from core import constants
from core.security import create_access_token, hash_password
from main import app
from models import (
    Book,
    ReadingSession,
    Review,
    Transaction,
    User,
    UserBookReward,
    Withdrawal,
)

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
SQLModel.metadata.create_all(test_engine)

# hashing at cost 12 is slow, share one hash across the suite
DEFAULT_PASSWORD = "secret123"
DEFAULT_PASSWORD_HASH = hash_password(DEFAULT_PASSWORD)


@pytest.fixture(scope="session")
def user_password():
    return DEFAULT_PASSWORD


@pytest.fixture(scope="module")
def db_session():
    session = Session(test_engine)
    yield session
    session.close()


@pytest.fixture(autouse=True)
def clean_tables(db_session: Session):
    db_session.rollback()
    db_session.query(Withdrawal).delete()
    db_session.query(Transaction).delete()
    db_session.query(Review).delete()
    db_session.query(UserBookReward).delete()
    db_session.query(ReadingSession).delete()
    db_session.query(Book).delete()
    db_session.query(User).delete()
    db_session.commit()
    db_session.expunge_all()


@pytest.fixture(scope="function")
def client(db_session: Session):
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def make_user(db_session: Session):
    counter = {"value": 0}

    def _make_user(**kwargs) -> User:
        counter["value"] += 1
        data = {
            "name": f"Reader {counter['value']}",
            "email": f"reader{counter['value']}@example.com",
            "phone": "(11) 98888-7777",
            "password_hash": DEFAULT_PASSWORD_HASH,
            "plan_type": constants.PlanType.FREE,
        }
        data.update(kwargs)
        user = User(**data)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture(scope="function")
def make_book(db_session: Session):
    def _make_book(**kwargs) -> Book:
        data = {
            "title": "A Casa das Marés",
            "author": "Helena Duarte",
            "genre": "Drama",
            "synopsis": "Uma família e o mar.",
            "content": "Era uma vez uma casa à beira do mar.",
            "base_reward_money": 10000,
            "reward_points": 100,
            "word_count": 3000,
            "estimated_read_time": 900,
            "is_initial_book": True,
        }
        data.update(kwargs)
        book = Book(**data)
        db_session.add(book)
        db_session.commit()
        db_session.refresh(book)
        return book

    return _make_book


@pytest.fixture(scope="function")
def open_session(db_session: Session):
    def _open_session(user: User, book: Book, minutes_ago: float = 20) -> ReadingSession:
        reading_session = ReadingSession(
            user_id=user.id,
            book_id=book.id,
            start_time=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        )
        db_session.add(reading_session)
        db_session.commit()
        db_session.refresh(reading_session)
        return reading_session

    return _open_session


@pytest.fixture(scope="function")
def auth_headers():
    def _auth_headers(user: User) -> dict:
        token = create_access_token(user.id, user.email, user.is_admin)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
