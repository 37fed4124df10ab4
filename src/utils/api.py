import math
from typing import Optional
import uuid

from sqlmodel import Session, func, select

from models.book import Book
from models.user import User
from models.user_book_reward import UserBookReward


def parse_uuid(value) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    statement = select(User).where(User.email == normalize_email(email))
    return session.exec(statement).first()


def get_active_book(session: Session, book_id: uuid.UUID) -> Optional[Book]:
    statement = select(Book).where(Book.id == book_id).where(Book.active == True)
    return session.exec(statement).first()


def get_user_book_reward(
    session: Session, user_id: uuid.UUID, book_id: uuid.UUID
) -> Optional[UserBookReward]:
    statement = (
        select(UserBookReward)
        .where(UserBookReward.user_id == user_id)
        .where(UserBookReward.book_id == book_id)
    )
    return session.exec(statement).first()


def paginate(session: Session, statement, page: int, limit: int) -> dict:
    total = session.exec(
        select(func.count()).select_from(statement.subquery())
    ).one()
    items = session.exec(statement.offset((page - 1) * limit).limit(limit)).all()
    return {
        "items": items,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }
