from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


class UserBookReward(SQLModel, table=True):
    __tablename__ = "user_book_rewards"
    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_user_book_rewards_user_book"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    book_id: UUID = Field(foreign_key="books.id", index=True)
    # one-way latch: false -> true at most once per (user, book)
    has_received_reward: bool = False
    reading_attempts: int = 0
    fraud_attempts: int = 0
    first_reading_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    valid_reading_date: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True))
    )
