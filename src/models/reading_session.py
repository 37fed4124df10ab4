from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from core.constants import SessionDecision


class ReadingSession(SQLModel, table=True):
    __tablename__ = "reading_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    book_id: UUID = Field(foreign_key="books.id", index=True)
    start_time: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    # open while end_time is null
    end_time: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True), index=True)
    )
    # milliseconds
    total_time: int = 0
    active_time: int = 0
    is_valid: bool = True
    fraud_score: int = 0
    decision: Optional[SessionDecision] = None
    can_receive_reward: bool = False
    reward_processed: bool = False
