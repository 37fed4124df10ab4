from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class Book(SQLModel, table=True):
    __tablename__ = "books"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(index=True)
    author: str
    genre: str
    synopsis: str
    content: str
    cover_image: Optional[str] = None

    # cents
    base_reward_money: int = 0
    reward_points: int = 0
    premium_multiplier: float = 3.0

    word_count: int = 0
    page_count: int = 0
    # seconds
    estimated_read_time: int = 0
    required_level: int = Field(default=0, index=True)
    is_initial_book: bool = False
    active: bool = Field(default=True, index=True)

    reviews_count: int = 0
    ratings_sum: int = 0
    average_rating: float = 0.0

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
