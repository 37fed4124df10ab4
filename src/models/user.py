from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from core.constants import Commitment, IncomeRange, PlanType


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    phone: str
    password_hash: str
    level: int = 0
    points: int = 0
    # cents
    balance: int = 0
    plan_type: PlanType = Field(default=PlanType.FREE, index=True)
    is_admin: bool = False
    onboarding_completed: bool = False
    commitment: Optional[Commitment] = None
    income_range: Optional[IncomeRange] = None
    profile_image: Optional[str] = None

    fraud_score: int = 0
    is_suspended: bool = False
    suspended_reason: Optional[str] = None
    last_login_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True))
    )
    last_login_ip: Optional[str] = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
