from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from core.constants import PixKeyType, WithdrawalStatus


class Withdrawal(SQLModel, table=True):
    __tablename__ = "withdrawals"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    # cents
    amount: int
    pix_key: str
    pix_key_type: PixKeyType
    status: WithdrawalStatus = Field(default=WithdrawalStatus.PENDING, index=True)
    requested_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
    processed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True))
    )
    failure_reason: Optional[str] = None
    # payment provider reference
    external_transaction_id: Optional[str] = None
    transaction_id: Optional[UUID] = Field(default=None, foreign_key="transactions.id")
