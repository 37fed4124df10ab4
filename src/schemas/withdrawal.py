from typing import Optional
import uuid

from pydantic import Field

from schemas.base import CamelModel


class WithdrawalRequest(CamelModel):
    amount: int = Field(gt=0)
    pix_key: str = Field(min_length=1)
    pix_key_type: str


class ApproveWithdrawalRequest(CamelModel):
    transaction_id: Optional[str] = None


class RejectWithdrawalRequest(CamelModel):
    reason: str = Field(min_length=1)


class WithdrawalOut(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    amount: int
    pix_key: str
    pix_key_type: str
    status: str
    requested_at: str
    processed_at: Optional[str] = None
    failure_reason: Optional[str] = None
    transaction_id: Optional[str] = None


class WithdrawalData(CamelModel):
    withdrawal: WithdrawalOut


class TransactionOut(CamelModel):
    id: uuid.UUID
    type: str
    amount: int
    status: str
    description: str
    source_id: Optional[str] = None
    source_type: Optional[str] = None
    created_at: str
