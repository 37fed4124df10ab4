from typing import Optional
import uuid

from pydantic import Field

from schemas.base import CamelModel


class StartReadingData(CamelModel):
    session_id: uuid.UUID
    start_time: str
    message: Optional[str] = None


class CompleteReadingRequest(CamelModel):
    session_id: Optional[str] = None
    # milliseconds, client hint only
    reading_time: Optional[int] = Field(default=None, ge=0)
    rating: Optional[int] = None
    comment: Optional[str] = None
    donation_amount: Optional[int] = Field(default=None, ge=0)


class CompleteReadingData(CamelModel):
    review_id: uuid.UUID
    earned_money: int
    earned_points: int
    reward_processed: bool
    message: str


class FraudVerdict(CamelModel):
    min_reading_time: float
    actual_reading_time: int
    is_fraud: bool
    fraud_score: int
