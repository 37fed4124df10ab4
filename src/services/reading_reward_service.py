"""Reading sessions and the reward decision taken when one is completed.

Completing a session closes it, scores it for fraud, records the attempt in
the per-(user, book) reward ledger, stores the review and, when the reader is
eligible, pays the book reward exactly once. All of it is one database
transaction.
"""

from datetime import datetime
import logging
from typing import Callable, Optional, Tuple
import uuid

from sqlalchemy import update
from sqlmodel import Session, select

from core import constants
from core.config import FraudConfig, settings
from core.exceptions import AppError, NotFoundError, RequestTimeoutError
from models.book import Book
from models.reading_session import ReadingSession
from models.review import Review
from models.transaction import Transaction
from models.user import User
from models.user_book_reward import UserBookReward
from schemas import (
    CompleteReadingData,
    CompleteReadingRequest,
    FraudVerdict,
    StartReadingData,
)
from services.book_service import BookService
from utils.api import get_active_book, get_user_book_reward, parse_uuid
from utils.extension_utils import (
    deadline_passed,
    elapsed_ms,
    round_half_up,
    to_iso,
    utcnow,
)

logger = logging.getLogger(__name__)


def min_reading_time_ms(word_count: int, max_reading_speed: int) -> float:
    """Fastest plausible time to read `word_count` words at `max_reading_speed` wpm."""
    return word_count / max_reading_speed * 60 * 1000


def resolve_reading_time(
    server_elapsed: int, reading_time_hint: Optional[int] = None
) -> int:
    # the client hint may only shorten the server measurement
    server_elapsed = max(server_elapsed, 0)
    if not reading_time_hint:
        return server_elapsed
    return min(reading_time_hint, server_elapsed)


class ReadingRewardService:
    def __init__(
        self,
        session: Session,
        fraud_config: Optional[FraudConfig] = None,
        clock: Callable[[], datetime] = utcnow,
        deadline: Optional[float] = None,
    ):
        self.session = session
        self.fraud_config = fraud_config or settings.fraud_config
        self.clock = clock
        self.deadline = deadline

    def start_reading(self, user_id: uuid.UUID, book_id: uuid.UUID) -> StartReadingData:
        book = get_active_book(self.session, book_id)
        if not book:
            raise NotFoundError(constants.MSG_BOOK_NOT_FOUND)

        active_session = self.session.exec(
            select(ReadingSession)
            .where(ReadingSession.user_id == user_id)
            .where(ReadingSession.book_id == book_id)
            .where(ReadingSession.end_time == None)
        ).first()
        if active_session:
            return StartReadingData(
                session_id=active_session.id,
                start_time=to_iso(active_session.start_time),
                message=constants.MSG_SESSION_ALREADY_ACTIVE,
            )

        reading_session = ReadingSession(
            user_id=user_id, book_id=book_id, start_time=self.clock()
        )
        self.session.add(reading_session)
        self.session.commit()
        self.session.refresh(reading_session)

        logger.info(
            f"Reading started: {book.title} "
            f"user={user_id} book={book_id} session={reading_session.id}"
        )
        return StartReadingData(
            session_id=reading_session.id,
            start_time=to_iso(reading_session.start_time),
        )

    def evaluate_fraud(
        self,
        book: Book,
        reading_session: ReadingSession,
        now: datetime,
        reading_time_hint: Optional[int] = None,
    ) -> FraudVerdict:
        min_reading_time = min_reading_time_ms(
            book.word_count, self.fraud_config.max_reading_speed
        )
        actual_reading_time = resolve_reading_time(
            elapsed_ms(reading_session.start_time, now), reading_time_hint
        )
        is_fraud = actual_reading_time < min_reading_time
        return FraudVerdict(
            min_reading_time=min_reading_time,
            actual_reading_time=actual_reading_time,
            is_fraud=is_fraud,
            fraud_score=(
                constants.FRAUD_SCORE_MAX if is_fraud else constants.FRAUD_SCORE_MIN
            ),
        )

    def can_user_receive_book_reward(self, user_id: uuid.UUID, book_id: uuid.UUID) -> bool:
        user = self.session.get(User, user_id)
        if not user:
            return False

        # premium readers are paid for every book
        if user.plan_type == constants.PlanType.PREMIUM:
            return True

        # free readers only for the onboarding set
        book = self.session.get(Book, book_id)
        return bool(book and book.is_initial_book)

    @staticmethod
    def calculate_reward(user: User, book: Book) -> Tuple[int, int]:
        multiplier = (
            book.premium_multiplier
            if user.plan_type == constants.PlanType.PREMIUM
            else 1
        )
        earned_money = int(round_half_up(book.base_reward_money * multiplier))
        earned_points = int(round_half_up(book.reward_points * multiplier))
        return earned_money, earned_points

    def complete_reading(
        self,
        user_id: uuid.UUID,
        book_id: uuid.UUID,
        payload: CompleteReadingRequest,
    ) -> CompleteReadingData:
        rating = payload.rating
        if not payload.session_id or rating is None or not 1 <= rating <= 5:
            raise AppError(constants.MSG_INVALID_DATA, status_code=400)

        session_id = parse_uuid(payload.session_id)
        reading_session = self.session.get(ReadingSession, session_id) if session_id else None
        if (
            not reading_session
            or reading_session.user_id != user_id
            or reading_session.book_id != book_id
        ):
            raise NotFoundError(constants.MSG_INVALID_SESSION)

        if reading_session.end_time is not None:
            raise AppError(constants.MSG_SESSION_FINISHED, status_code=400)

        book = self.session.get(Book, book_id)
        user = self.session.get(User, user_id)
        if not book or not user:
            raise NotFoundError(constants.MSG_INVALID_SESSION)

        now = self.clock()
        verdict = self.evaluate_fraud(book, reading_session, now, payload.reading_time)

        try:
            self._close_session(reading_session.id, verdict, now)
            self._register_attempt(user_id, book_id, verdict.is_fraud)

            review = Review(
                user_id=user_id,
                book_id=book_id,
                rating=rating,
                comment=payload.comment or None,
                donation_amount=payload.donation_amount,
            )
            self.session.add(review)
            self.session.flush()

            earned_money = 0
            earned_points = 0
            reward_processed = False
            if not verdict.is_fraud and self.can_user_receive_book_reward(user_id, book_id):
                if self._claim_reward_latch(user_id, book_id, now):
                    earned_money, earned_points = self.calculate_reward(user, book)
                    self._grant_reward(
                        user_id, book, reading_session.id, earned_money, earned_points, now
                    )
                    reward_processed = True

            BookService(self.session).apply_new_rating(book, rating)

            review_id = review.id
            if deadline_passed(self.deadline):
                logger.warning(
                    f"Deadline passed before commit, rolling back completion of "
                    f"session {reading_session.id} for user {user_id}"
                )
                raise RequestTimeoutError(constants.MSG_REQUEST_TIMEOUT)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        if reward_processed:
            message = constants.MSG_REWARD_GRANTED
        elif verdict.is_fraud:
            message = constants.MSG_READING_TOO_FAST
        else:
            message = constants.MSG_REWARD_ALREADY_RECEIVED

        logger.info(
            f"Reading completed: {book.title} user={user_id} book={book_id} "
            f"session={session_id} rating={rating} earned_money={earned_money} "
            f"earned_points={earned_points} is_fraud={verdict.is_fraud} "
            f"reward_processed={reward_processed}"
        )

        return CompleteReadingData(
            review_id=review_id,
            earned_money=earned_money,
            earned_points=earned_points,
            reward_processed=reward_processed,
            message=message,
        )

    def _close_session(self, session_id: uuid.UUID, verdict: FraudVerdict, now: datetime):
        result = self.session.exec(
            update(ReadingSession)
            .where(ReadingSession.id == session_id)
            .where(ReadingSession.end_time == None)
            .values(
                end_time=now,
                total_time=verdict.actual_reading_time,
                active_time=verdict.actual_reading_time,
                is_valid=not verdict.is_fraud,
                fraud_score=verdict.fraud_score,
                decision=(
                    constants.SessionDecision.REJECTED
                    if verdict.is_fraud
                    else constants.SessionDecision.APPROVED
                ),
                can_receive_reward=not verdict.is_fraud,
                reward_processed=True,
            )
            .execution_options(synchronize_session=False)
        )
        # another request closed it first
        if result.rowcount != 1:
            raise AppError(constants.MSG_SESSION_FINISHED, status_code=400)

    def _register_attempt(self, user_id: uuid.UUID, book_id: uuid.UUID, is_fraud: bool):
        user_book_reward = get_user_book_reward(self.session, user_id, book_id)
        if not user_book_reward:
            self.session.add(
                UserBookReward(
                    user_id=user_id,
                    book_id=book_id,
                    reading_attempts=1,
                    fraud_attempts=1 if is_fraud else 0,
                )
            )
            self.session.flush()
            return

        values = {"reading_attempts": UserBookReward.reading_attempts + 1}
        if is_fraud:
            values["fraud_attempts"] = UserBookReward.fraud_attempts + 1
        self.session.exec(
            update(UserBookReward)
            .where(UserBookReward.id == user_book_reward.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

    def _claim_reward_latch(
        self, user_id: uuid.UUID, book_id: uuid.UUID, now: datetime
    ) -> bool:
        """Flip has_received_reward false -> true; True only for the caller that flipped it."""
        result = self.session.exec(
            update(UserBookReward)
            .where(UserBookReward.user_id == user_id)
            .where(UserBookReward.book_id == book_id)
            .where(UserBookReward.has_received_reward == False)
            .values(has_received_reward=True, valid_reading_date=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def _grant_reward(
        self,
        user_id: uuid.UUID,
        book: Book,
        session_id: uuid.UUID,
        earned_money: int,
        earned_points: int,
        now: datetime,
    ):
        self.session.exec(
            update(User)
            .where(User.id == user_id)
            .values(
                balance=User.balance + earned_money,
                points=User.points + earned_points,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        self.session.add(
            Transaction(
                user_id=user_id,
                type=constants.TransactionType.EARNING,
                amount=earned_money,
                status=constants.TransactionStatus.COMPLETED,
                description=f'Recompensa por avaliar "{book.title}"',
                source_id=str(session_id),
                source_type=constants.SOURCE_TYPE_READING,
            )
        )
