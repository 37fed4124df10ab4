import logging
from typing import List, Optional
import uuid

from sqlalchemy import update
from sqlmodel import Session, select

from core import constants
from core.config import settings
from core.exceptions import AppError, ConflictError, NotFoundError, RequestTimeoutError
from models.transaction import Transaction
from models.user import User
from models.withdrawal import Withdrawal
from schemas import TransactionOut, WithdrawalOut, WithdrawalRequest
from utils.extension_utils import deadline_passed, format_brl, to_iso, utcnow

logger = logging.getLogger(__name__)

PIX_KEY_TYPES = {item.value.lower(): item for item in constants.PixKeyType}


def to_withdrawal_out(withdrawal: Withdrawal) -> WithdrawalOut:
    return WithdrawalOut(
        id=withdrawal.id,
        user_id=withdrawal.user_id,
        amount=withdrawal.amount,
        pix_key=withdrawal.pix_key,
        pix_key_type=withdrawal.pix_key_type.value.lower(),
        status=withdrawal.status.value,
        requested_at=to_iso(withdrawal.requested_at),
        processed_at=to_iso(withdrawal.processed_at),
        failure_reason=withdrawal.failure_reason,
        transaction_id=withdrawal.external_transaction_id,
    )


def to_transaction_out(transaction: Transaction) -> TransactionOut:
    return TransactionOut(
        id=transaction.id,
        type=transaction.type.value,
        amount=transaction.amount,
        status=transaction.status.value,
        description=transaction.description,
        source_id=transaction.source_id,
        source_type=transaction.source_type,
        created_at=to_iso(transaction.created_at),
    )


def minimum_withdrawal(plan_type: constants.PlanType) -> int:
    if plan_type == constants.PlanType.PREMIUM:
        return settings.PREMIUM_MIN_WITHDRAWAL
    return settings.FREE_MIN_WITHDRAWAL


class WithdrawalService:
    """Records PIX withdrawal requests; the payout itself happens outside the API."""

    def __init__(self, session: Session, deadline: Optional[float] = None):
        self.session = session
        self.deadline = deadline

    def request_withdrawal(self, user: User, payload: WithdrawalRequest) -> WithdrawalOut:
        pix_key_type = PIX_KEY_TYPES.get(payload.pix_key_type.lower())
        if not pix_key_type:
            raise AppError(constants.MSG_INVALID_DATA)

        minimum = minimum_withdrawal(user.plan_type)
        if payload.amount < minimum:
            raise AppError(constants.MSG_MIN_WITHDRAWAL.format(amount=format_brl(minimum)))

        try:
            # reserve the amount only if the balance still covers it
            result = self.session.exec(
                update(User)
                .where(User.id == user.id)
                .where(User.balance >= payload.amount)
                .values(balance=User.balance - payload.amount, updated_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise AppError(constants.MSG_INSUFFICIENT_BALANCE)

            transaction = Transaction(
                user_id=user.id,
                type=constants.TransactionType.WITHDRAWAL,
                amount=payload.amount,
                status=constants.TransactionStatus.PENDING,
                description=f"Saque PIX de {format_brl(payload.amount)}",
                source_type=constants.SOURCE_TYPE_WITHDRAWAL,
            )
            withdrawal = Withdrawal(
                user_id=user.id,
                amount=payload.amount,
                pix_key=payload.pix_key.strip(),
                pix_key_type=pix_key_type,
                transaction_id=transaction.id,
            )
            transaction.source_id = str(withdrawal.id)
            self.session.add(transaction)
            self.session.flush()
            self.session.add(withdrawal)
            self.session.flush()
            if deadline_passed(self.deadline):
                raise RequestTimeoutError(constants.MSG_REQUEST_TIMEOUT)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(withdrawal)
        logger.info(
            f"Withdrawal requested: user={user.id} amount={payload.amount} "
            f"withdrawal={withdrawal.id}"
        )
        return to_withdrawal_out(withdrawal)

    def list_user_withdrawals(self, user_id: uuid.UUID) -> List[WithdrawalOut]:
        withdrawals = self.session.exec(
            select(Withdrawal)
            .where(Withdrawal.user_id == user_id)
            .order_by(Withdrawal.requested_at.desc())
        ).all()
        return [to_withdrawal_out(withdrawal) for withdrawal in withdrawals]

    def list_user_transactions(self, user_id: uuid.UUID) -> List[TransactionOut]:
        transactions = self.session.exec(
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.created_at.desc())
        ).all()
        return [to_transaction_out(transaction) for transaction in transactions]

    def list_withdrawals(
        self, status: Optional[constants.WithdrawalStatus] = None
    ) -> List[WithdrawalOut]:
        statement = select(Withdrawal).order_by(Withdrawal.requested_at.desc())
        if status:
            statement = statement.where(Withdrawal.status == status)
        return [to_withdrawal_out(withdrawal) for withdrawal in self.session.exec(statement).all()]

    def _finish(
        self,
        withdrawal_id: uuid.UUID,
        status: constants.WithdrawalStatus,
        failure_reason: Optional[str] = None,
        external_transaction_id: Optional[str] = None,
    ) -> Withdrawal:
        withdrawal = self.session.get(Withdrawal, withdrawal_id)
        if not withdrawal:
            raise NotFoundError(constants.MSG_WITHDRAWAL_NOT_FOUND)

        now = utcnow()
        try:
            result = self.session.exec(
                update(Withdrawal)
                .where(Withdrawal.id == withdrawal_id)
                .where(Withdrawal.status == constants.WithdrawalStatus.PENDING)
                .values(
                    status=status,
                    processed_at=now,
                    failure_reason=failure_reason,
                    external_transaction_id=external_transaction_id,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise ConflictError(constants.MSG_WITHDRAWAL_NOT_PENDING)

            transaction_status = (
                constants.TransactionStatus.COMPLETED
                if status == constants.WithdrawalStatus.COMPLETED
                else constants.TransactionStatus.FAILED
            )
            if withdrawal.transaction_id:
                self.session.exec(
                    update(Transaction)
                    .where(Transaction.id == withdrawal.transaction_id)
                    .values(status=transaction_status, updated_at=now)
                    .execution_options(synchronize_session=False)
                )

            if status == constants.WithdrawalStatus.FAILED:
                self.session.exec(
                    update(User)
                    .where(User.id == withdrawal.user_id)
                    .values(balance=User.balance + withdrawal.amount, updated_at=now)
                    .execution_options(synchronize_session=False)
                )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(withdrawal)
        return withdrawal

    def approve(
        self, withdrawal_id: uuid.UUID, external_transaction_id: Optional[str] = None
    ) -> WithdrawalOut:
        withdrawal = self._finish(
            withdrawal_id,
            constants.WithdrawalStatus.COMPLETED,
            external_transaction_id=external_transaction_id,
        )
        logger.info(f"Withdrawal approved: {withdrawal.id} amount={withdrawal.amount}")
        return to_withdrawal_out(withdrawal)

    def reject(self, withdrawal_id: uuid.UUID, reason: str) -> WithdrawalOut:
        withdrawal = self._finish(
            withdrawal_id, constants.WithdrawalStatus.FAILED, failure_reason=reason
        )
        logger.info(
            f"Withdrawal rejected: {withdrawal.id} amount={withdrawal.amount} reason={reason}"
        )
        return to_withdrawal_out(withdrawal)
