import time

import pytest
from sqlmodel import Session, select

from core import constants
from core.exceptions import AppError, ConflictError, RequestTimeoutError
from models import Transaction, Withdrawal
from schemas import WithdrawalRequest
from services.withdrawal_service import WithdrawalService, minimum_withdrawal


@pytest.fixture(scope="function")
def service(db_session: Session):
    return WithdrawalService(db_session)


def request(service, user, amount, pix_key_type="cpf"):
    return service.request_withdrawal(
        user,
        WithdrawalRequest(amount=amount, pix_key="123.456.789-00", pix_key_type=pix_key_type),
    )


def test_request_withdrawal_past_deadline_keeps_balance(db_session, make_user):
    user = make_user(balance=8000)
    late_service = WithdrawalService(db_session, deadline=time.monotonic() - 1)

    with pytest.raises(RequestTimeoutError):
        request(late_service, user, 6000)

    db_session.refresh(user)
    assert user.balance == 8000
    assert db_session.exec(select(Withdrawal)).all() == []
    assert db_session.exec(select(Transaction)).all() == []


def test_minimum_withdrawal_by_plan():
    assert minimum_withdrawal(constants.PlanType.FREE) == 5000
    assert minimum_withdrawal(constants.PlanType.PREMIUM) == 1500


def test_request_withdrawal_reserves_balance(db_session, service, make_user):
    user = make_user(balance=8000)

    withdrawal = request(service, user, 6000)

    assert withdrawal.status == "PENDING"
    assert withdrawal.pix_key_type == "cpf"
    db_session.refresh(user)
    assert user.balance == 2000

    transaction = db_session.exec(select(Transaction)).one()
    assert transaction.type == constants.TransactionType.WITHDRAWAL
    assert transaction.status == constants.TransactionStatus.PENDING
    assert transaction.amount == 6000
    assert transaction.source_id == str(withdrawal.id)


def test_request_withdrawal_below_minimum(service, make_user):
    user = make_user(balance=8000)

    with pytest.raises(AppError) as exc_info:
        request(service, user, 4999)

    assert exc_info.value.message == "Valor mínimo para saque: R$ 50,00"


def test_premium_minimum_is_lower(service, make_user):
    user = make_user(balance=8000, plan_type=constants.PlanType.PREMIUM)

    withdrawal = request(service, user, 1500, pix_key_type="email")

    assert withdrawal.amount == 1500


def test_request_withdrawal_insufficient_balance(db_session, service, make_user):
    user = make_user(balance=5000)

    with pytest.raises(AppError) as exc_info:
        request(service, user, 6000)

    assert exc_info.value.message == constants.MSG_INSUFFICIENT_BALANCE
    db_session.refresh(user)
    assert user.balance == 5000
    assert db_session.exec(select(Withdrawal)).all() == []


def test_request_withdrawal_invalid_pix_type(service, make_user):
    user = make_user(balance=8000)

    with pytest.raises(AppError) as exc_info:
        request(service, user, 6000, pix_key_type="iban")

    assert exc_info.value.message == constants.MSG_INVALID_DATA


def test_approve_withdrawal(db_session, service, make_user):
    user = make_user(balance=8000)
    withdrawal = request(service, user, 6000)

    approved = service.approve(withdrawal.id, "E2E-0001")

    assert approved.status == "COMPLETED"
    assert approved.transaction_id == "E2E-0001"
    assert approved.processed_at is not None
    transaction = db_session.exec(select(Transaction)).one()
    assert transaction.status == constants.TransactionStatus.COMPLETED
    db_session.refresh(user)
    assert user.balance == 2000


def test_reject_withdrawal_refunds_balance(db_session, service, make_user):
    user = make_user(balance=8000)
    withdrawal = request(service, user, 6000)

    rejected = service.reject(withdrawal.id, "Chave PIX inválida")

    assert rejected.status == "FAILED"
    assert rejected.failure_reason == "Chave PIX inválida"
    transaction = db_session.exec(select(Transaction)).one()
    assert transaction.status == constants.TransactionStatus.FAILED
    db_session.refresh(user)
    assert user.balance == 8000


def test_withdrawal_is_finished_once(db_session, service, make_user):
    user = make_user(balance=8000)
    withdrawal = request(service, user, 6000)
    service.reject(withdrawal.id, "Chave PIX inválida")

    with pytest.raises(ConflictError):
        service.reject(withdrawal.id, "Chave PIX inválida")
    with pytest.raises(ConflictError):
        service.approve(withdrawal.id)

    db_session.refresh(user)
    assert user.balance == 8000


def test_withdrawal_api(client, make_user, auth_headers):
    user = make_user(balance=8000)
    headers = auth_headers(user)

    created = client.post(
        "/api/withdrawals",
        json={"amount": 5000, "pixKey": "leitor@example.com", "pixKeyType": "email"},
        headers=headers,
    )
    assert created.status_code == 201
    assert created.json()["data"]["withdrawal"]["pixKeyType"] == "email"

    withdrawals = client.get("/api/withdrawals", headers=headers).json()["data"]
    assert [item["amount"] for item in withdrawals] == [5000]

    transactions = client.get("/api/transactions", headers=headers).json()["data"]
    assert transactions[0]["type"] == "WITHDRAWAL"
    assert transactions[0]["sourceType"] == "withdrawal"


def test_withdrawal_api_rejects_non_positive_amount(client, make_user, auth_headers):
    user = make_user(balance=8000)

    response = client.post(
        "/api/withdrawals",
        json={"amount": 0, "pixKey": "x", "pixKeyType": "cpf"},
        headers=auth_headers(user),
    )

    assert response.status_code == 400
    assert response.json()["error"] == constants.MSG_INVALID_DATA
