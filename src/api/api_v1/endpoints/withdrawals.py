from typing import List

from fastapi import APIRouter, status

import schemas
from api.api_v1.deps import CurrentUser, DeadlineDep, SessionDep
from services.withdrawal_service import WithdrawalService

router = APIRouter()


@router.post(
    "/withdrawals",
    response_model=schemas.ApiResponse[schemas.WithdrawalData],
    status_code=status.HTTP_201_CREATED,
)
def request_withdrawal(
    session: SessionDep,
    user: CurrentUser,
    payload: schemas.WithdrawalRequest,
    deadline: DeadlineDep,
):
    withdrawal = WithdrawalService(session, deadline=deadline).request_withdrawal(user, payload)
    return schemas.ApiResponse(data=schemas.WithdrawalData(withdrawal=withdrawal))


@router.get("/withdrawals", response_model=schemas.ApiResponse[List[schemas.WithdrawalOut]])
def get_withdrawals(session: SessionDep, user: CurrentUser):
    return schemas.ApiResponse(data=WithdrawalService(session).list_user_withdrawals(user.id))


@router.get("/transactions", response_model=schemas.ApiResponse[List[schemas.TransactionOut]])
def get_transactions(session: SessionDep, user: CurrentUser):
    return schemas.ApiResponse(data=WithdrawalService(session).list_user_transactions(user.id))
