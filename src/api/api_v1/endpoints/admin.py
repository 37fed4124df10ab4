from typing import List, Optional
import uuid

from fastapi import APIRouter, Query

import schemas
from api.api_v1.deps import AdminUser, SessionDep
from core.constants import WithdrawalStatus
from services.book_service import BookService
from services.user_service import UserService
from services.withdrawal_service import WithdrawalService

router = APIRouter()


@router.get("/users", response_model=schemas.ApiResponse[schemas.Page[schemas.PublicUser]])
def get_users(
    session: SessionDep,
    admin: AdminUser,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    return schemas.ApiResponse(data=UserService(session).list_users(page, limit))


@router.post("/users/{user_id}/suspend", response_model=schemas.ApiResponse[schemas.UserData])
def suspend_user(
    session: SessionDep,
    admin: AdminUser,
    user_id: uuid.UUID,
    payload: schemas.SuspendUserRequest,
):
    user = UserService(session).set_suspension(user_id, True, payload.reason)
    return schemas.ApiResponse(data=schemas.UserData(user=user))


@router.post("/users/{user_id}/unsuspend", response_model=schemas.ApiResponse[schemas.UserData])
def unsuspend_user(session: SessionDep, admin: AdminUser, user_id: uuid.UUID):
    user = UserService(session).set_suspension(user_id, False)
    return schemas.ApiResponse(data=schemas.UserData(user=user))


@router.post(
    "/books",
    response_model=schemas.ApiResponse[schemas.AdminBook],
    status_code=201,
)
def create_book(session: SessionDep, admin: AdminUser, payload: schemas.BookCreateRequest):
    book = BookService(session).create_book(payload)
    return schemas.ApiResponse(data=schemas.AdminBook.model_validate(book))


@router.patch("/books/{book_id}", response_model=schemas.ApiResponse[schemas.AdminBook])
def update_book(
    session: SessionDep,
    admin: AdminUser,
    book_id: uuid.UUID,
    payload: schemas.BookUpdateRequest,
):
    book = BookService(session).update_book(book_id, payload)
    return schemas.ApiResponse(data=schemas.AdminBook.model_validate(book))


@router.get("/withdrawals", response_model=schemas.ApiResponse[List[schemas.WithdrawalOut]])
def get_withdrawals(
    session: SessionDep,
    admin: AdminUser,
    status: Optional[WithdrawalStatus] = None,
):
    return schemas.ApiResponse(data=WithdrawalService(session).list_withdrawals(status))


@router.post(
    "/withdrawals/{withdrawal_id}/approve",
    response_model=schemas.ApiResponse[schemas.WithdrawalData],
)
def approve_withdrawal(
    session: SessionDep,
    admin: AdminUser,
    withdrawal_id: uuid.UUID,
    payload: schemas.ApproveWithdrawalRequest,
):
    withdrawal = WithdrawalService(session).approve(withdrawal_id, payload.transaction_id)
    return schemas.ApiResponse(data=schemas.WithdrawalData(withdrawal=withdrawal))


@router.post(
    "/withdrawals/{withdrawal_id}/reject",
    response_model=schemas.ApiResponse[schemas.WithdrawalData],
)
def reject_withdrawal(
    session: SessionDep,
    admin: AdminUser,
    withdrawal_id: uuid.UUID,
    payload: schemas.RejectWithdrawalRequest,
):
    withdrawal = WithdrawalService(session).reject(withdrawal_id, payload.reason)
    return schemas.ApiResponse(data=schemas.WithdrawalData(withdrawal=withdrawal))
