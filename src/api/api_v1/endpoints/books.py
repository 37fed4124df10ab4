import uuid

from fastapi import APIRouter

import schemas
from api.api_v1.deps import CurrentUser, DeadlineDep, OptionalUser, SessionDep
from services.book_service import BookService
from services.reading_reward_service import ReadingRewardService

router = APIRouter()


@router.get("", response_model=schemas.ApiResponse[schemas.BookListData])
def get_books(session: SessionDep, user: OptionalUser):
    return schemas.ApiResponse(data=BookService(session).list_books(user))


@router.get("/{book_id}", response_model=schemas.ApiResponse[schemas.BookDetailData])
def get_book(session: SessionDep, user: OptionalUser, book_id: uuid.UUID):
    book = BookService(session).get_book(book_id, user)
    return schemas.ApiResponse(data=schemas.BookDetailData(book=book))


@router.get("/{book_id}/content", response_model=schemas.ApiResponse[schemas.BookContent])
def get_book_content(session: SessionDep, user: CurrentUser, book_id: uuid.UUID):
    return schemas.ApiResponse(data=BookService(session).get_book_content(book_id, user))


@router.post(
    "/{book_id}/start-reading",
    response_model=schemas.ApiResponse[schemas.StartReadingData],
)
def start_reading(session: SessionDep, user: CurrentUser, book_id: uuid.UUID):
    data = ReadingRewardService(session).start_reading(user.id, book_id)
    return schemas.ApiResponse(data=data)


@router.post(
    "/{book_id}/complete",
    response_model=schemas.ApiResponse[schemas.CompleteReadingData],
)
def complete_reading(
    session: SessionDep,
    user: CurrentUser,
    book_id: uuid.UUID,
    payload: schemas.CompleteReadingRequest,
    deadline: DeadlineDep,
):
    service = ReadingRewardService(session, deadline=deadline)
    data = service.complete_reading(user.id, book_id, payload)
    return schemas.ApiResponse(data=data)
