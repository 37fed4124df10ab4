from fastapi import APIRouter, Request, status

import schemas
from api.api_v1.deps import CurrentUser, SessionDep, client_ip
from services.user_service import UserService, to_public_user

router = APIRouter()


@router.post(
    "/register",
    response_model=schemas.ApiResponse[schemas.AuthData],
    status_code=status.HTTP_201_CREATED,
)
def register(session: SessionDep, payload: schemas.RegisterRequest, request: Request):
    data = UserService(session).register(payload, ip=client_ip(request))
    return schemas.ApiResponse(data=data)


@router.post("/login", response_model=schemas.ApiResponse[schemas.AuthData])
def login(session: SessionDep, payload: schemas.LoginRequest, request: Request):
    data = UserService(session).login(payload, ip=client_ip(request))
    return schemas.ApiResponse(data=data)


@router.post("/onboarding", response_model=schemas.ApiResponse[schemas.UserData])
def complete_onboarding(
    session: SessionDep, user: CurrentUser, payload: schemas.OnboardingRequest
):
    public_user = UserService(session).complete_onboarding(user, payload)
    return schemas.ApiResponse(data=schemas.UserData(user=public_user))


@router.get("/me", response_model=schemas.ApiResponse[schemas.UserData])
def get_me(user: CurrentUser):
    return schemas.ApiResponse(data=schemas.UserData(user=to_public_user(user)))
