from typing import Optional
import uuid

from schemas.base import CamelModel


class PublicUser(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    phone: str
    level: int
    points: int
    balance: int
    plan_type: str
    is_admin: bool
    onboarding_completed: bool
    commitment: Optional[str] = None
    income_range: Optional[str] = None
    profile_image: Optional[str] = None
    created_at: str


class AuthData(CamelModel):
    user: PublicUser
    token: str


class UserData(CamelModel):
    user: PublicUser


class RegisterRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class OnboardingRequest(CamelModel):
    commitment: Optional[str] = None
    income_range: Optional[str] = None


class SuspendUserRequest(CamelModel):
    reason: Optional[str] = None
