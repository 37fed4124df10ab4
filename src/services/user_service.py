import logging
from typing import Optional
import uuid

from sqlmodel import Session, select

from core import constants
from core.exceptions import AppError, ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from core.security import create_access_token, hash_password, verify_password
from models.user import User
from schemas import (
    AuthData,
    LoginRequest,
    OnboardingRequest,
    Page,
    PublicUser,
    RegisterRequest,
)
from utils.api import get_user_by_email, normalize_email, paginate
from utils.extension_utils import to_iso, utcnow

logger = logging.getLogger(__name__)

VALID_COMMITMENTS = {item.value.lower(): item for item in constants.Commitment}
VALID_INCOME_RANGES = {item.value.lower(): item for item in constants.IncomeRange}


def to_public_user(user: User) -> PublicUser:
    return PublicUser(
        id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        level=user.level,
        points=user.points,
        balance=user.balance,
        plan_type=user.plan_type.value.lower(),
        is_admin=user.is_admin,
        onboarding_completed=user.onboarding_completed,
        commitment=user.commitment.value.lower() if user.commitment else None,
        income_range=user.income_range.value.lower() if user.income_range else None,
        profile_image=user.profile_image,
        created_at=to_iso(user.created_at),
    )


def suspension_message(user: User) -> str:
    return constants.MSG_ACCOUNT_SUSPENDED.format(
        reason=user.suspended_reason or constants.MSG_DEFAULT_SUSPENSION_REASON
    )


class UserService:
    def __init__(self, session: Session):
        self.session = session

    def _auth_data(self, user: User) -> AuthData:
        token = create_access_token(user.id, user.email, user.is_admin)
        return AuthData(user=to_public_user(user), token=token)

    def register(self, payload: RegisterRequest, ip: Optional[str] = None) -> AuthData:
        if not (payload.name and payload.email and payload.phone and payload.password):
            raise AppError(constants.MSG_MISSING_REGISTER_FIELDS)

        if len(payload.password) < constants.MIN_PASSWORD_LENGTH:
            raise AppError(constants.MSG_SHORT_PASSWORD)

        if get_user_by_email(self.session, payload.email):
            raise ConflictError(constants.MSG_EMAIL_IN_USE)

        user = User(
            name=payload.name.strip(),
            email=normalize_email(payload.email),
            phone=payload.phone.strip(),
            password_hash=hash_password(payload.password),
            last_login_ip=ip,
        )
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)

        logger.info(f"New user registered: {user.email} ({user.id}) ip={ip}")
        return self._auth_data(user)

    def login(self, payload: LoginRequest, ip: Optional[str] = None) -> AuthData:
        if not payload.email or not payload.password:
            raise AppError(constants.MSG_MISSING_LOGIN_FIELDS)

        user = get_user_by_email(self.session, payload.email)
        if not user:
            raise UnauthorizedError(constants.MSG_INVALID_CREDENTIALS)

        if user.is_suspended:
            raise ForbiddenError(suspension_message(user))

        if not verify_password(payload.password, user.password_hash):
            raise UnauthorizedError(constants.MSG_INVALID_CREDENTIALS)

        user.last_login_at = utcnow()
        user.last_login_ip = ip
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)

        logger.info(f"Login: {user.email} ({user.id}) ip={ip}")
        return self._auth_data(user)

    def complete_onboarding(self, user: User, payload: OnboardingRequest) -> PublicUser:
        commitment = VALID_COMMITMENTS.get((payload.commitment or "").lower())
        income_range = VALID_INCOME_RANGES.get((payload.income_range or "").lower())
        if not commitment or not income_range:
            raise AppError(constants.MSG_INVALID_ONBOARDING)

        user.onboarding_completed = True
        user.commitment = commitment
        user.income_range = income_range
        user.updated_at = utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)

        logger.info(
            f"Onboarding completed: {user.email} commitment={commitment.value} "
            f"income_range={income_range.value}"
        )
        return to_public_user(user)

    def list_users(self, page: int, limit: int) -> Page[PublicUser]:
        statement = select(User).order_by(User.created_at.desc())
        result = paginate(self.session, statement, page, limit)
        return Page[PublicUser](
            data=[to_public_user(user) for user in result["items"]],
            total=result["total"],
            page=result["page"],
            limit=result["limit"],
            total_pages=result["total_pages"],
        )

    def set_suspension(
        self, user_id: uuid.UUID, suspended: bool, reason: Optional[str] = None
    ) -> PublicUser:
        user = self.session.get(User, user_id)
        if not user:
            raise NotFoundError(constants.MSG_USER_NOT_FOUND)

        user.is_suspended = suspended
        user.suspended_reason = reason if suspended else None
        user.updated_at = utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)

        logger.info(f"User {user.email} suspended={suspended} reason={reason}")
        return to_public_user(user)
