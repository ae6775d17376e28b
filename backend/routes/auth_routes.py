import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.auth.dependencies import get_current_user
from backend.auth.passwords import hash_password, verify_password
from backend.core import config
from backend.core.errors import AuthenticationError, ConflictError, InternalError
from backend.database import get_db
from backend.models.user import User, UserRole

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = 'Invalid email or password'
USER_EXISTS_MESSAGE = 'User already exists'


def _normalize_email(value: str) -> str:
    return value.strip().lower()


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    full_name: str | None = Field(default=None, alias='fullName')
    role: UserRole = UserRole.LEARNER
    date_of_birth: date | None = Field(default=None, alias='dateOfBirth')

    class Config:
        populate_by_name = True

    @field_validator('email', mode='before')
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator('full_name')
    @classmethod
    def validate_full_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        return normalized or None

    @field_validator('role', mode='before')
    @classmethod
    def normalize_role(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        normalized = _normalize_email(value)
        if not normalized:
            raise ValueError('Email is required.')
        return normalized


class UserResponse(BaseModel):
    id: str
    email: str
    full_name: str | None = Field(default=None, serialization_alias='fullName')
    role: UserRole
    date_of_birth: date | None = Field(default=None, serialization_alias='dateOfBirth')
    created_at: datetime | None = Field(default=None, serialization_alias='createdAt')
    updated_at: datetime | None = Field(default=None, serialization_alias='updatedAt')

    class Config:
        from_attributes = True


def serialize_user(user: User) -> dict:
    return UserResponse.model_validate(user).model_dump(mode='json', by_alias=True)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        max_age=config.JWT_EXPIRES_MINUTES * 60,
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite='lax',
        path='/',
    )


@router.post('/signup', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(data: SignupRequest, db: Session = Depends(get_db)):
    try:
        existing_user = db.query(User).filter(User.email == data.email).first()
        if existing_user:
            raise ConflictError(USER_EXISTS_MESSAGE)

        user = User(
            email=data.email,
            hashed_password=hash_password(data.password),
            full_name=data.full_name,
            role=data.role,
            date_of_birth=data.date_of_birth,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError as exc:
        # Lost a race with a concurrent signup for the same email.
        db.rollback()
        raise ConflictError(USER_EXISTS_MESSAGE) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Signup failed for %s', data.email)
        raise InternalError() from exc

    logger.info('Created user %s with role %s', user.id, user.role.value)
    return UserResponse.model_validate(user)


@router.post('/login')
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    try:
        user = db.query(User).filter(User.email == data.email).first()
    except SQLAlchemyError as exc:
        logger.exception('Login lookup failed')
        raise InternalError() from exc

    # Unknown email and wrong password must be indistinguishable to the caller.
    if user is None or not verify_password(data.password, user.hashed_password):
        logger.info('Rejected login attempt')
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    token = jwt_handler.create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role.value,
    )
    logger.info('User %s logged in', user.id)

    body = {
        'success': True,
        'message': 'Login successful',
        'user': serialize_user(user),
    }
    if config.AUTH_TOKEN_TRANSPORT == 'cookie':
        set_session_cookie(response, token)
    else:
        body['token'] = token
        body['tokenType'] = 'bearer'
    return body


@router.get('/me')
def me(current_user: User = Depends(get_current_user)):
    return {'success': True, 'user': serialize_user(current_user)}


@router.post('/logout')
def logout(response: Response):
    response.delete_cookie(
        key=config.SESSION_COOKIE_NAME,
        path='/',
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite='lax',
    )
    return {'success': True, 'message': 'Logged out'}
