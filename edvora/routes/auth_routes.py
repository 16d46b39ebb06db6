from datetime import datetime

from fastapi import APIRouter, Depends, status
from pydantic import Field

from edvora.auth.dependencies import get_current_user_id
from edvora.schemas import CamelModel, partial_fields
from edvora.services.auth import AuthGateway
from edvora.services.credentials import CredentialStore
from edvora.storage.base import Storage
from edvora.storage.factory import get_storage

router = APIRouter(tags=['auth'])


class RegisterRequest(CamelModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None
    name: str | None = None
    student_id: str | None = None
    department: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    username: str | None = None
    password: str | None = None


class ProfileUpdateRequest(CamelModel):
    username: str | None = None
    email: str | None = None
    student_id: str | None = None
    name: str | None = None
    department: str | None = None
    bio: str | None = Field(default=None, max_length=1000)
    phone: str | None = None
    avatar: str | None = None
    password: str | None = None


class UserResponse(CamelModel):
    id: str
    username: str
    email: str
    student_id: str | None = None
    name: str
    department: str | None = None
    bio: str | None = None
    phone: str | None = None
    avatar: str | None = None
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthResponse(CamelModel):
    success: bool = True
    message: str
    token: str
    user: UserResponse


class ProfileResponse(CamelModel):
    success: bool = True
    user: UserResponse


def get_auth_gateway(storage: Storage = Depends(get_storage)) -> AuthGateway:
    return AuthGateway(CredentialStore(storage.users))


@router.post('/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, gateway: AuthGateway = Depends(get_auth_gateway)):
    result = gateway.register(payload.model_dump())
    return {'message': 'Registration successful!', **result}


@router.post('/login', response_model=AuthResponse)
def login(payload: LoginRequest, gateway: AuthGateway = Depends(get_auth_gateway)):
    result = gateway.login(payload.email or payload.username, payload.password)
    return {'message': 'Login successful!', **result}


@router.get('/profile', response_model=ProfileResponse)
def profile(
    user_id: str = Depends(get_current_user_id),
    gateway: AuthGateway = Depends(get_auth_gateway),
):
    return {'user': gateway.profile(user_id)}


@router.put('/profile', response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    gateway: AuthGateway = Depends(get_auth_gateway),
):
    fields = partial_fields(payload, nullable=frozenset({'student_id', 'department', 'bio', 'phone', 'avatar'}))
    return {'user': gateway.update_profile(user_id, fields)}
