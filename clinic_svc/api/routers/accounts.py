"""
Accounts router - registration and login endpoints.

Architecture:
    HTTP Request → Router (this file) → AccountService → UserRepository → Database

No session or token is issued: every login call is independent.
Endpoints are plain functions so bcrypt work runs in the threadpool.
"""
import logging
from fastapi import APIRouter, Depends, status

from schemas import RegisterRequest, LoginRequest, LoginResponse, MessageResponse
from services import AccountService
from core.dependencies import get_account_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Accounts"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account. Email and username must both be unused."
)
def register(
    request: RegisterRequest,
    account_service: AccountService = Depends(get_account_service)
):
    """
    Register a new user.

    - **firstName**, **username**, **email**, **password**, **confirmPassword**: all required

    Returns 400 when a field is missing, the passwords differ,
    or the email/username is already in use.
    """
    account_service.register(request)
    return MessageResponse(message="Registration successful. You can now log in.")


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    description="Check an email/password pair. Returns the user without its password hash."
)
def login(
    request: LoginRequest,
    account_service: AccountService = Depends(get_account_service)
):
    """
    Authenticate a user.

    Returns 400 when a field is missing, the email is unknown,
    or the password is wrong.
    """
    user = account_service.login(request)
    return LoginResponse(message="Login successful.", user=user)
