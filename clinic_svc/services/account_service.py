"""
Service layer for user registration and login.

Architecture:
    API Layer (routers) → AccountService → UserRepository → Database

Uniqueness of email and username is enforced by the database. The lookup
done before hashing only exists to fail fast with a clear message; a
concurrent registration that slips past it is still rejected by the
UNIQUE constraint and reported the same way.

Login responses never include the stored password hash.
"""
import logging
from typing import Optional

from core.exceptions import (
    AuthenticationError,
    ConflictError,
    PasswordMismatchError,
    UserNotFoundError,
)
from core.security import hash_password, verify_password
from repositories import UserRepository
from schemas import RegisterRequest, LoginRequest, UserResponse
from services.validators import validate_required_fields

logger = logging.getLogger(__name__)

REGISTER_REQUIRED_FIELDS = ("firstName", "username", "email", "password", "confirmPassword")
LOGIN_REQUIRED_FIELDS = ("email", "password")


class AccountService:
    """
    Service layer for account operations.

    Stateless: each call validates, touches storage, and returns.
    """

    def __init__(self, user_repository: UserRepository, bcrypt_rounds: Optional[int] = None):
        """
        Initialize the account service.

        Args:
            user_repository: UserRepository instance for data access.
                             Injected via core.dependencies.get_account_service().
            bcrypt_rounds: bcrypt cost factor. Defaults to the configured value.
        """
        self._repo = user_repository
        self._bcrypt_rounds = bcrypt_rounds

    def register(self, request: RegisterRequest) -> None:
        """
        Register a new user.

        Raises:
            MissingFieldsError: If any of the five fields is absent or empty.
            PasswordMismatchError: If password and confirmPassword differ.
            ConflictError: If the email or the username is already taken.
        """
        validate_required_fields(request.model_dump(by_alias=True), REGISTER_REQUIRED_FIELDS)

        if request.password != request.confirm_password:
            raise PasswordMismatchError()

        if self._repo.exists_with_email_or_username(request.email, request.username):
            logger.warning("Registration rejected: email or username already in use")
            raise ConflictError()

        created = self._repo.add(
            first_name=request.first_name,
            username=request.username,
            email=request.email,
            password_hash=hash_password(request.password, rounds=self._bcrypt_rounds),
        )
        if created is None:
            # Lost a race with a concurrent registration
            logger.warning("Registration rejected by UNIQUE constraint")
            raise ConflictError()

        logger.info("User registered", extra={"user_id": created["id"]})

    def login(self, request: LoginRequest) -> UserResponse:
        """
        Authenticate a user by email and password.

        Returns:
            UserResponse: The stored user without the password hash.

        Raises:
            MissingFieldsError: If email or password is absent or empty.
            UserNotFoundError: If no user has this email.
            AuthenticationError: If the password does not match.
        """
        validate_required_fields(
            request.model_dump(),
            LOGIN_REQUIRED_FIELDS,
            message="Email and password are required."
        )

        user = self._repo.get_by_email(request.email)
        if user is None:
            raise UserNotFoundError()

        if not verify_password(request.password, user["password"]):
            logger.warning("Login failed: incorrect password", extra={"user_id": user["id"]})
            raise AuthenticationError()

        logger.info("User logged in", extra={"user_id": user["id"]})
        return UserResponse(
            id=user["id"],
            first_name=user["first_name"],
            username=user["username"],
            email=user["email"],
            created_at=user["created_at"],
        )
