"""Sign-up and log-in use cases."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from territory_hub.application.ports.security_port import PasswordHasher, TokenIssuer
from territory_hub.application.ports.user_repo import UserRepository
from territory_hub.domain.entities.user import User
from territory_hub.domain.errors import AuthenticationError, ConflictError, ValidationError
from territory_hub.domain.value_objects.enums import UserRole

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass
class AuthResult:
    user: User
    access_token: str


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class SignUpUseCase:
    """Register a new account. The first account ever created is an admin."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenIssuer):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def execute(self, name: str, email: str, password: str) -> AuthResult:
        email = _normalize_email(email)
        if "@" not in email:
            raise ValidationError("Invalid e-mail address")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must have at least {MIN_PASSWORD_LENGTH} characters"
            )
        if await self._users.get_by_email(email):
            raise ConflictError("E-mail already registered")

        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        is_first_user = await self._users.count() == 0
        user = User(
            id=None,
            email=email,
            name=name.strip() or email.split("@")[0],
            role=UserRole.ADMIN if is_first_user else UserRole.PUBLISHER,
            password_hash=password_hash,
        )
        await self._users.save(user)
        logger.info("User %s registered as %s", user.email, user.role.value)
        return AuthResult(user=user, access_token=self._tokens.issue(user))


class LoginUseCase:
    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenIssuer):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def execute(self, email: str, password: str) -> AuthResult:
        user = await self._users.get_by_email(_normalize_email(email))
        valid = user is not None and await asyncio.to_thread(
            self._hasher.verify, password, user.password_hash
        )
        if not valid:
            logger.warning("Failed login for %s", email)
            raise AuthenticationError("Invalid e-mail or password")
        if not user.active:
            raise AuthenticationError("Account is disabled")
        return AuthResult(user=user, access_token=self._tokens.issue(user))
