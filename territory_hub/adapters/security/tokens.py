"""JWT access tokens: implements TokenIssuer."""

from __future__ import annotations

from datetime import timedelta

import jwt

from territory_hub.application.ports.security_port import TokenIssuer
from territory_hub.config import settings
from territory_hub.domain.entities.user import User
from territory_hub.domain.errors import AuthenticationError
from territory_hub.domain.value_objects.clock import utcnow


class JwtTokenIssuer(TokenIssuer):
    def __init__(
        self,
        secret: str | None = None,
        algorithm: str | None = None,
        ttl_hours: int | None = None,
    ):
        self._secret = secret or settings.jwt_secret
        self._algorithm = algorithm or settings.jwt_algorithm
        self._ttl = timedelta(hours=ttl_hours or settings.access_token_ttl_hours)

    def issue(self, user: User) -> str:
        now = utcnow()
        payload = {
            "sub": str(user.id),
            "role": user.role.value,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token") from e
