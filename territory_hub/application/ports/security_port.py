"""Port interfaces for password hashing and access tokens."""

from abc import ABC, abstractmethod

from territory_hub.domain.entities.user import User


class PasswordHasher(ABC):
    """Synchronous and CPU-bound. Use cases call it through asyncio.to_thread."""

    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        ...


class TokenIssuer(ABC):
    @abstractmethod
    def issue(self, user: User) -> str:
        ...

    @abstractmethod
    def decode(self, token: str) -> dict:
        """Return the token claims.

        Raises AuthenticationError if the token is invalid or expired.
        """
        ...
