"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol

from domain.entities.group import Identity

ANONYMOUS_NAME = "Anonymous"


@dataclass
class TokenUser:
    """Represents a user extracted from an auth token."""

    id: str
    email: str
    display_name: Optional[str] = None
    role: Optional[str] = None

    @property
    def identity(self) -> Identity:
        """The ``{name, email}`` pair recorded on groups and memberships."""
        return Identity(name=self.display_name or ANONYMOUS_NAME, email=self.email)


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """
        Create an authentication token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...
