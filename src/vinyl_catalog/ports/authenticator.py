from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller."""

    subject: str


class Authenticator(ABC):
    """
    Port for bearer-token authentication.

    Token issuance lives outside this service; implementations only verify.
    """

    @abstractmethod
    def authenticate(self, token: str) -> Principal:
        """
        Resolve a bearer token to a principal.

        Raises:
            UnauthorizedError: If the token is unknown or malformed
        """
        ...
