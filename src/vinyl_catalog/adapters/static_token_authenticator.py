from __future__ import annotations

import hmac
from typing import Mapping

from vinyl_catalog.domain.errors import UnauthorizedError
from vinyl_catalog.ports.authenticator import Authenticator, Principal


class StaticTokenAuthenticator(Authenticator):
    """
    Verifies bearer tokens against a fixed token -> subject mapping.

    Every configured token is compared in constant time, so the lookup does
    not leak which prefix of a token matched.
    """

    def __init__(self, tokens: Mapping[str, str]) -> None:
        if not tokens:
            raise ValueError("StaticTokenAuthenticator needs at least one token")
        self._tokens = dict(tokens)

    def authenticate(self, token: str) -> Principal:
        candidate = token.encode()
        subject: str | None = None

        for known, owner in self._tokens.items():
            if hmac.compare_digest(candidate, known.encode()):
                subject = owner

        if subject is None:
            raise UnauthorizedError("Invalid or expired token")

        return Principal(subject=subject)
