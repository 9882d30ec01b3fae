"""In-memory bearer token table for development and tests."""

from __future__ import annotations

import logging
import secrets
import threading

logger = logging.getLogger(__name__)


class StaticTokenVerifier:
    """Opaque random tokens mapped to user ids. Implements TokenVerifier protocol.

    Tokens live only in this process; there is no signing or expiry.
    Production deployments plug in a verifier for their real identity
    provider instead.
    """

    __slots__ = ("_lock", "_tokens")

    def __init__(self, tokens: dict[str, int] | None = None) -> None:
        self._tokens: dict[str, int] = dict(tokens or {})
        self._lock = threading.Lock()

    def issue(self, user_id: int) -> str:
        """Mint a new token for ``user_id`` and return it."""
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._tokens[token] = user_id
        logger.debug("Issued token for user %s", user_id)
        return token

    def revoke(self, token: str) -> bool:
        """Forget ``token``.  Returns True if it was known."""
        with self._lock:
            return self._tokens.pop(token, None) is not None

    def verify(self, token: str) -> int | None:
        with self._lock:
            return self._tokens.get(token)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tokens={len(self._tokens)})"
