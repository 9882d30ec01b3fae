"""Protocol definition for bearer token verification."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenVerifier(Protocol):
    """Resolves a bearer credential to the id of the user it was issued to.

    The resolved id is trusted as-is by the service layer: it is both the
    cache key and the store's owner filter.
    """

    def verify(self, token: str) -> int | None:
        """Return the subject user id for ``token``, or None if it is not valid.

        Parameters:
            token: The raw bearer token (without the ``Bearer`` prefix).
        """
        ...
