"""Identity collaborators for resolving bearer tokens."""

from .tokens import StaticTokenVerifier

__all__ = [
    "StaticTokenVerifier",
]
