"""
Credential session for the Sandfly API.

Holds the bearer token issued by /v4/auth/login together with the
instant after which it must no longer be used. One session belongs to
exactly one SandflyClient.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CredentialSession:
    """
    Cached bearer credential and its validity window.

    Times are seconds on the owning client's clock (time.monotonic by
    default), so wall-clock adjustments never extend a token.
    """

    token: str | None = None
    expires_at: float = 0.0

    def is_valid(self, now: float) -> bool:
        """True while a token is cached and has not reached its expiry."""
        return self.token is not None and now < self.expires_at

    def store(self, token: str, now: float, ttl: float) -> None:
        """Replace the cached credential."""
        self.token = token
        self.expires_at = now + ttl

    def invalidate(self) -> None:
        """Drop the cached credential so the next request logs in again."""
        self.token = None
        self.expires_at = 0.0
