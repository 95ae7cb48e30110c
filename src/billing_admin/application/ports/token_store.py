"""Port for persisting the authentication token."""

from typing import Protocol


class TokenStorePort(Protocol):
    """Port exposing read/write access to the bearer token."""

    def read(self) -> str | None:
        """Return the stored token, if any."""

    def write(self, token: str) -> None:
        """Persist a token."""

    def clear(self) -> None:
        """Forget the stored token."""

    def is_authenticated(self) -> bool:
        """Return True when a token is stored."""


__all__ = ["TokenStorePort"]
