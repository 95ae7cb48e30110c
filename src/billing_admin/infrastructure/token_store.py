"""File-backed persistence of the authentication token."""

from pathlib import Path

from billing_admin.infrastructure.logging.logger import get_app_logger


class FileTokenStore:
    """Keep the bearer token in a single local file.

    The token is read once per HTTP client build and cleared on logout.
    """

    def __init__(self, path: Path | str, logger=None) -> None:
        self._path = Path(path)
        self._logger = logger or get_app_logger()

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str | None:
        """Return the stored token, or None when absent or blank."""
        if not self._path.exists():
            return None
        token = self._path.read_text(encoding="utf-8").strip()
        return token or None

    def write(self, token: str) -> None:
        """Persist ``token``, creating parent directories as needed."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(token, encoding="utf-8")
        self._path.chmod(0o600)
        self._logger.info(f"Stored authentication token at {self._path}")

    def clear(self) -> None:
        """Remove the stored token, if any."""
        if self._path.exists():
            self._path.unlink()
            self._logger.info("Cleared authentication token")

    def is_authenticated(self) -> bool:
        return self.read() is not None


__all__ = ["FileTokenStore"]
