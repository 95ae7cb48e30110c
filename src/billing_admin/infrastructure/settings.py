"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path

from billing_admin.infrastructure.logging.logger import get_app_logger
from billing_admin.utils.utils import get_project_root


DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_RECENT_DAYS = 30


@dataclass(frozen=True)
class ApiSettings:
    """Settings for reaching the billing backend and rendering values.

    Attributes:
        base_url: Base URL of the REST API, without trailing slash.
        timeout: Request timeout in seconds.
        token_file: Location of the persisted authentication token.
        currency: Currency code used for display.
        date_format: ``strftime`` pattern used for display.
        recent_days: Window, in days, for the recent payments list.
    """

    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    token_file: Path | None = None
    currency: str = "USD"
    date_format: str = "%m/%d/%Y"
    recent_days: int = DEFAULT_RECENT_DAYS

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Build settings from environment variables.

        Returns:
            ApiSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        base_url = os.getenv("BILLING_API_URL", DEFAULT_API_URL).strip()
        timeout = cls._parse_number(
            os.getenv("BILLING_API_TIMEOUT"),
            DEFAULT_TIMEOUT_SECONDS,
            "BILLING_API_TIMEOUT",
            logger,
        )
        recent_days = int(
            cls._parse_number(
                os.getenv("BILLING_RECENT_DAYS"),
                DEFAULT_RECENT_DAYS,
                "BILLING_RECENT_DAYS",
                logger,
            )
        )
        raw_token_file = os.getenv("BILLING_TOKEN_FILE")
        token_file = (
            Path(raw_token_file).expanduser()
            if raw_token_file
            else get_project_root() / ".auth" / "token"
        )
        return cls(
            base_url=base_url.rstrip("/") or DEFAULT_API_URL,
            timeout=timeout,
            token_file=token_file,
            currency=os.getenv("BILLING_CURRENCY", "USD").strip().upper(),
            date_format=os.getenv("BILLING_DATE_FORMAT", "%m/%d/%Y"),
            recent_days=recent_days,
        )

    @staticmethod
    def _parse_number(
        raw_value: str | None,
        default: float,
        name: str,
        logger,
    ) -> float:
        """Parse a positive number, falling back to the default.

        Args:
            raw_value: Raw environment value.
            default: Value used when missing or invalid.
            name: Variable name for the warning.
            logger: Logger used for warnings.

        Returns:
            float: Parsed or default value.
        """
        if not raw_value:
            return default
        try:
            value = float(raw_value)
        except ValueError:
            logger.warning(f"Invalid {name}={raw_value!r}; using {default}")
            return default
        if value <= 0:
            logger.warning(f"Non-positive {name}={raw_value!r}; using {default}")
            return default
        return value


__all__ = ["ApiSettings"]
