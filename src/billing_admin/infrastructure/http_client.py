"""Factory for the shared HTTP client used by the REST adapters."""

import httpx

from billing_admin.application.ports.token_store import TokenStorePort
from billing_admin.infrastructure.settings import ApiSettings


def build_async_client(
    settings: ApiSettings,
    token_store: TokenStorePort | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Return an ``httpx.AsyncClient`` bound to the backend base URL.

    Args:
        settings: API settings.
        token_store: Optional token source; when it holds a token the
            client sends it as a bearer credential.
        transport: Optional transport override.

    Returns:
        httpx.AsyncClient: Configured client. Callers own its lifetime.
    """
    headers = {"Accept": "application/json"}
    token = token_store.read() if token_store is not None else None
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=settings.base_url,
        headers=headers,
        timeout=settings.timeout,
        transport=transport,
    )


def extract_error_message(exc: httpx.HTTPError, fallback: str) -> str:
    """Return the backend's error message for ``exc``, or ``fallback``.

    The backend reports failures as ``{"message": "..."}``; transport errors
    and bodies without a message yield the fallback.
    """
    if not isinstance(exc, httpx.HTTPStatusError):
        return fallback
    try:
        body = exc.response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return fallback


__all__ = ["build_async_client", "extract_error_message"]
