"""API key gate for the HTTP binding. /health does not use it."""
import hmac

from fastapi import Header, HTTPException, Request

UNAUTHORIZED = "Unauthorized: Invalid or missing API key"


def authorize(provided_key: str | None, secret: str | None) -> bool:
    """Allow when no secret is configured, otherwise only on an exact match."""
    if not secret:
        return True
    if not provided_key:
        return False
    return hmac.compare_digest(provided_key.encode(), secret.encode())


def require_api_key(request: Request, x_api_key: str | None = Header(None)) -> None:
    """FastAPI dependency: 401 unless X-API-Key matches the configured secret."""
    if not authorize(x_api_key, request.app.state.settings.api_key):
        raise HTTPException(status_code=401, detail=UNAUTHORIZED)
