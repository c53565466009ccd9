"""Application settings from environment."""
import os
from functools import lru_cache

SERVER_MODES = ("http", "stdio")


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in ("0", "false", "no")


@lru_cache
def get_settings() -> "Settings":
    return Settings()


class Settings:
    """Central config. Load .env in the entry point before using. Properties read env at access time."""

    # Transport
    @property
    def server_mode(self) -> str:
        return os.getenv("SERVER_MODE", "http").strip().lower() or "http"

    @property
    def host(self) -> str:
        return os.getenv("HOST", "0.0.0.0").strip()

    @property
    def port(self) -> int:
        return int(os.getenv("PORT", "3000"))

    # Shared secret for X-API-Key; empty disables auth on the HTTP binding
    @property
    def api_key(self) -> str:
        return os.getenv("API_KEY", "").strip()

    # CORS: comma-separated origins (e.g. http://localhost:3000) or * for all
    @property
    def cors_origins(self) -> list[str]:
        raw = os.getenv("ALLOWED_ORIGINS", "*").strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]

    # Browser
    @property
    def browser_headless(self) -> bool:
        return _flag("BROWSER_HEADLESS", "1")

    # The evaluate tool runs caller-supplied JavaScript in the page
    @property
    def allow_evaluate(self) -> bool:
        return _flag("ALLOW_EVALUATE", "1")

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    # Identity reported by /health and the MCP handshake
    @property
    def service_name(self) -> str:
        return os.getenv("SERVICE_NAME", "playwright-mcp-server").strip()

    @property
    def api_version(self) -> str:
        return os.getenv("API_VERSION", "1.0.0").strip()

    @property
    def disabled_tools(self) -> list[str]:
        return [] if self.allow_evaluate else ["evaluate"]
