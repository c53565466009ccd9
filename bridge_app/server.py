"""
Process entry: load .env, configure logging, run the HTTP or stdio binding.

Exit codes: 0 after a signal-triggered (or stdin EOF) shutdown, 1 on startup failure.
"""
import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

from dotenv import load_dotenv

_ROOT = Path(__file__).resolve().parent.parent

_log = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    # stderr only: stdout is the stdio binding's channel
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Keep third-party request logging (headers include X-API-Key) out of DEBUG output
    for name in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)


def _interrupt(signum, frame) -> None:
    raise KeyboardInterrupt


def run_http(settings) -> None:
    import uvicorn

    from bridge_app.main import create_app

    app = create_app(settings)
    _log.info("%s running on HTTP port %d", settings.service_name, settings.port)
    # uvicorn turns SIGINT/SIGTERM into a graceful shutdown; the app lifespan closes the browser
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def run_stdio(settings) -> None:
    from bridge_app.main import build_dispatcher
    from bridge_app.stdio import serve_stdio

    dispatcher = build_dispatcher(settings)
    signal.signal(signal.SIGTERM, _interrupt)
    interrupted = False
    try:
        asyncio.run(serve_stdio(dispatcher, settings.service_name, settings.api_version))
    except KeyboardInterrupt:
        interrupted = True
        _log.info("Shutting down")
    finally:
        dispatcher.session.close()
    if interrupted:
        # The SDK's stdin reader thread stays blocked on read; exit without joining it
        logging.shutdown()
        os._exit(0)


def main() -> int:
    load_dotenv(_ROOT / ".env", override=True)

    from bridge_app.core.config import SERVER_MODES, get_settings

    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        mode = settings.server_mode
        if mode not in SERVER_MODES:
            raise ValueError(f"SERVER_MODE must be one of {', '.join(SERVER_MODES)}, got {mode!r}")
        if mode == "http":
            run_http(settings)
        else:
            run_stdio(settings)
    except Exception as e:
        _log.exception("Fatal error in main(): %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
