"""
Conductor - Server Entry Point
===============================
CLI entry point that:
    1. Validates configuration (``GEMINI_API_KEY`` must be set — fail-fast).
    2. Builds the FastAPI application.
    3. Serves it with ``uvicorn`` on ``HOST:PORT``.

Any configuration error, or a failure to bind the listening port,
terminates the process with a non-zero exit status.

Usage:
    conductor-serve                      # HOST/PORT from settings (.env)
    conductor-serve --port 8080          # Override the port
    python -m conductor.scripts.serve --host 127.0.0.1
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# ── Ensure project root is importable when run directly ────────────────
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="conductor-serve", description="Conductor — Run the slide assistant HTTP API.")
    parser.add_argument("--host", default=None, help="Interface to bind (default: settings.HOST).")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: settings.PORT).")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    try:
        from conductor.config.settings import settings
    except Exception as exc:
        print("\n[FATAL] Configuration error — check your environment or .env file:\n")
        print(f"  {exc}")
        print()
        sys.exit(1)

    # Now that settings is loaded, we can safely import the logger
    import uvicorn

    from conductor.src.main import create_app
    from conductor.src.utils.logger import build_log_config, get_logger

    app = create_app()
    logger = get_logger("conductor.serve")

    host = args.host or settings.HOST
    port = args.port or settings.PORT
    logger.info("Starting server on %s:%d (env=%s)", host, port, settings.ENV)

    # Same format for uvicorn's own and access loggers.
    uvicorn.run(app, host=host, port=port, log_config=build_log_config())


if __name__ == "__main__":
    main()
