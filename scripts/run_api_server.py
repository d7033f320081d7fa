#!/usr/bin/env python3
"""Run the SpendScope FastAPI server."""

from __future__ import annotations

import argparse

from spendscope.api_server import create_app
from spendscope.config import load_settings
from spendscope.logging import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Run SpendScope API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover
        raise SystemExit(
            "uvicorn not installed. Install with: pip install 'uvicorn>=0.30,<1.0'"
        ) from exc

    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
