#!/usr/bin/env python3
"""FastAPI server entry point."""

import uvicorn

from config.config import Config

if __name__ == "__main__":
    import argparse

    config = Config()

    parser = argparse.ArgumentParser(description="Grounded Search FastAPI Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=config.PORT, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )
