"""Entry point for running the FastAPI application."""

import logging
import os

import uvicorn

from .services.config import get_config


def main() -> None:
    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Can be overridden: PORT=7860 notegraph
    port = int(os.getenv("PORT", "8000"))

    uvicorn.run(
        "notegraph.api.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
