from __future__ import annotations

import logging

import uvicorn

from .config import load_config
from .context import AppContext
from .logsetup import configure_logging
from .main import create_app


def main() -> None:
    config = load_config()
    log = configure_logging(config.logging_dir, config.logging_level)
    log.info("Starting Hall of Fame...")

    log.info("Loading database...")
    ctx = AppContext.from_config(config)
    app = create_app(ctx)

    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=logging.getLevelName(log.level).lower(),
    )


if __name__ == "__main__":
    main()
