from __future__ import annotations

import logging

import uvicorn

from switchboard.app import create_app
from switchboard.config import ConfigError, load_config
from switchboard.logging_config import setup_logging
from switchboard.settings import Settings


logger = logging.getLogger("switchboard")


def main() -> int:
    settings = Settings()
    setup_logging("switchboard", settings.log_level)

    try:
        config = load_config(settings.config_path)
    except ConfigError as e:
        logger.critical("%s", e)
        raise SystemExit(1)

    app = create_app(config, static_dir=settings.static_dir, http_timeout_s=settings.http_timeout_s)

    logger.info("Starting SwitchBoard on port %d...", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
