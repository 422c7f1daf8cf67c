import logging
import sys

import uvicorn

from app.core.config import load_settings
from app.core.exceptions import ConfigError
from app.core.logging import configure_logging
from app.main import create_app

logger = logging.getLogger("server")


def main():
    configure_logging()

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error("Initialization error: %s", e)
        sys.exit(1)

    logging.getLogger().setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    app = create_app(settings)
    logger.info("Server running on http://localhost:%d", settings.port)

    # uvicorn exits non-zero when the lifespan startup (database check) fails
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
