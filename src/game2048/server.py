# server.py
# Entry point: configures logging and serves the API with uvicorn.

import logging

import uvicorn

from . import core
from .settings import get_settings


def main():
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(__name__)

    if settings.seed is not None:
        core.seed_default_rng(settings.seed)
        logger.info("Seeded tile generator with %d", settings.seed)

    logger.info("2048 server starting on http://%s:%d", settings.host, settings.port)
    uvicorn.run("game2048.api:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
