import logging

import uvicorn

from .config import get_settings
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run("tasklist.app:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
