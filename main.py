import logging
import os
import sys

import uvicorn
from dotenv import load_dotenv

from quiz_backend.core.config import Settings, check_startup, has_credential
from quiz_backend.core.logging_config import configure_logging
from quiz_backend.main import create_app

logger = logging.getLogger("quiz_backend")


def load_environment(dotenv_path: str = ".env") -> bool:
    """Load .env into os.environ unless running in production."""
    if os.getenv("ENV", "development") == "production":
        return False
    return load_dotenv(dotenv_path)


def main() -> None:
    load_environment()
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)

    result = check_startup(settings)
    if not result.ok:
        for err in result.errors:
            logger.critical("FATAL ERROR: %s", err)
        sys.exit(1)

    app = create_app(settings)
    logger.info("API endpoint ready at POST /submit-quiz")
    logger.info("Store project loaded: %s", "Yes" if settings.GOOGLE_CLOUD_PROJECT else "NO!")
    logger.info("Store credential loaded: %s", "Yes" if has_credential(settings) else "NO!")
    logger.info("Server is running on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
