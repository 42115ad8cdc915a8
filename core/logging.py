import logging
import sys

from core.config import settings


def configure_logging() -> None:
    """
    Configure logging for the whole app.
    Call this once at FastAPI startup.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

