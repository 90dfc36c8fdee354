"""FastAPI application entry point."""

import logging

from realip.core.config import settings
from realip.core.registrar import create_app

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
