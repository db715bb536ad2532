import logging
import sys

from funda_e2e.core.config import Settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(settings: Settings, force: bool = False):
    """Configure root logging to stdout and the configured log file"""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=force
    )

    # Playwright's sync API runs on asyncio, which is noisy at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)
