"""Command-line entry point.

Configuration comes entirely from the environment (see ``config``). The exit
code is 0 whenever the run completes, even if individual projects failed.
"""

import asyncio
import logging

from pydantic import ValidationError

from .config import load_settings
from .orchestrator import ERROR_PREFIX
from .orchestrator import publish_all

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Plain message format so CI markers like ``##[error]`` start the line."""
    logging.basicConfig(level=level.upper(), format="%(message)s")


def main() -> int:
    try:
        settings = load_settings()
    except ValidationError as e:
        configure_logging()
        logger.error(f"{ERROR_PREFIX} Invalid configuration: {e}")
        return 1

    configure_logging(settings.log_level)
    report = asyncio.run(publish_all(settings))

    if report.failed:
        logger.info(f"{len(report.failed)} of {len(report.outcomes)} project(s) failed")
    return 0
