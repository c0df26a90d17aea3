import logging
import sys

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from profile_checker.settings import Settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a console handler to the package logger once."""

    logger = logging.getLogger("profile_checker")
    logger.setLevel(level.upper())

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def init_sentry(app_settings: Settings) -> None:
    """Initialize Sentry SDK when DSN is configured.

    Log records become breadcrumbs; errors logged at ERROR become events.
    """

    if not app_settings.sentry_dsn:
        return

    sentry_sdk.init(
        dsn=app_settings.sentry_dsn,
        environment=app_settings.environment,
        release=app_settings.release,
        traces_sample_rate=app_settings.sentry_traces_sample_rate,
        integrations=[
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)
        ],
        send_default_pii=False,
    )


def init_observability(app_settings: Settings) -> None:
    setup_logging(app_settings.log_level)
    init_sentry(app_settings)
