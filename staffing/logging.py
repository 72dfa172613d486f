import logging
import sys

from staffing.settings import settings

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(module)s %(message)s"

# Third-party loggers that drown out bill and report events below WARNING.
NOISY_LOGGERS = ("faker", "faker.factory", "sqlalchemy.engine")


def _build_formatter(json_output: bool) -> logging.Formatter:
    if not json_output:
        return logging.Formatter(TEXT_FORMAT, datefmt="%H:%M:%S")

    from pythonjsonlogger.json import JsonFormatter

    return JsonFormatter(
        JSON_FIELDS,
        rename_fields={"asctime": "ts", "levelname": "severity", "name": "logger"},
    )


def configure_logging() -> None:
    """Send every staffing log record to stderr, leaving stdout to the console menus.

    Safe to call repeatedly; each call replaces the root handlers.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_build_formatter(settings.log_json))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# Alembic's fileConfig swaps out the root handlers during initialize_db().
reconfigure = configure_logging
