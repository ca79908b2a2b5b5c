"""Logging helpers."""

import structlog


def get_logger(name: str):
    """Return a structlog logger bound to `name`.

    Output format is decided by `setup_structlog_json` at application startup.
    """
    return structlog.get_logger(name)
