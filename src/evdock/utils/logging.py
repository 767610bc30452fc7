"""Process logging setup for the scheduler and its API server."""

from __future__ import annotations

import logging
from typing import Optional

from evdock.config.logging import LoggingSettings


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """Apply ``settings`` (package defaults when omitted) to the root logger.

    Stderr is always kept; ``settings.file`` adds a UTF-8 file handler and
    creates its directory.  Raises ``ValueError`` for an unknown level name.
    """
    settings = settings if settings is not None else LoggingSettings()
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {settings.level}")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.file is not None:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.file, encoding="utf-8"))

    logging.basicConfig(level=level, format=settings.format, handlers=handlers)
    logging.getLogger("evdock").debug("Logging configured at %s", settings.level.upper())
