"""Process-wide logging setup.

Modules never configure logging themselves; they only create a module
logger with ``logging.getLogger(__name__)``.  The CLI calls
:func:`configure_logging` once at startup with the loaded
:class:`~deeplx_relay.config.LoggingSettings`.
"""

from __future__ import annotations

import logging

from deeplx_relay.config import LoggingSettings

LOG_FORMATS: dict[str, str] = {
    "simple": "%(levelname)s: %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def configure_logging(settings: LoggingSettings) -> None:
    """Apply the configured level and format to the root logger.

    Unknown level names fall back to ``INFO`` rather than failing startup.
    ``force=True`` replaces handlers installed by an earlier call, so the
    CLI can reconfigure after flags override the loaded settings.
    """
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMATS.get(settings.format, LOG_FORMATS["detailed"]),
        force=True,
    )
