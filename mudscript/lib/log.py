"""
Diagnostics for mudscript.

Malformed game input and misbehaving subscribers are recovered from rather
than raised, and what was dropped is reported through `LOG`: stray close tags,
lines that fell back to plain text, failed or skipped change notifications.
Invalid regex patterns are logged before `InvalidPattern` propagates.

Messages go to stderr at debug level, tagged `app=MUDSCRIPT`, unless
`appsettings.beQuiet` is set (`MUD_BEQUIET=true`). Settings are looked up at
call time, so `LOG` works before configuration has been imported.

Example:
    from mudscript.lib.log import LOG
    LOG("Dropped stray close tag </b>")
"""

from loguru import logger
from typing import Any
import sys

# Create a distinct logger instance for the app
app_logger = logger.bind(app="MUDSCRIPT")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <30}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()  # Remove any default handlers
app_logger.add(sys.stderr, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Application-specific logging function.

    Logs at debug level unless `beQuiet` is set in `appsettings`.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    try:
        from mudscript.config.settings import appsettings

        if not appsettings.beQuiet:
            app_logger.debug(*args, **kwargs)
    except Exception as e:
        print(f"Logging error: {e}")
