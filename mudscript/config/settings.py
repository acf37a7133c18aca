"""
settings.py

Application configuration for mudscript.

Features:
- Centralized configuration using Pydantic settings
- Date/time formats used by the computed `date`, `datetime` and `time`
  variables
- The event key posted when a variable changes

Usage:
Import appsettings for application configuration values.
"""

from typing import Final
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

# Console instance for rich output
console: Final[Console] = Console()


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with MUD_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        variable_date_format: strftime format of the `date` variable
        variable_datetime_format: strftime format of the `datetime` variable
        variable_time_format: strftime format of the `time` variable
        variable_changed_event: Event key posted on variable changes
    """

    beQuiet: bool = False

    variable_date_format: str = "%Y-%m-%d"
    variable_datetime_format: str = "%Y-%m-%d %I:%M:%S %p"
    variable_time_format: str = "%I:%M:%S %p"

    variable_changed_event: str = "variable:changed"

    model_config = SettingsConfigDict(
        env_prefix="MUD_",  # Environment variables with this prefix override settings
        case_sensitive=False,
        extra="allow",
    )


# Create the application settings instance
appsettings: Final[App] = App()
