"""User settings for scriptsort.

Settings provide defaults for values that can also be passed on the
command line. They are read from ~/.config/scriptsort/config.toml;
a missing file simply means defaults.

Example config.toml::

    cutoff = 60
    timer_command = "ms"
    elapsed_variable = "SCRIPTSORT_ELAPSED"
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scriptsort.core.buffer import INITIAL_CAPACITY
from scriptsort.core.classifier import DEFAULT_CUTOFF
from scriptsort.core.errors import SettingsError
from scriptsort.core.paths import get_settings_path
from scriptsort.core.template import (
    DEFAULT_ELAPSED_VARIABLE,
    DEFAULT_TIMER_COMMAND,
    is_command_name,
    is_shell_identifier,
)

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Configuration for a scriptsort run.

    Attributes:
        cutoff: Boundary between the lower and upper ordered buckets.
        timer_command: Millisecond timer helper referenced by generated shell.
        elapsed_variable: Variable exported with the bundle's elapsed time.
        initial_buffer_capacity: Starting capacity of the bundle buffer in bytes.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    cutoff: Annotated[
        int,
        Field(ge=1, description="Order number boundary (>= 1)"),
    ] = DEFAULT_CUTOFF
    timer_command: Annotated[
        str,
        Field(description="Millisecond timer helper on the caller's PATH"),
    ] = DEFAULT_TIMER_COMMAND
    elapsed_variable: Annotated[
        str,
        Field(description="Exported elapsed-time variable"),
    ] = DEFAULT_ELAPSED_VARIABLE
    initial_buffer_capacity: Annotated[
        int,
        Field(ge=1, description="Initial bundle buffer capacity in bytes"),
    ] = INITIAL_CAPACITY

    @field_validator("timer_command")
    @classmethod
    def validate_timer_command(cls, v: str) -> str:
        """Validate that the timer is a bare command name."""
        if not is_command_name(v):
            msg = f"timer_command must be a plain command name, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("elapsed_variable")
    @classmethod
    def validate_elapsed_variable(cls, v: str) -> str:
        """Validate that the elapsed variable is a shell identifier."""
        if not is_shell_identifier(v):
            msg = f"elapsed_variable must be a shell identifier, got {v!r}"
            raise ValueError(msg)
        return v


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings; defaults if the file does not exist.

    Raises:
        SettingsError: If the file cannot be read, parsed or validated.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings {settings_path}: {e}") from e

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e

    logger.debug("Loaded settings from %s", settings_path)
    return settings
