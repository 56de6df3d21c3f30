"""Runtime settings for the calculator, read from the environment."""
import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ENV_PREFIX = "INFIX_CALCULATOR_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CalculatorSettings(BaseModel):
    """
    Settings shared by the parser, the logger and the command line.

    Environment variables:
        - INFIX_CALCULATOR_DECIMAL_PLACES
        - INFIX_CALCULATOR_LOG_LEVEL
    """

    # Read-only once built, settings are shared by every evaluation
    model_config = ConfigDict(frozen=True)

    decimal_places: int = Field(default=4, ge=0, le=10, description="Digits kept when rounding results")
    log_level: LogLevel = Field(default="INFO", description="Level of the package logger")

    @field_validator("log_level", mode="before")
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CalculatorSettings":
        """
        Build settings from environment variables, keeping defaults for unset ones.

        :param Mapping environ: Variables to read, defaults to ``os.environ``

        :return: Validated settings
        :rtype: CalculatorSettings
        :raises pydantic.ValidationError: If a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ
        values = {}
        for field_name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
            if raw is not None:
                values[field_name] = raw
        return cls(**values)


settings: CalculatorSettings = CalculatorSettings.from_env()
