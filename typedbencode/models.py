"""Pydantic models for typedbencode.

Provides validated configuration models for the decoder and for logging.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

# Deepest nesting the recursive parser supports inside the default
# interpreter recursion limit, at two stack frames per level
MAX_DEPTH_LIMIT = 400


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class OverflowPolicy(str, Enum):
    """What to do when an integer does not fit a fixed-width target."""

    RAISE = "raise"
    CLAMP = "clamp"
    WRAP = "wrap"


class DecoderConfig(BaseModel):
    """Parser and decoder limits."""

    max_depth: int = Field(
        default=100,
        ge=1,
        le=MAX_DEPTH_LIMIT,
        description="Maximum nesting depth of lists and dictionaries",
    )
    max_integer_digits: int = Field(
        default=4300,
        ge=0,
        description="Maximum digits in an integer or string length (0 disables)",
    )
    allow_negative_zero: bool = Field(
        default=False,
        description="Accept i-0e as zero instead of rejecting it",
    )
    reject_duplicate_keys: bool = Field(
        default=False,
        description="Fail on repeated dictionary keys instead of keeping the last",
    )
    overflow_policy: OverflowPolicy = Field(
        default=OverflowPolicy.RAISE,
        description="Handling of integers outside a fixed-width target's range",
    )


class ObservabilityConfig(BaseModel):
    """Logging configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(
        default=False,
        description="Use structured JSON logging",
    )
    rich_console: bool = Field(
        default=False,
        description="Render console logs with rich",
    )
    log_correlation_id: bool = Field(
        default=True,
        description="Include correlation IDs",
    )


class Config(BaseModel):
    """Root configuration."""

    decoder: DecoderConfig = Field(default_factory=DecoderConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
