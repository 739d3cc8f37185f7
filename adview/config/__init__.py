"""Configuration management."""

from .config import (
    Config,
    ReaderConfig,
    OutputConfig,
    LoggingConfig,
    load_config,
)

__all__ = [
    "Config",
    "ReaderConfig",
    "OutputConfig",
    "LoggingConfig",
    "load_config",
]
