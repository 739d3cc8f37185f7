"""Configuration management for adview."""

from dataclasses import dataclass, field
from typing import Optional
import yaml
from pathlib import Path


@dataclass
class ReaderConfig:
    """Configuration for table reads."""

    chunk_size: int = 1000  # Rows decoded per chunk when streaming

    def __post_init__(self):
        if self.chunk_size <= 0:
            raise ValueError(f"reader.chunk_size must be positive, got {self.chunk_size}")


@dataclass
class OutputConfig:
    """Configuration for text output."""

    delimiter: str = "\t"
    head_lines: int = 10


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "WARNING"
    structured: bool = False
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""

    reader: ReaderConfig = field(default_factory=ReaderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: str) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Parsed configuration

    Example YAML format:
        reader:
          chunk_size: 5000

        output:
          delimiter: "\\t"
          head_lines: 20

        logging:
          level: DEBUG
          structured: false
          log_file: adview.log
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    reader = ReaderConfig(**data.get("reader", {}))
    output = OutputConfig(**data.get("output", {}))
    logging_config = LoggingConfig(**data.get("logging", {}))

    return Config(reader=reader, output=output, logging=logging_config)
