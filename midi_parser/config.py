"""Configuration loading and validation."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

INPUT_FORMATS = ("hex", "binary")
OUTPUT_FORMATS = ("text", "json")


@dataclass
class InputConfig:
    format: str = "hex"
    chunk_size: int = 256


@dataclass
class OutputConfig:
    format: str = "text"
    show_buffer: bool = False


@dataclass
class Config:
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: Path) -> Config:
    """Load and validate configuration from YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ValueError("configuration validation failed: top level must be a mapping")

    errors = []

    input_raw = raw.get("input") or {}
    output_raw = raw.get("output") or {}

    if not isinstance(input_raw, dict):
        errors.append("'input' must be a mapping")
        input_raw = {}
    if not isinstance(output_raw, dict):
        errors.append("'output' must be a mapping")
        output_raw = {}

    input_format = input_raw.get("format", "hex")
    if input_format not in INPUT_FORMATS:
        errors.append(f"input.format must be one of {', '.join(INPUT_FORMATS)}")

    chunk_size = input_raw.get("chunk_size", 256)
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
        errors.append("input.chunk_size must be a positive integer")

    output_format = output_raw.get("format", "text")
    if output_format not in OUTPUT_FORMATS:
        errors.append(f"output.format must be one of {', '.join(OUTPUT_FORMATS)}")

    show_buffer = output_raw.get("show_buffer", False)
    if not isinstance(show_buffer, bool):
        errors.append("output.show_buffer must be true or false")

    if errors:
        raise ValueError(f"configuration validation failed: {'; '.join(errors)}")

    return Config(
        input=InputConfig(format=input_format, chunk_size=chunk_size),
        output=OutputConfig(format=output_format, show_buffer=show_buffer),
    )
