"""Main entry point for the MIDI stream parser."""

import argparse
import contextlib
import json
import logging
import sys
from pathlib import Path
from typing import IO, Any

from .config import INPUT_FORMATS, OUTPUT_FORMATS, Config, load_config
from .messages import Message
from .reader import SourceError, StreamReader
from .type_conversion import bytes_to_hex_str

logger = logging.getLogger(__name__)

STDIN_NAME = "-"


def main() -> None:
    """Entry point for midi-parser command."""
    parser = argparse.ArgumentParser(
        description="Decode a MIDI byte stream (hex text or raw bytes) into messages"
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        type=Path,
        help="Files to decode, '-' or nothing for stdin",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "-f",
        "--input-format",
        choices=INPUT_FORMATS,
        help="Input encoding (overrides config)",
    )
    parser.add_argument(
        "-o",
        "--output-format",
        choices=OUTPUT_FORMATS,
        help="Output format (overrides config)",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        help="Characters or bytes read per chunk (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    # Setup logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is None:
        config = Config()
    else:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            logger.error("Configuration file not found: %s", args.config)
            sys.exit(1)
        except ValueError as e:
            logger.error("Configuration error: %s", e)
            sys.exit(1)

    if args.input_format:
        config.input.format = args.input_format
    if args.output_format:
        config.output.format = args.output_format
    if args.chunk_size is not None:
        if args.chunk_size < 1:
            logger.error("Configuration error: --chunk-size must be a positive integer")
            sys.exit(1)
        config.input.chunk_size = args.chunk_size

    sys.exit(run(config, args.inputs))


def run(config: Config, inputs: list[Path], out: IO[str] | None = None) -> int:
    """Decode every input with loaded configuration, return process exit status."""
    out = out or sys.stdout

    for source in inputs or [Path(STDIN_NAME)]:
        try:
            with _open_input(source, config.input.format) as stream:
                reader = StreamReader(stream, config.input)
                while not reader.exhausted:
                    for message in reader.read_messages():
                        print(format_message(message, config.output.format), file=out)
        except FileNotFoundError:
            logger.error("Input file not found: %s", source)
            return 1
        except (SourceError, OSError) as e:
            logger.error("Failed to read %s: %s", source, e)
            return 1

        pending = reader.session.buffer_as_string
        if config.output.show_buffer:
            print(f"pending: {pending}", file=out)
        elif pending:
            logger.warning("%s: %d nibbles left undecoded", source, len(pending))

    return 0


def format_message(message: Any, output_format: str) -> str:
    """Render a message as a text line or a JSON object."""
    if not isinstance(message, Message):
        return repr(message)

    fields = message.to_dict()
    if output_format == "json":
        return json.dumps({k: list(v) if isinstance(v, tuple) else v for k, v in fields.items()})

    name = type(message).__name__
    parts = [f"status={fields.pop('status'):02X}"]
    fields.pop("type")
    for key, value in fields.items():
        if isinstance(value, tuple):
            value = bytes_to_hex_str(value)
        parts.append(f"{key}={value}")
    return f"{name} {' '.join(parts)}"


def _open_input(source: Path, input_format: str) -> contextlib.AbstractContextManager[IO[Any]]:
    if str(source) == STDIN_NAME:
        stream = sys.stdin
        if input_format == "binary":
            stream = getattr(sys.stdin, "buffer", sys.stdin)
        return contextlib.nullcontext(stream)

    if input_format == "binary":
        return open(source, "rb")
    return open(source)


if __name__ == "__main__":
    main()
