"""Input normalization: turn caller data into a flat list of hex nibbles.

Accepted input, freely mixed within one call:

- int 0x00-0xFF: one byte
- str: hex characters of any length and case ("9", "904040", "90 40 40")
- bytes / bytearray: raw bytes
- any other iterable: flattened recursively

Anything else (out of range ints, non-hex characters, unknown objects) is
dropped without interrupting the rest of the input.
"""

import logging
import re
from collections.abc import Iterable

from .type_conversion import byte_to_hex_chars, hex_str_to_hex_chars

logger = logging.getLogger(__name__)

_NON_HEX = re.compile(r"[^0-9a-fA-F]")


def normalize(*args: object) -> list[str]:
    """Convert arguments to uppercase hex characters, e.g. (0x90, "40") -> ["9", "0", "4", "0"]."""
    return _flatten(args, set())


def _flatten(values: Iterable[object], seen: set[int]) -> list[str]:
    nibbles: list[str] = []
    for value in values:
        nibbles.extend(_convert(value, seen))
    return nibbles


def filter_numeric(value: int) -> int | None:
    """Return the value if it is a valid byte, None otherwise."""
    if 0x00 <= value <= 0xFF:
        return value
    return None


def filter_string(value: str) -> str:
    """Strip everything that is not a hex digit."""
    return _NON_HEX.sub("", value)


def _convert(value: object, seen: set[int]) -> list[str]:
    # bool is an int subclass but never a byte
    if isinstance(value, bool):
        logger.debug("Dropping boolean input %r", value)
        return []

    if isinstance(value, int):
        byte = filter_numeric(value)
        if byte is None:
            logger.debug("Dropping out of range byte %r", value)
            return []
        return byte_to_hex_chars(byte)

    if isinstance(value, str):
        return hex_str_to_hex_chars(filter_string(value))

    if isinstance(value, (bytes, bytearray)):
        nibbles = []
        for byte in value:
            nibbles.extend(byte_to_hex_chars(byte))
        return nibbles

    if isinstance(value, Iterable):
        # seen holds containers on the current path only
        if id(value) in seen:
            logger.debug("Dropping self-referencing input")
            return []
        seen.add(id(value))
        try:
            return _flatten(value, seen)
        finally:
            seen.discard(id(value))

    logger.debug("Dropping unsupported input %r", value)
    return []
