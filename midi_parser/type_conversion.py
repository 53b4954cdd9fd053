"""Conversions between hex characters, numeric nibbles and numeric bytes.

Nibbles are kept as uppercase hex characters ("9", "0", "F") while they sit
in a parser buffer. A byte is two nibbles, high nibble first.
"""

from collections.abc import Iterable, Sequence

HEX_DIGITS = "0123456789ABCDEF"


def hex_char_to_nibble(char: str) -> int:
    """Convert one hex character to its 4-bit value."""
    return int(char, 16)


def nibble_to_hex_char(nibble: int) -> str:
    """Convert a 4-bit value to an uppercase hex character."""
    return HEX_DIGITS[nibble & 0x0F]


def byte_to_nibbles(byte: int) -> tuple[int, int]:
    """Split a byte into (high, low) nibbles."""
    return (byte & 0xF0) >> 4, byte & 0x0F


def byte_to_hex_chars(byte: int) -> list[str]:
    """Convert a byte to two hex characters, e.g. 0x90 -> ["9", "0"]."""
    return [nibble_to_hex_char(n) for n in byte_to_nibbles(byte)]


def nibbles_to_byte(high: int, low: int) -> int:
    return (high << 4) | low


def nibbles_to_bytes(chars: Sequence[str]) -> list[int]:
    """
    Convert hex characters to bytes.

    A trailing odd nibble is not a complete byte yet and is left out of the
    result. The input is never modified.
    """
    end = len(chars) - (len(chars) % 2)
    return [
        nibbles_to_byte(hex_char_to_nibble(chars[i]), hex_char_to_nibble(chars[i + 1]))
        for i in range(0, end, 2)
    ]


def hex_str_to_hex_chars(string: str) -> list[str]:
    return [char.upper() for char in string]


def hex_str_to_nibbles(string: str) -> list[int]:
    """Convert a hex string to numeric nibbles, e.g. "9040" -> [9, 0, 4, 0]."""
    return bytes_to_nibbles(hex_str_to_bytes(string))


def hex_str_to_bytes(string: str) -> list[int]:
    """Convert a hex string to bytes, e.g. "904040" -> [0x90, 0x40, 0x40]."""
    return nibbles_to_bytes(hex_str_to_hex_chars(string))


def bytes_to_nibbles(data: Iterable[int]) -> list[int]:
    nibbles = []
    for byte in data:
        nibbles.extend(byte_to_nibbles(byte))
    return nibbles


def bytes_to_hex_str(data: Iterable[int]) -> str:
    return "".join(f"{byte:02X}" for byte in data)
