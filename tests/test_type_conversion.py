"""Unit tests for hex character, nibble and byte conversions."""

from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from midi_parser.type_conversion import (  # noqa: E402
    byte_to_hex_chars,
    byte_to_nibbles,
    bytes_to_hex_str,
    bytes_to_nibbles,
    hex_char_to_nibble,
    hex_str_to_bytes,
    hex_str_to_hex_chars,
    hex_str_to_nibbles,
    nibble_to_hex_char,
    nibbles_to_byte,
    nibbles_to_bytes,
)


def test_nibbles_to_bytes() -> None:
    assert nibbles_to_bytes(["9", "0", "4", "0", "4", "0"]) == [0x90, 0x40, 0x40]


def test_nibbles_to_bytes_leaves_trailing_odd_nibble_out() -> None:
    chars = ["9", "0", "4", "0", "4"]
    assert nibbles_to_bytes(chars) == [0x90, 0x40]
    assert chars == ["9", "0", "4", "0", "4"]


def test_nibbles_to_bytes_empty() -> None:
    assert nibbles_to_bytes([]) == []
    assert nibbles_to_bytes(["F"]) == []


def test_hex_str_to_hex_chars() -> None:
    assert hex_str_to_hex_chars("904040") == ["9", "0", "4", "0", "4", "0"]
    assert hex_str_to_hex_chars("f0ab") == ["F", "0", "A", "B"]


def test_hex_str_to_nibbles() -> None:
    assert hex_str_to_nibbles("904040") == [9, 0, 4, 0, 4, 0]


def test_hex_str_to_bytes() -> None:
    assert hex_str_to_bytes("904040") == [144, 64, 64]


def test_bytes_to_nibbles() -> None:
    assert bytes_to_nibbles([0x90, 0x40, 0x40]) == [9, 0, 4, 0, 4, 0]


@pytest.mark.parametrize(
    ("byte", "chars"),
    [
        (0x90, ["9", "0"]),
        (0x0A, ["0", "A"]),
        (0xFF, ["F", "F"]),
        (0x00, ["0", "0"]),
    ],
)
def test_byte_to_hex_chars(byte: int, chars: list[str]) -> None:
    assert byte_to_hex_chars(byte) == chars


def test_byte_and_nibble_values() -> None:
    assert byte_to_nibbles(0x90) == (9, 0)
    assert nibbles_to_byte(0xF, 0x7) == 0xF7
    assert hex_char_to_nibble("c") == 0xC
    assert nibble_to_hex_char(0xB) == "B"


def test_bytes_to_hex_str() -> None:
    assert bytes_to_hex_str([0xF0, 0x01, 0x02, 0xF7]) == "F00102F7"
