"""Unit tests for the frame decoder and running-status slot."""

from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from midi_parser.codec import MessageKind, channel_entry, system_entry  # noqa: E402
from midi_parser.framing import (  # noqa: E402
    DecodedFrame,
    FrameDecoder,
    FrameStatus,
    RunningStatus,
    RunningStatusCache,
)
from midi_parser.messages import (  # noqa: E402
    DefaultMessageFactory,
    NoteOn,
    SystemCommon,
    SystemExclusive,
    SystemRealtime,
)


class RecordingFactory:
    def __init__(self) -> None:
        self.calls = []

    def build(self, kind, status, data):
        self.calls.append((kind, status, list(data)))
        return (kind, status, tuple(data))


@pytest.fixture
def cache() -> RunningStatusCache:
    return RunningStatusCache()


@pytest.fixture
def decoder(cache: RunningStatusCache) -> FrameDecoder:
    return FrameDecoder(DefaultMessageFactory(), cache)


@pytest.mark.parametrize("fragment", ["", "9", "90", "9040", "90404"])
def test_short_channel_fragment_is_incomplete(decoder: FrameDecoder, fragment: str) -> None:
    assert decoder.decode(list(fragment)) is FrameStatus.INCOMPLETE


def test_channel_frame(decoder: FrameDecoder, cache: RunningStatusCache) -> None:
    result = decoder.decode(list("90404080"))

    assert isinstance(result, DecodedFrame)
    assert result.message == NoteOn(0, 0x40, 0x40)
    assert result.nibbles == list("904040")
    assert result.length == 6
    assert cache.state == RunningStatus(4, channel_entry(0x9), 0x90)


def test_decode_from_scan_position(decoder: FrameDecoder) -> None:
    buffer = list("00904040")
    result = decoder.decode(buffer, 2)

    assert isinstance(result, DecodedFrame)
    assert result.message == NoteOn(0, 0x40, 0x40)
    assert buffer == list("00904040")


def test_data_byte_without_running_status_is_no_match(decoder: FrameDecoder) -> None:
    assert decoder.decode(list("4040")) is FrameStatus.NO_MATCH


def test_stray_sysex_end_is_no_match(decoder: FrameDecoder) -> None:
    assert decoder.decode(list("F7")) is FrameStatus.NO_MATCH


def test_running_status_frame(decoder: FrameDecoder, cache: RunningStatusCache) -> None:
    decoder.decode(list("954040"))
    state = cache.state

    result = decoder.decode(list("4050"))

    assert isinstance(result, DecodedFrame)
    assert result.message == NoteOn(5, 0x40, 0x50)
    assert result.nibbles == list("4050")
    assert cache.state is state


def test_running_status_waits_for_data(decoder: FrameDecoder, cache: RunningStatusCache) -> None:
    decoder.decode(list("904040"))

    assert decoder.decode(list("40")) is FrameStatus.INCOMPLETE
    assert cache.present


def test_running_status_passes_cached_status_and_data_only(cache: RunningStatusCache) -> None:
    factory = RecordingFactory()
    decoder = FrameDecoder(factory, cache)

    decoder.decode(list("C305"))
    decoder.decode(list("06"))

    assert factory.calls == [
        (MessageKind.PROGRAM_CHANGE, 0xC3, [0x05]),
        (MessageKind.PROGRAM_CHANGE, 0xC3, [0x06]),
    ]


@pytest.mark.parametrize(
    ("fragment", "expected", "length"),
    [
        ("F150A0", SystemCommon(1, (0x50, 0xA0)), 6),
        ("F150", SystemCommon(1, (0x50,)), 4),
        ("F1507", SystemCommon(1, (0x50,)), 4),
        ("F6", SystemCommon(6, ()), 2),
    ],
)
def test_system_common_longest_fit(decoder: FrameDecoder, fragment: str, expected: SystemCommon, length: int) -> None:
    result = decoder.decode(list(fragment))

    assert isinstance(result, DecodedFrame)
    assert result.message == expected
    assert result.length == length


def test_system_common_sets_running_status(decoder: FrameDecoder, cache: RunningStatusCache) -> None:
    decoder.decode(list("F150"))
    assert cache.state == RunningStatus(2, system_entry(0x1), 0xF1)


def test_status_only_frame_cancels_running_status(decoder: FrameDecoder, cache: RunningStatusCache) -> None:
    decoder.decode(list("904040"))

    result = decoder.decode(list("F8"))

    assert isinstance(result, DecodedFrame)
    assert result.message == SystemRealtime(8)
    assert not cache.present


def test_sysex_frame(decoder: FrameDecoder) -> None:
    result = decoder.decode(list("F00102F7904040"))

    assert isinstance(result, DecodedFrame)
    assert result.message == SystemExclusive((0xF0, 0x01, 0x02, 0xF7))
    assert result.nibbles == list("F00102F7")


def test_sysex_without_terminator_is_incomplete(decoder: FrameDecoder, cache: RunningStatusCache) -> None:
    decoder.decode(list("904040"))

    assert decoder.decode(list("F00102")) is FrameStatus.INCOMPLETE
    assert not cache.present


def test_sysex_ignores_odd_trailing_nibble(decoder: FrameDecoder) -> None:
    assert decoder.decode(list("F001F")) is FrameStatus.INCOMPLETE


def test_cache_accessors(cache: RunningStatusCache) -> None:
    assert not cache.present
    state = RunningStatus(4, channel_entry(0x9), 0x90)
    cache.set(state)
    assert cache.present
    assert cache.state is state
    cache.cancel()
    assert cache.state is None
