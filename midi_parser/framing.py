"""MIDI message framing over a nibble buffer.

A frame starts at a status byte:

    [status][data...]        channel, system common, system realtime
    [F0][data...][F7]        system exclusive

or, with running status, at a data byte that reuses the status of the
previous frame:

    [data...]

The decoder looks at the buffer from a scan position and reports one of:
a complete frame, INCOMPLETE (wait for more nibbles) or NO_MATCH (nothing can
start at this position).
"""

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .codec import (
    SYSEX_END,
    STATUS_NIBBLES,
    CodecEntry,
    MessageKind,
    channel_entry,
    system_entry,
)
from .messages import MessageFactory
from .type_conversion import hex_char_to_nibble, nibbles_to_bytes

logger = logging.getLogger(__name__)


class FrameStatus(enum.Enum):
    INCOMPLETE = "incomplete"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class RunningStatus:
    """Shape of the last fresh-status frame, reused by status-less frames."""

    residual_length: int  # nibbles following the status byte
    entry: CodecEntry
    status: int


@dataclass(frozen=True)
class DecodedFrame:
    message: Any
    nibbles: list[str]

    @property
    def length(self) -> int:
        return len(self.nibbles)


class RunningStatusCache:
    """Single optional running-status slot."""

    def __init__(self) -> None:
        self._state: RunningStatus | None = None

    @property
    def state(self) -> RunningStatus | None:
        return self._state

    @property
    def present(self) -> bool:
        return self._state is not None

    def set(self, state: RunningStatus) -> None:
        self._state = state

    def cancel(self) -> None:
        self._state = None


class FrameDecoder:
    """Finds the frame starting at a buffer position and builds its message."""

    def __init__(self, factory: MessageFactory, running_status: RunningStatusCache) -> None:
        self._factory = factory
        self._running_status = running_status

    def decode(self, buffer: Sequence[str], start: int = 0) -> DecodedFrame | FrameStatus:
        """
        Classify the nibbles at buffer[start:].

        The buffer is read in place. Only the nibbles of a committed frame are
        copied out.
        """
        if len(buffer) - start < STATUS_NIBBLES:
            return FrameStatus.INCOMPLETE

        high = hex_char_to_nibble(buffer[start])
        low = hex_char_to_nibble(buffer[start + 1])

        if 0x8 <= high <= 0xE:
            return self._decode_status(buffer, start, channel_entry(high))

        if high == 0xF:
            if low == 0x0:
                return self._decode_sysex(buffer, start)
            entry = system_entry(low)
            if entry is None:
                # F7 outside of a SysEx frame
                return FrameStatus.NO_MATCH
            return self._decode_status(buffer, start, entry)

        state = self._running_status.state
        if state is None:
            return FrameStatus.NO_MATCH
        return self._decode_running_status(buffer, start, state)

    def _decode_status(
        self, buffer: Sequence[str], start: int, entry: CodecEntry
    ) -> DecodedFrame | FrameStatus:
        available = len(buffer) - start
        for length in entry.candidate_lengths:
            if available < length:
                continue

            nibbles = list(buffer[start : start + length])
            status, *data = nibbles_to_bytes(nibbles)
            message = self._factory.build(entry.kind, status, data)

            residual = length - STATUS_NIBBLES
            if residual > 0:
                self._running_status.set(RunningStatus(residual, entry, status))
            else:
                # Nothing left for a status-less frame to carry
                self._running_status.cancel()

            logger.debug("Decoded %s frame: %s", entry.kind.value, "".join(nibbles))
            return DecodedFrame(message, nibbles)

        return FrameStatus.INCOMPLETE

    def _decode_running_status(
        self, buffer: Sequence[str], start: int, state: RunningStatus
    ) -> DecodedFrame | FrameStatus:
        if len(buffer) - start < state.residual_length:
            return FrameStatus.INCOMPLETE

        nibbles = list(buffer[start : start + state.residual_length])
        message = self._factory.build(state.entry.kind, state.status, nibbles_to_bytes(nibbles))
        logger.debug(
            "Decoded %s frame with running status %02X: %s",
            state.entry.kind.value,
            state.status,
            "".join(nibbles),
        )
        return DecodedFrame(message, nibbles)

    def _decode_sysex(self, buffer: Sequence[str], start: int) -> DecodedFrame | FrameStatus:
        self._running_status.cancel()

        data = nibbles_to_bytes(buffer[start:])
        try:
            end = data.index(SYSEX_END)
        except ValueError:
            logger.debug("SysEx pending: %d bytes without terminator", len(data))
            return FrameStatus.INCOMPLETE

        status, *payload = data[: end + 1]
        message = self._factory.build(MessageKind.SYSTEM_EXCLUSIVE, status, payload)
        nibbles = list(buffer[start : start + (end + 1) * 2])
        logger.debug("Decoded system_exclusive frame: %d bytes", end + 1)
        return DecodedFrame(message, nibbles)
