"""MIDI message family tables.

Channel messages are selected by the first status nibble (0x8-0xE). System
messages are selected by the second nibble of an 0xF_ status: 0x1-0x6 is
System Common, 0x8-0xF is System Realtime. System Exclusive (0xF0) has no
fixed length and is framed by its terminator instead.

Frame lengths are in nibbles and include the status byte.
"""

import enum
from dataclasses import dataclass

SYSEX_STATUS = 0xF0
SYSEX_END = 0xF7

STATUS_NIBBLES = 2  # one status byte


class MessageKind(enum.Enum):
    NOTE_OFF = "note_off"
    NOTE_ON = "note_on"
    POLYPHONIC_AFTERTOUCH = "polyphonic_aftertouch"
    CONTROL_CHANGE = "control_change"
    PROGRAM_CHANGE = "program_change"
    CHANNEL_AFTERTOUCH = "channel_aftertouch"
    PITCH_BEND = "pitch_bend"
    SYSTEM_COMMON = "system_common"
    SYSTEM_REALTIME = "system_realtime"
    SYSTEM_EXCLUSIVE = "system_exclusive"


@dataclass(frozen=True)
class CodecEntry:
    """One message family: the nibbles that select it and its frame length."""

    selector: range
    frame_length: int
    kind: MessageKind

    def matches(self, nibble: int) -> bool:
        return nibble in self.selector

    @property
    def candidate_lengths(self) -> tuple[int, ...]:
        """
        Frame lengths to try, longest first.

        System Common messages carry zero, one or two data bytes depending on
        their status, so every length down to a bare status byte is a
        candidate. All other families have exactly one length.
        """
        if self.kind is MessageKind.SYSTEM_COMMON:
            return tuple(range(self.frame_length, 0, -STATUS_NIBBLES))
        return (self.frame_length,)


CHANNEL_MESSAGES = (
    CodecEntry(range(0x8, 0x9), 6, MessageKind.NOTE_OFF),
    CodecEntry(range(0x9, 0xA), 6, MessageKind.NOTE_ON),
    CodecEntry(range(0xA, 0xB), 6, MessageKind.POLYPHONIC_AFTERTOUCH),
    CodecEntry(range(0xB, 0xC), 6, MessageKind.CONTROL_CHANGE),
    CodecEntry(range(0xC, 0xD), 4, MessageKind.PROGRAM_CHANGE),
    CodecEntry(range(0xD, 0xE), 4, MessageKind.CHANNEL_AFTERTOUCH),
    CodecEntry(range(0xE, 0xF), 6, MessageKind.PITCH_BEND),
)

# Order matters: common is checked before realtime.
SYSTEM_MESSAGES = (
    CodecEntry(range(0x1, 0x7), 6, MessageKind.SYSTEM_COMMON),
    CodecEntry(range(0x8, 0x10), 2, MessageKind.SYSTEM_REALTIME),
)


def channel_entry(nibble: int) -> CodecEntry | None:
    """Find the channel message family for a first status nibble."""
    return next((entry for entry in CHANNEL_MESSAGES if entry.matches(nibble)), None)


def system_entry(nibble: int) -> CodecEntry | None:
    """Find the system message family for the second nibble of an 0xF_ status."""
    return next((entry for entry in SYSTEM_MESSAGES if entry.matches(nibble)), None)
