"""MIDI message values and the factory that builds them from framed bytes."""

import abc
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Protocol

from .codec import SYSEX_STATUS, MessageKind


class MessageFactory(Protocol):
    """Builds a message value from a framed status byte and its data bytes."""

    def build(self, kind: MessageKind, status: int, data: Sequence[int]) -> Any: ...


class Message(abc.ABC):
    """Common behaviour for all message values."""

    kind: ClassVar[MessageKind]

    @property
    @abc.abstractmethod
    def status(self) -> int: ...

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "status": self.status, **asdict(self)}


class ChannelMessage(Message):
    _status_nibble: ClassVar[int]
    channel: int

    @property
    def status(self) -> int:
        return (self._status_nibble << 4) | self.channel


@dataclass(frozen=True)
class NoteOff(ChannelMessage):
    kind = MessageKind.NOTE_OFF
    _status_nibble = 0x8

    channel: int
    note: int
    velocity: int


@dataclass(frozen=True)
class NoteOn(ChannelMessage):
    kind = MessageKind.NOTE_ON
    _status_nibble = 0x9

    channel: int
    note: int
    velocity: int


@dataclass(frozen=True)
class PolyphonicAftertouch(ChannelMessage):
    kind = MessageKind.POLYPHONIC_AFTERTOUCH
    _status_nibble = 0xA

    channel: int
    note: int
    value: int


@dataclass(frozen=True)
class ControlChange(ChannelMessage):
    kind = MessageKind.CONTROL_CHANGE
    _status_nibble = 0xB

    channel: int
    index: int
    value: int


@dataclass(frozen=True)
class ProgramChange(ChannelMessage):
    kind = MessageKind.PROGRAM_CHANGE
    _status_nibble = 0xC

    channel: int
    program: int


@dataclass(frozen=True)
class ChannelAftertouch(ChannelMessage):
    kind = MessageKind.CHANNEL_AFTERTOUCH
    _status_nibble = 0xD

    channel: int
    value: int


@dataclass(frozen=True)
class PitchBend(ChannelMessage):
    kind = MessageKind.PITCH_BEND
    _status_nibble = 0xE

    channel: int
    low: int
    high: int

    @property
    def value(self) -> int:
        """14-bit bend amount, 0x2000 is center."""
        return ((self.high & 0x7F) << 7) | (self.low & 0x7F)


@dataclass(frozen=True)
class SystemCommon(Message):
    kind = MessageKind.SYSTEM_COMMON

    id: int
    data: tuple[int, ...] = ()

    @property
    def status(self) -> int:
        return 0xF0 | self.id


@dataclass(frozen=True)
class SystemRealtime(Message):
    kind = MessageKind.SYSTEM_REALTIME

    id: int

    @property
    def status(self) -> int:
        return 0xF0 | self.id


@dataclass(frozen=True)
class SystemExclusive(Message):
    """A complete SysEx frame, F0 through F7 inclusive."""

    kind = MessageKind.SYSTEM_EXCLUSIVE

    data: tuple[int, ...]

    @property
    def status(self) -> int:
        return SYSEX_STATUS

    @property
    def payload(self) -> tuple[int, ...]:
        """Bytes between the F0 and F7 markers."""
        return self.data[1:-1]


def _data_byte(data: Sequence[int], index: int) -> int | None:
    return data[index] if index < len(data) else None


def _two_data_bytes(cls: type) -> Callable[[int, Sequence[int]], Message]:
    return lambda status, data: cls(status & 0x0F, _data_byte(data, 0), _data_byte(data, 1))


def _one_data_byte(cls: type) -> Callable[[int, Sequence[int]], Message]:
    return lambda status, data: cls(status & 0x0F, _data_byte(data, 0))


class DefaultMessageFactory:
    """Builds the dataclass messages defined in this module."""

    _builders: dict[MessageKind, Callable[[int, Sequence[int]], Message]] = {
        MessageKind.NOTE_OFF: _two_data_bytes(NoteOff),
        MessageKind.NOTE_ON: _two_data_bytes(NoteOn),
        MessageKind.POLYPHONIC_AFTERTOUCH: _two_data_bytes(PolyphonicAftertouch),
        MessageKind.CONTROL_CHANGE: _two_data_bytes(ControlChange),
        MessageKind.PROGRAM_CHANGE: _one_data_byte(ProgramChange),
        MessageKind.CHANNEL_AFTERTOUCH: _one_data_byte(ChannelAftertouch),
        MessageKind.PITCH_BEND: _two_data_bytes(PitchBend),
        MessageKind.SYSTEM_COMMON: lambda status, data: SystemCommon(status & 0x0F, tuple(data)),
        MessageKind.SYSTEM_REALTIME: lambda status, data: SystemRealtime(status & 0x0F),
        MessageKind.SYSTEM_EXCLUSIVE: lambda status, data: SystemExclusive((status, *data)),
    }

    def build(self, kind: MessageKind, status: int, data: Sequence[int]) -> Message:
        return self._builders[kind](status, data)
