"""Incremental MIDI stream parser."""

from .codec import MessageKind  # noqa: F401
from .messages import (  # noqa: F401
    ChannelAftertouch,
    ControlChange,
    DefaultMessageFactory,
    Message,
    MessageFactory,
    NoteOff,
    NoteOn,
    PitchBend,
    PolyphonicAftertouch,
    ProgramChange,
    SystemCommon,
    SystemExclusive,
    SystemRealtime,
)
from .normalizer import normalize  # noqa: F401
from .parser import ParseReport, Parser  # noqa: F401
from .session import Session  # noqa: F401

__version__ = "0.1.0"
