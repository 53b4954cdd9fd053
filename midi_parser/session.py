"""Parser session accepting mixed caller input."""

from typing import Any

from .messages import MessageFactory
from .normalizer import normalize
from .parser import ParseReport, Parser


class Session:
    """
    Parse MIDI data given as bytes, hex strings, nibbles or nested lists.

    Example:
        session = Session()
        session.parse("90")        # []
        session.parse(0x40, "40")  # [NoteOn(channel=0, note=64, velocity=64)]
    """

    def __init__(self, factory: MessageFactory | None = None) -> None:
        self._parser = Parser(factory)

    @property
    def buffer(self) -> list[str]:
        return self._parser.buffer

    @property
    def buffer_as_string(self) -> str:
        return self._parser.buffer_as_string

    def clear_buffer(self) -> None:
        self._parser.clear_buffer()

    def parse(self, *args: object) -> list[Any]:
        """Parse some input, return any messages it completes."""
        return self._parser.process(normalize(*args))

    def parse_with_report(self, *args: object) -> ParseReport:
        return self._parser.process_with_report(normalize(*args))
