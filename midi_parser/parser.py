"""Stream buffer driver: accumulates nibbles and extracts complete messages."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .framing import FrameDecoder, FrameStatus, RunningStatusCache
from .messages import DefaultMessageFactory, MessageFactory

logger = logging.getLogger(__name__)


@dataclass
class ParseReport:
    """Outcome of one process call."""

    messages: list[Any] = field(default_factory=list)
    processed: list[str] = field(default_factory=list)  # nibbles consumed by messages
    rejected: list[str] = field(default_factory=list)  # nibbles skipped before a message


class Parser:
    """
    Stateful MIDI parser over a stream of hex nibbles.

    Nibbles that do not yet form a complete message stay buffered between
    calls. Running status is remembered across calls.
    """

    def __init__(self, factory: MessageFactory | None = None) -> None:
        self._buffer: list[str] = []
        self._running_status = RunningStatusCache()
        self._decoder = FrameDecoder(factory or DefaultMessageFactory(), self._running_status)

    @property
    def buffer(self) -> list[str]:
        """Snapshot of nibbles waiting for more data."""
        return list(self._buffer)

    @property
    def buffer_as_string(self) -> str:
        return "".join(self._buffer)

    @property
    def running_status_present(self) -> bool:
        return self._running_status.present

    def clear_buffer(self) -> None:
        """Discard pending nibbles and forget running status."""
        self._buffer.clear()
        self._running_status.cancel()

    def process(self, nibbles: Iterable[str]) -> list[Any]:
        """Feed nibbles into the parser, return list of complete messages."""
        return self.process_with_report(nibbles).messages

    def process_with_report(self, nibbles: Iterable[str]) -> ParseReport:
        """Feed nibbles into the parser, return messages plus consumed and skipped nibbles."""
        self._buffer.extend(nibbles)
        report = ParseReport()
        pointer = 0

        while pointer < len(self._buffer):
            result = self._decoder.decode(self._buffer, pointer)

            if result is FrameStatus.INCOMPLETE:
                break

            if result is FrameStatus.NO_MATCH:
                # Unusable nibble, skip it
                self._running_status.cancel()
                pointer += 1
                continue

            if pointer > 0:
                logger.debug("Skipped %d nibbles: %s", pointer, "".join(self._buffer[:pointer]))
                report.rejected.extend(self._buffer[:pointer])

            report.messages.append(result.message)
            report.processed.extend(result.nibbles)

            # Remove skipped nibbles and the frame, rescan what remains
            del self._buffer[: pointer + result.length]
            pointer = 0

        return report
