"""Chunked reader feeding MIDI data from a file object into a parser session."""

import logging
from typing import IO, Any

from .config import InputConfig
from .session import Session

logger = logging.getLogger(__name__)


class StreamReader:
    """Reads hex text or raw bytes from a stream and decodes it chunk by chunk."""

    def __init__(self, stream: IO[Any], config: InputConfig, session: Session | None = None) -> None:
        self._stream = stream
        self._config = config
        self._session = session or Session()
        self._exhausted = False

    @property
    def session(self) -> Session:
        return self._session

    @property
    def exhausted(self) -> bool:
        """Return True once the stream has hit end of file."""
        return self._exhausted

    def read_messages(self) -> list[Any]:
        """
        Read one chunk and decode it.

        Returns list of completed messages, possibly empty.
        Raises SourceError if the stream can no longer be read.
        """
        if self._exhausted:
            return []

        try:
            data = self._stream.read(self._config.chunk_size)
        except OSError as e:
            logger.error("Input read error: %s", e)
            raise SourceError(str(e)) from e

        if not data:
            self._exhausted = True
            if self._session.buffer:
                logger.debug("End of input with %d nibbles pending", len(self._session.buffer))
            return []

        if self._config.format == "hex" and isinstance(data, bytes):
            data = data.decode("ascii", errors="ignore")
        elif self._config.format == "binary" and isinstance(data, str):
            data = data.encode("latin-1")

        messages = self._session.parse(data)
        for message in messages:
            logger.debug("Decoded message: %s", message)
        return messages

    def read_all(self) -> list[Any]:
        """Read until end of stream, return every decoded message."""
        messages = []
        while not self._exhausted:
            messages.extend(self.read_messages())
        return messages


class SourceError(Exception):
    """Raised when the input stream cannot be read."""

    pass
