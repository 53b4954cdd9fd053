"""Message factory producing mido.Message values."""

import logging
from collections.abc import Sequence
from typing import Any

import mido

from .codec import MessageKind
from .messages import DefaultMessageFactory

logger = logging.getLogger(__name__)


class MidoMessageFactory:
    """
    Builds mido.Message for frames mido accepts.

    The parser frames without validating, so a frame may carry data bytes
    above 0x7F, an undefined status (F4, F5, F9, FD) or a System Common
    length mido does not expect. Those frames are built by the fallback
    factory instead.
    """

    def __init__(self, fallback: Any | None = None) -> None:
        self._fallback = fallback or DefaultMessageFactory()

    def build(self, kind: MessageKind, status: int, data: Sequence[int]) -> Any:
        try:
            return mido.Message.from_bytes([status, *data])
        except ValueError as e:
            logger.debug("mido rejected %02X %s: %s", status, list(data), e)
            return self._fallback.build(kind, status, data)
