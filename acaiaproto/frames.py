"""Frame encoding and stream reassembly for the Acaia protocol.

Every message on the wire looks like::

    EF DD <type> <length> <payload: length bytes> <checksum: 2 bytes>

Notifications do not respect frame boundaries, so incoming bytes go through
:class:`FrameReassembler`, which scans for the magic pair and rebuilds frames
one byte at a time.
"""
from __future__ import annotations

from dataclasses import dataclass
import enum
import logging

from .const import (
    CHECKSUM_LENGTH,
    HEADER1,
    HEADER2,
    MSG_TYPE_EVENT,
    MSG_TYPE_IDENTIFY,
    WEIGHT_PAYLOAD_LENGTH,
)

_LOGGER = logging.getLogger(__name__)


def checksum(data: bytes) -> bytes:
    """Return the two checksum bytes for the bytes following the type byte."""
    cksum1 = 0
    cksum2 = 0
    for i, val in enumerate(data):
        if i % 2 == 0:
            cksum1 += val
        else:
            cksum2 += val
    return bytes((cksum1 & 0xFF, cksum2 & 0xFF))


def encode(msg_type: int, payload: bytes) -> bytes:
    """Build a complete frame around a payload."""
    payload = bytes(payload)
    return bytes((HEADER1, HEADER2, msg_type)) + payload + checksum(payload)


def encode_auth(auth_payload: bytes) -> bytes:
    """Build the identify frame that authenticates the client."""
    return encode(MSG_TYPE_IDENTIFY, auth_payload)


# Requests weight (00 01), battery (01 02) and timer (02 05) reports
CONFIG_FRAME = encode(
    MSG_TYPE_EVENT, bytes((0x09, 0x00, 0x01, 0x01, 0x02, 0x02, 0x05, 0x03, 0x04))
)


@dataclass(frozen=True)
class Frame:
    """A complete frame recovered from the notification stream."""

    msg_type: int
    payload: bytes
    checksum: bytes

    @property
    def is_weight(self) -> bool:
        """Return True if the payload has the size of a weight report."""
        return len(self.payload) == WEIGHT_PAYLOAD_LENGTH

    @property
    def checksum_valid(self) -> bool:
        """Return True if the trailing bytes match the computed checksum."""
        return checksum(bytes((len(self.payload),)) + self.payload) == self.checksum


class ReassemblerState(enum.Enum):
    """Position of the reassembler inside a frame."""

    SEEK_MAGIC_1 = enum.auto()
    SEEK_MAGIC_2 = enum.auto()
    SEEK_TYPE = enum.auto()
    READ_LENGTH = enum.auto()
    READ_PAYLOAD = enum.auto()
    READ_CHECKSUM = enum.auto()


class FrameReassembler:
    """Rebuild frames from a byte stream delivered in arbitrary chunks.

    Only event frames (type ``0x0C``) are accepted; anything else sends the
    scanner back to looking for the magic pair. The checksum is captured but
    only enforced when ``validate_checksum`` is set.

    An instance is owned by a single consumer and is not thread safe.
    """

    def __init__(self, validate_checksum: bool = False) -> None:
        """Initialize."""
        self.validate_checksum = validate_checksum
        self.frames_emitted = 0
        self.checksum_failures = 0
        self.reset()

    def reset(self) -> None:
        """Drop any partial frame and start scanning for the magic pair."""
        self._state = ReassemblerState.SEEK_MAGIC_1
        self._msg_type = 0
        self._remaining = 0
        self._payload = bytearray()
        self._checksum = bytearray()

    @property
    def state(self) -> ReassemblerState:
        """Return the current state."""
        return self._state

    def feed(self, data: bytes) -> list[Frame]:
        """Consume a chunk and return the frames it completed, in order."""
        frames = []
        for byte in data:
            frame = self.feed_byte(byte)
            if frame is not None:
                frames.append(frame)
        return frames

    def feed_byte(self, byte: int) -> Frame | None:
        """Consume one byte, returning a frame when it completes one."""
        state = self._state

        if state is ReassemblerState.SEEK_MAGIC_1:
            if byte == HEADER1:
                self._state = ReassemblerState.SEEK_MAGIC_2
            return None

        if state is ReassemblerState.SEEK_MAGIC_2:
            if byte == HEADER2:
                self._state = ReassemblerState.SEEK_TYPE
                return None
            # The failed byte may itself start the next frame
            self._state = ReassemblerState.SEEK_MAGIC_1
            return self.feed_byte(byte)

        if state is ReassemblerState.SEEK_TYPE:
            if byte != MSG_TYPE_EVENT:
                _LOGGER.debug("Skipping frame of type 0x%02x", byte)
                self._state = ReassemblerState.SEEK_MAGIC_1
                return None
            self._msg_type = byte
            self._state = ReassemblerState.READ_LENGTH
            return None

        if state is ReassemblerState.READ_LENGTH:
            self._remaining = byte
            self._payload = bytearray()
            self._checksum = bytearray()
            self._state = (
                ReassemblerState.READ_PAYLOAD if byte else ReassemblerState.READ_CHECKSUM
            )
            return None

        if state is ReassemblerState.READ_PAYLOAD:
            self._payload.append(byte)
            self._remaining -= 1
            if self._remaining == 0:
                self._state = ReassemblerState.READ_CHECKSUM
            return None

        # READ_CHECKSUM
        self._checksum.append(byte)
        if len(self._checksum) < CHECKSUM_LENGTH:
            return None

        frame = Frame(self._msg_type, bytes(self._payload), bytes(self._checksum))
        self.reset()

        if self.validate_checksum and not frame.checksum_valid:
            self.checksum_failures += 1
            _LOGGER.debug(
                "Dropping frame with bad checksum: %s (%s)",
                frame.payload.hex(),
                frame.checksum.hex(),
            )
            return None

        self.frames_emitted += 1
        return frame
