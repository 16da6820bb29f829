"""
OSP frame extraction and validation for GP2 debug log lines.

Each GP2 line carries one OSP message written as hexadecimal tokens:

    29/10/2014 20:31:08.942 (0) A0 A2 00 12 33 06 ... 64 E1 01 97 B0 B3

- Time tag: 29/10/2014 20:31:08.942
- Head: A0 A2
- Payload length: 00 12 (big-endian)
- Payload: 33 06 ... 64 E1 (first byte is the MID)
- Checksum: 01 97 (big-endian, 15-bit sum of payload bytes)
- Tail: B0 B3
"""

import re
from dataclasses import dataclass

from .timestamp import TIME_TAG_LENGTH

# Head and tail markers as they appear in the hex dump
HEAD_MARKER = "A0 A2"
TAIL_MARKER = "B0 B3"

# Each token is two hex digits followed by a one character separator
TOKEN_WIDTH = 3

# 2048 (max payload size) + 2 (payload length)
MAX_PAYLOAD_SIZE = 2048
MAX_FRAME_BYTES = MAX_PAYLOAD_SIZE + 2

# Length field and checksum framing the payload
LENGTH_SIZE = 2
CHECKSUM_SIZE = 2

CHECKSUM_MASK = 0x7FFF

_HEX_TOKEN_RE = re.compile(r'[0-9A-Fa-f]{2}')


class FrameError(ValueError):
    """Base class for frame extraction and validation failures."""


class MissingHeader(FrameError):
    """Head marker not found in the line."""


class MissingTail(FrameError):
    """Tail marker not found after the head marker."""


class TooShortOrTooLong(FrameError):
    """Decoded byte count is outside the acceptable bounds."""


class LengthMismatch(FrameError):
    """Declared payload length does not match the bytes decoded."""

    def __init__(self, declared: int, actual: int):
        super().__init__(f"PayloadLen={declared}<>{actual}=BytesRead")
        self.declared = declared
        self.actual = actual


class ChecksumMismatch(FrameError):
    """Computed checksum differs from the one carried by the frame."""

    def __init__(self, computed: int, declared: int):
        super().__init__(f"Wrong checksum: computed 0x{computed:04X}, frame 0x{declared:04X}")
        self.computed = computed
        self.declared = declared


@dataclass
class RawFrame:
    """Bytes decoded between head and tail, with the line time tag."""
    time_tag: str
    data: bytes


@dataclass
class OSPFrame:
    """Validated OSP message."""
    payload_len: int
    payload: bytes
    checksum: int

    @property
    def mid(self) -> int:
        """Message identifier (first payload byte)."""
        return self.payload[0]

    def to_bytes(self) -> bytes:
        """Output form: 2-byte big-endian length followed by the payload."""
        return self.payload_len.to_bytes(LENGTH_SIZE, 'big') + self.payload


def compute_checksum(payload: bytes) -> int:
    """Compute the 15-bit additive OSP checksum of a payload."""
    checksum = 0
    for byte in payload:
        checksum = (checksum + byte) & CHECKSUM_MASK
    return checksum


def decode_hex_tokens(text: str, max_bytes: int = MAX_FRAME_BYTES) -> bytes:
    """
    Decode consecutive two-digit hex tokens into bytes.

    Decoding stops at the first token that is not two hex digits, or
    once max_bytes have been decoded. The bytes read so far are returned.
    """
    data = bytearray()
    for pos in range(0, len(text), TOKEN_WIDTH):
        if len(data) >= max_bytes:
            break
        token = text[pos:pos + 2]
        if not _HEX_TOKEN_RE.fullmatch(token):
            break
        data.append(int(token, 16))
    return bytes(data)


def extract_frame(line: str) -> RawFrame:
    """
    Extract the hex-encoded OSP message from a GP2 line.

    Args:
        line: One line of the GP2 file

    Returns:
        RawFrame with the 23-character time tag and the decoded bytes

    Raises:
        MissingHeader: If the head marker is absent
        MissingTail: If no tail marker follows the head marker
    """
    time_tag = line[:TIME_TAG_LENGTH]

    head = line.find(HEAD_MARKER)
    if head < 0:
        raise MissingHeader("No message header")

    tail = line.find(TAIL_MARKER, head + len(HEAD_MARKER))
    if tail < 0:
        raise MissingTail("No message tailer")

    first_byte = head + len(HEAD_MARKER) + 1
    return RawFrame(time_tag, decode_hex_tokens(line[first_byte:tail]))


def validate_frame(data: bytes) -> OSPFrame:
    """
    Validate decoded frame bytes: bounds, length and checksum.

    Args:
        data: Bytes from length field through checksum

    Returns:
        OSPFrame with the parsed fields

    Raises:
        TooShortOrTooLong: If there are not more than 4 bytes, or the
            byte count reached the decode bound
        LengthMismatch: If byte count differs from payload length + 4
        ChecksumMismatch: If the checksum does not match the payload
    """
    nbytes = len(data)
    if nbytes <= LENGTH_SIZE + CHECKSUM_SIZE or nbytes >= MAX_FRAME_BYTES:
        raise TooShortOrTooLong(f"No message data ({nbytes} bytes)")

    payload_len = int.from_bytes(data[:LENGTH_SIZE], 'big')
    if nbytes != payload_len + LENGTH_SIZE + CHECKSUM_SIZE:
        raise LengthMismatch(payload_len, nbytes - LENGTH_SIZE - CHECKSUM_SIZE)

    payload = bytes(data[LENGTH_SIZE:LENGTH_SIZE + payload_len])
    declared = int.from_bytes(data[LENGTH_SIZE + payload_len:], 'big')
    computed = compute_checksum(payload)
    if computed != declared:
        raise ChecksumMismatch(computed, declared)

    return OSPFrame(payload_len=payload_len, payload=payload, checksum=declared)
