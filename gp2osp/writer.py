"""
OSP binary output: frame writer and record reader.

An OSP file is a flat sequence of records, each a 2-byte big-endian
payload length followed by the payload bytes.
"""

from typing import BinaryIO, Iterator, Tuple

from .frame import LENGTH_SIZE, OSPFrame


class WriteFailure(IOError):
    """Output sink did not accept a complete record."""


class FrameWriter:
    """
    Writes validated frames to a binary sink.

    The sink must return the number of bytes written, as binary file
    objects do.
    """

    def __init__(self, sink: BinaryIO):
        """
        Initialize writer.

        Args:
            sink: Binary output stream
        """
        self.sink = sink
        self.frames_written = 0
        self.bytes_written = 0

    def write(self, frame: OSPFrame) -> int:
        """
        Write one frame record.

        Args:
            frame: Validated OSP frame

        Returns:
            1, the number of frames written

        Raises:
            WriteFailure: On a short write or a sink error
        """
        record = frame.to_bytes()
        try:
            written = self.sink.write(record)
        except OSError as e:
            raise WriteFailure(f"Cannot write to binary output file: {e}") from e

        if written is None or written < len(record):
            raise WriteFailure(
                f"Cannot write to binary output file: {written} of {len(record)} bytes written"
            )

        self.frames_written += 1
        self.bytes_written += written
        return 1


def iter_osp_records(stream: BinaryIO) -> Iterator[Tuple[int, bytes]]:
    """
    Read records back from an OSP binary stream.

    Yields:
        (payload_len, payload) tuples in file order

    Raises:
        ValueError: If the stream ends inside a record
    """
    while True:
        header = stream.read(LENGTH_SIZE)
        if not header:
            return
        if len(header) < LENGTH_SIZE:
            raise ValueError("Truncated OSP record length")

        payload_len = int.from_bytes(header, 'big')
        payload = stream.read(payload_len)
        if len(payload) < payload_len:
            raise ValueError(
                f"Truncated OSP record: expected {payload_len} bytes, got {len(payload)}"
            )
        yield payload_len, payload
