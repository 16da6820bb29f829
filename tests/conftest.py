"""
Pytest fixtures for GP2 to OSP tests.
"""

import logging

import pytest

from gp2osp.frame import compute_checksum


SAMPLE_LINE = (
    "29/10/2014 20:31:08.942 (0) A0 A2 00 12 33 06 00 00 00 00 00 00 00 19 "
    "00 00 00 00 00 00 64 E1 01 97 B0 B3\n"
)

SAMPLE_PAYLOAD = bytes([
    0x33, 0x06, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x19,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x64, 0xE1,
])


def make_gp2_line(payload: bytes, time_tag: str = "29/10/2014 20:31:08.942",
                  checksum=None) -> str:
    """Build a GP2 line carrying payload as an OSP message."""
    if checksum is None:
        checksum = compute_checksum(payload)
    body = len(payload).to_bytes(2, 'big') + payload + checksum.to_bytes(2, 'big')
    return f"{time_tag} (0) A0 A2 {body.hex(' ').upper()} B0 B3\n"


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging between tests."""
    yield
    package_logger = logging.getLogger('gp2osp')
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_line():
    """GP2 line with a valid MID 51 message."""
    return SAMPLE_LINE


@pytest.fixture
def sample_payload():
    """Payload carried by sample_line."""
    return SAMPLE_PAYLOAD


@pytest.fixture
def line_factory():
    """Factory for GP2 lines."""
    return make_gp2_line


class MockSink:
    """Mock binary output that can fail on a given write."""

    def __init__(self, fail_on=None, short_by=1, raise_error=False):
        """
        Args:
            fail_on: 1-based index of the write that fails (None = never)
            short_by: Bytes missing from the failing write
            raise_error: Raise OSError instead of a short write
        """
        self.fail_on = fail_on
        self.short_by = short_by
        self.raise_error = raise_error
        self.records = []
        self.writes = 0

    def write(self, data):
        """Record written data."""
        self.writes += 1
        if self.fail_on is not None and self.writes == self.fail_on:
            if self.raise_error:
                raise OSError(28, "No space left on device")
            return max(len(data) - self.short_by, 0)
        self.records.append(bytes(data))
        return len(data)

    def getvalue(self):
        return b"".join(self.records)


@pytest.fixture
def mock_sink():
    """Mock sink that never fails."""
    return MockSink()


@pytest.fixture
def mock_sink_factory():
    """Factory for mock sinks."""
    def create_sink(fail_on=None, short_by=1, raise_error=False):
        return MockSink(fail_on, short_by, raise_error)
    return create_sink
