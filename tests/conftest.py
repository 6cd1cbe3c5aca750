"""Helpers for building Sensus Ultra dumps."""

import struct

import pytest

HEADER = b"\x00\x00\x00\x00"
FOOTER = b"\xff\xff\xff\xff"


def make_frame(timestamp: int = 0, interval: int = 10, threshold: int = 0) -> bytes:
    # zero marker, timestamp, interval, threshold, 4 reserved bytes
    return HEADER + struct.pack("<IHH", timestamp, interval, threshold) + b"\x00" * 4


def make_record(temperature: int, depth: int) -> bytes:
    return struct.pack("<HH", temperature, depth)


def make_dump(records, timestamp=0, interval=10, threshold=0, footer=True) -> bytes:
    data = make_frame(timestamp, interval, threshold)
    data += b"".join(make_record(t, d) for t, d in records)
    if footer:
        data += FOOTER
    return data


@pytest.fixture
def dive_dump():
    """Three-record dive plus one surface reading below the 1100 mbar threshold."""
    records = [
        (29315, 1050),  # 20.00 C, surface
        (29215, 1500),
        (29115, 2013),
        (29015, 1800),
    ]
    return make_dump(records, timestamp=900, interval=10, threshold=1100)
