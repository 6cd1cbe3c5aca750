"""Framing helpers for ReefNet Sensus Ultra memory dumps.

A dive is stored as a 16-byte header followed by 4-byte sample records:

    Offset  Size  Field
    0       4     reserved, all-zero when it marks a dive frame
    4       4     device start timestamp (uint32 LE, device seconds)
    8       2     sample interval (uint16 LE, seconds)
    10      2     depth threshold (uint16 LE, millibar)
    12      4     reserved
    16      4*N   records: temperature (uint16 LE, 0.01 K), depth (uint16 LE, millibar)

The record region ends at a 4-byte 0xFF footer or at the end of the dump.
Every read goes through `_uint16_le` / `_uint32_le`, which raise
`DataFormatError` instead of reading past the buffer.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional

from ..exceptions import DataFormatError

logger = logging.getLogger(__name__)

HEADER = b"\x00\x00\x00\x00"
FOOTER = b"\xff\xff\xff\xff"

FRAME_SIZE = 16
RECORD_SIZE = 4

TIMESTAMP_OFFSET = 4
INTERVAL_OFFSET = 8
THRESHOLD_OFFSET = 10

# Minimum dump sizes for the header-derived queries
DATETIME_MIN_SIZE = TIMESTAMP_OFFSET + 4
SUMMARY_MIN_SIZE = FRAME_SIZE + RECORD_SIZE


def _uint16_le(data, offset: int) -> int:
    try:
        return struct.unpack_from("<H", data, offset)[0]
    except struct.error as e:
        raise DataFormatError(f"Cannot read uint16 at offset {offset} of {len(data)} bytes") from e


def _uint32_le(data, offset: int) -> int:
    try:
        return struct.unpack_from("<I", data, offset)[0]
    except struct.error as e:
        raise DataFormatError(f"Cannot read uint32 at offset {offset} of {len(data)} bytes") from e


@dataclass(frozen=True)
class DiveFrame:
    """Header fields of one dive frame."""

    timestamp: int
    interval: int
    threshold: int


class SampleRecord(NamedTuple):
    """Raw sample record: temperature in 0.01 K, depth as absolute millibar."""

    temperature: int
    depth: int


def parse_frame(data, offset: int = 0) -> DiveFrame:
    """Read the dive frame header starting at `offset`."""
    if offset + FRAME_SIZE > len(data):
        raise DataFormatError(
            f"Dive frame at offset {offset} needs {FRAME_SIZE} bytes, only {len(data) - offset} left"
        )
    return DiveFrame(
        timestamp=_uint32_le(data, offset + TIMESTAMP_OFFSET),
        interval=_uint16_le(data, offset + INTERVAL_OFFSET),
        threshold=_uint16_le(data, offset + THRESHOLD_OFFSET),
    )


def read_timestamp(data) -> int:
    """Device start timestamp from the fixed header."""
    return _uint32_le(data, TIMESTAMP_OFFSET)


def find_header(data, start: int = 0) -> Optional[int]:
    """Offset of the first all-zero header marker at or after `start`, or None."""
    offset = start
    size = len(data)
    while offset + len(HEADER) <= size:
        if data[offset:offset + len(HEADER)] == HEADER:
            return offset
        offset += 1
    return None


def iter_records(data, offset: int) -> Iterator[SampleRecord]:
    """Yield whole sample records from `offset` until the footer or end of data.

    A trailing fragment shorter than one record is ignored.
    """
    size = len(data)
    while offset + RECORD_SIZE <= size and data[offset:offset + RECORD_SIZE] != FOOTER:
        yield SampleRecord(
            temperature=_uint16_le(data, offset),
            depth=_uint16_le(data, offset + 2),
        )
        offset += RECORD_SIZE


def scan_summary(data) -> tuple[int, int]:
    """Scan the fixed-offset record region for the dive duration and depth.

    Records below the header's threshold are surface readings and are left
    out of both results.

    Returns:
        Tuple (dive time in seconds, maximum raw depth in millibar)
    """
    if len(data) < SUMMARY_MIN_SIZE:
        raise DataFormatError(f"Dump too short for a summary: {len(data)} bytes, need {SUMMARY_MIN_SIZE}")

    frame = parse_frame(data, 0)

    maxdepth = 0
    nsamples = 0
    for record in iter_records(data, FRAME_SIZE):
        if record.depth >= frame.threshold:
            if record.depth > maxdepth:
                maxdepth = record.depth
            nsamples += 1

    logger.debug(
        f"Summary scan: {nsamples} samples at or above threshold {frame.threshold}, "
        f"interval {frame.interval}s, max raw depth {maxdepth}"
    )
    return nsamples * frame.interval, maxdepth
