import pytest

from sensus_decoder.exceptions import DataFormatError
from sensus_decoder.reefnet.sensusultra_parse import (
    DiveFrame,
    SampleRecord,
    find_header,
    iter_records,
    parse_frame,
    read_timestamp,
    scan_summary,
)

from conftest import FOOTER, make_dump, make_frame, make_record


def test_parse_frame_fields():
    frame = parse_frame(make_frame(timestamp=0x01020304, interval=20, threshold=1200))
    assert frame == DiveFrame(timestamp=0x01020304, interval=20, threshold=1200)


def test_parse_frame_truncated():
    with pytest.raises(DataFormatError):
        parse_frame(make_frame()[:15])


def test_read_timestamp_is_little_endian():
    data = b"\x00" * 4 + bytes([0x84, 0x03, 0x00, 0x00])
    assert read_timestamp(data) == 900


def test_read_timestamp_short_buffer():
    with pytest.raises(DataFormatError):
        read_timestamp(b"\x00" * 7)


def test_find_header_skips_non_zero_bytes():
    data = b"\x01\x02\x00\x00\x00\x00\x05"
    assert find_header(data) == 2


def test_find_header_missing():
    assert find_header(b"\x01\x00\x00\x00\x02\x00\x00\x00\x03") is None
    assert find_header(b"") is None


def test_iter_records_stops_at_footer():
    data = make_record(1, 2) + make_record(3, 4) + FOOTER + make_record(5, 6)
    assert list(iter_records(data, 0)) == [SampleRecord(1, 2), SampleRecord(3, 4)]


def test_iter_records_ignores_trailing_fragment():
    data = make_record(1, 2) + b"\x07\x08\x09"
    assert list(iter_records(data, 0)) == [SampleRecord(1, 2)]


def test_scan_summary_filters_below_threshold():
    data = make_dump([(0, 900), (0, 1500), (0, 1200), (0, 1099)], interval=5, threshold=1100)
    divetime, maxdepth = scan_summary(data)
    assert divetime == 10
    assert maxdepth == 1500


def test_scan_summary_without_footer():
    data = make_dump([(0, 1500), (0, 1600)], interval=3, footer=False)
    assert scan_summary(data) == (6, 1600)


def test_scan_summary_too_short():
    with pytest.raises(DataFormatError):
        scan_summary(make_frame() + b"\x00\x00\x00")
