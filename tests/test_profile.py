import numpy as np
import pytest

from sensus_decoder.parser import SampleType, SampleValue
from sensus_decoder.profile import DiveProfile


def make_stream(rows):
    for time, temperature, depth in rows:
        yield SampleValue(SampleType.TIME, time, time)
        yield SampleValue(SampleType.TEMPERATURE, time, temperature)
        yield SampleValue(SampleType.DEPTH, time, depth)


def test_from_samples_groups_rows():
    profile = DiveProfile.from_samples(make_stream([(10, 21.5, 3.2), (20, 21.0, 7.9)]))

    assert len(profile) == 2
    assert profile.time.dtype == np.uint32
    assert profile.time.tolist() == [10, 20]
    assert profile.temperature.tolist() == [21.5, 21.0]
    assert profile.depth.tolist() == [3.2, 7.9]
    assert profile.duration == 20
    assert profile.max_depth == pytest.approx(7.9)


def test_zero_interval_keeps_one_row_per_record():
    profile = DiveProfile.from_samples(make_stream([(0, 20.0, 1.0), (0, 19.0, 2.0)]))
    assert len(profile) == 2
    assert profile.depth.tolist() == [1.0, 2.0]


def test_missing_value_is_nan():
    stream = [
        SampleValue(SampleType.TIME, 5, 5),
        SampleValue(SampleType.DEPTH, 5, 1.5),
    ]
    profile = DiveProfile.from_samples(stream)
    assert np.isnan(profile.temperature[0])
    assert profile.max_depth == 1.5


def test_empty_profile():
    profile = DiveProfile.from_samples([])
    assert len(profile) == 0
    assert profile.duration == 0
    assert profile.max_depth == 0.0
    assert profile.to_dict()["samples"] == 0


def test_mismatched_arrays_rejected():
    with pytest.raises(ValueError):
        DiveProfile(np.zeros(2), np.zeros(3), np.zeros(2))


def test_to_dict():
    profile = DiveProfile.from_samples(make_stream([(10, 21.456, 3.21234)]))
    assert profile.to_dict() == {
        "samples": 1,
        "duration_s": 10,
        "max_depth_m": 3.212,
        "time": [10],
        "temperature": [21.46],
        "depth": [3.212],
    }
