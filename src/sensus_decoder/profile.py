"""Dive profile arrays assembled from a decoded sample stream."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .parser import SampleType, SampleValue


class DiveProfile:
    """Per-record time, temperature and depth of one dive as numpy arrays.

    Attributes:
        time: Elapsed seconds since the start of the dive (uint32)
        temperature: Water temperature in degrees Celsius (float64)
        depth: Depth in metres (float64)
    """

    def __init__(self, time: np.ndarray, temperature: np.ndarray, depth: np.ndarray) -> None:
        if not len(time) == len(temperature) == len(depth):
            raise ValueError(
                f"Profile arrays differ in length: {len(time)}, {len(temperature)}, {len(depth)}"
            )
        self.time = time
        self.temperature = temperature
        self.depth = depth

    @classmethod
    def from_samples(cls, samples: Iterable[SampleValue]) -> DiveProfile:
        """Group a tagged sample stream into one row per record.

        Each TIME value opens a new row. A value kind missing from a record
        is stored as NaN.
        """
        times: list[int] = []
        temperature: list[float] = []
        depth: list[float] = []

        for sample in samples:
            if sample.type == SampleType.TIME or not times:
                times.append(sample.time)
                temperature.append(np.nan)
                depth.append(np.nan)

            if sample.type == SampleType.TEMPERATURE:
                temperature[-1] = sample.value
            elif sample.type == SampleType.DEPTH:
                depth[-1] = sample.value

        return cls(
            time=np.asarray(times, dtype=np.uint32),
            temperature=np.asarray(temperature, dtype=np.float64),
            depth=np.asarray(depth, dtype=np.float64),
        )

    def __len__(self) -> int:
        return len(self.time)

    @property
    def duration(self) -> int:
        """Elapsed time of the last record, 0 for an empty profile."""
        if len(self.time) == 0:
            return 0
        return int(self.time[-1])

    @property
    def max_depth(self) -> float:
        if len(self.depth) == 0 or np.all(np.isnan(self.depth)):
            return 0.0
        return float(np.nanmax(self.depth))

    def to_dict(self) -> dict:
        """Convert profile to dictionary for logging."""
        return {
            "samples": len(self),
            "duration_s": self.duration,
            "max_depth_m": round(self.max_depth, 3),
            "time": self.time.tolist(),
            "temperature": [round(float(t), 2) for t in self.temperature],
            "depth": [round(float(d), 3) for d in self.depth],
        }
