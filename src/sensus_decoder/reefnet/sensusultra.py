"""ReefNet Sensus Ultra dump decoder."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Iterator, Optional

from .. import units
from ..exceptions import DataFormatError, InvalidArgumentError, UnsupportedError
from ..parser import DiveFamily, FieldType, FieldValue, Parser, SampleType, SampleValue
from ..profile import DiveProfile
from .sensusultra_parse import (
    DATETIME_MIN_SIZE,
    FRAME_SIZE,
    SUMMARY_MIN_SIZE,
    find_header,
    iter_records,
    parse_frame,
    read_timestamp,
    scan_summary,
)

if TYPE_CHECKING:
    from ..config import AppConfig

logger = logging.getLogger(__name__)

UINT32_MAX = 0xFFFFFFFF


@dataclass
class Calibration:
    """Depth calibration: surface pressure (Pa) and pressure per metre (Pa/m)."""

    atmospheric: float = units.ATM
    hydrostatic: float = units.hydrostatic_coefficient()


@dataclass(frozen=True)
class ClockSync:
    """Device clock reading paired with the host time it was taken at."""

    devtime: int
    systime: int


@dataclass
class DiveSummary:
    """Values derived from one scan of the bound dump."""

    cached: bool = False
    divetime: int = 0
    maxdepth: int = 0


class SensusUltraParser(Parser):
    """Decoder for dives downloaded from a ReefNet Sensus Ultra.

    The summary (dive time and raw maximum depth) is computed on first use
    and kept until another dump is bound. Calibration changes do not clear
    it; depth is converted from the cached raw value on every query.
    Instances are not safe to share between threads.
    """

    family = DiveFamily.REEFNET_SENSUSULTRA

    def __init__(self, devtime: int, systime: int) -> None:
        if not isinstance(devtime, int) or not 0 <= devtime <= UINT32_MAX:
            raise InvalidArgumentError(f"devtime must be an unsigned 32-bit integer, got {devtime!r}")
        if not isinstance(systime, int):
            raise InvalidArgumentError(f"systime must be integer Unix seconds, got {systime!r}")

        self.clock = ClockSync(devtime=devtime, systime=systime)
        self.calibration = Calibration()

        self._data = b""
        self._cache = DiveSummary()

    @classmethod
    def from_config(cls, config: AppConfig) -> SensusUltraParser:
        """Create a parser from the clock and calibration sections of `config`."""
        parser = cls(config.clock.devtime, config.clock.systime)
        parser.set_calibration(config.calibration.atmospheric, config.calibration.hydrostatic)
        return parser

    @property
    def data(self) -> bytes:
        """The currently bound dump."""
        return self._data

    def set_data(self, data: bytes) -> None:
        """Bind a new dump and reset the cached summary.

        The buffer is borrowed, not copied, and only viewed while a query
        runs. Its length is checked by the queries that need it, not here.
        """
        try:
            with memoryview(data) as raw, raw.cast("B"):
                pass
        except TypeError as e:
            raise InvalidArgumentError(f"Expected a bytes-like dump, got {type(data).__name__}") from e

        self._data = data
        self._cache = DiveSummary()

    bind = set_data

    @contextmanager
    def _view(self) -> Iterator[memoryview]:
        with memoryview(self._data) as raw, raw.cast("B") as view:
            yield view

    def set_calibration(self, atmospheric: float, hydrostatic: float) -> None:
        """Replace the depth calibration used by every later conversion.

        Values are taken as given; physically meaningless ones are the
        caller's responsibility.
        """
        self.calibration.atmospheric = atmospheric
        self.calibration.hydrostatic = hydrostatic

    def get_datetime(self, tz: Optional[tzinfo] = None) -> datetime:
        """Start time of the dive on the host clock.

        The device timestamp is moved onto the host clock by subtracting the
        ticks elapsed between it and the synchronisation point. Without `tz`
        the result is naive local time.
        """
        with self._view() as data:
            if len(data) < DATETIME_MIN_SIZE:
                logger.warning(f"Dump too short for a start time: {len(data)} bytes, need {DATETIME_MIN_SIZE}")
                raise DataFormatError(f"Dump too short for a start time: {len(data)} bytes")

            timestamp = read_timestamp(data)

        # Device ticks are uint32 and wrap around
        delta = (self.clock.devtime - timestamp) & UINT32_MAX
        ticks = self.clock.systime - delta

        try:
            return datetime.fromtimestamp(ticks, tz)
        except (OverflowError, OSError, ValueError) as e:
            logger.warning(f"Start time {ticks} is not representable: {e}")
            raise DataFormatError(f"Start time {ticks} is out of range") from e

    def summary(self) -> DiveSummary:
        """Cached summary of the bound dump, scanning it first if needed."""
        with self._view() as data:
            if len(data) < SUMMARY_MIN_SIZE:
                logger.warning(f"Dump too short for a summary: {len(data)} bytes, need {SUMMARY_MIN_SIZE}")
                raise DataFormatError(f"Dump too short for a summary: {len(data)} bytes")

            if not self._cache.cached:
                divetime, maxdepth = scan_summary(data)
                self._cache = DiveSummary(cached=True, divetime=divetime, maxdepth=maxdepth)

        return replace(self._cache)

    def get_field(self, field_type: FieldType) -> FieldValue:
        summary = self.summary()

        if field_type == FieldType.DIVETIME:
            return summary.divetime
        if field_type == FieldType.MAXDEPTH:
            return units.millibar_to_depth(
                summary.maxdepth, self.calibration.atmospheric, self.calibration.hydrostatic
            )
        if field_type == FieldType.GASMIX_COUNT:
            # The device records no gas mixes
            return 0

        raise UnsupportedError(f"Field {field_type!r} is not recorded by the Sensus Ultra")

    def divetime(self) -> int:
        """Dive duration in seconds."""
        return self.get_field(FieldType.DIVETIME)

    def maxdepth(self) -> float:
        """Maximum depth in metres."""
        return self.get_field(FieldType.MAXDEPTH)

    def gasmix_count(self) -> int:
        return self.get_field(FieldType.GASMIX_COUNT)

    def samples(self) -> Iterator[SampleValue]:
        """Yield time, temperature and depth for each record of the first dive frame.

        Every call rescans the dump. A dump without a header marker yields
        nothing. The dump stays viewed until the stream is exhausted or closed.
        """
        with self._view() as data:
            offset = find_header(data)
            if offset is None:
                logger.debug("No dive frame header found")
                return

            if offset + FRAME_SIZE > len(data):
                logger.warning(f"Dive frame header at offset {offset} is truncated ({len(data)} bytes total)")
                raise DataFormatError(f"Truncated dive frame at offset {offset}")

            interval = parse_frame(data, offset).interval
            logger.debug(f"Dive frame at offset {offset}, interval {interval}s")

            time = 0
            for record in iter_records(data, offset + FRAME_SIZE):
                time += interval
                yield SampleValue(SampleType.TIME, time, time)
                yield SampleValue(SampleType.TEMPERATURE, time, units.centikelvin_to_celsius(record.temperature))
                yield SampleValue(
                    SampleType.DEPTH,
                    time,
                    units.millibar_to_depth(record.depth, self.calibration.atmospheric, self.calibration.hydrostatic),
                )

    def profile(self) -> DiveProfile:
        """Decode the sample stream into a `DiveProfile`."""
        return DiveProfile.from_samples(self.samples())
