"""Family-independent parser interface for dive computer memory dumps."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum, IntEnum
from typing import Callable, Iterator, Optional, Union

logger = logging.getLogger(__name__)


class DiveFamily(Enum):
    """Device families a parser can decode."""
    REEFNET_SENSUSULTRA = "reefnet_sensusultra"


class FieldType(IntEnum):
    """Dive-level values a parser can be asked for."""
    DIVETIME = 0
    MAXDEPTH = 1
    AVGDEPTH = 2
    GASMIX_COUNT = 3
    GASMIX = 4
    SALINITY = 5
    ATMOSPHERIC = 6
    TEMPERATURE_MINIMUM = 7
    TEMPERATURE_MAXIMUM = 8


class SampleType(IntEnum):
    """Kinds of value carried by the sample stream."""
    TIME = 0
    DEPTH = 1
    TEMPERATURE = 2


@dataclass(frozen=True)
class SampleValue:
    """One tagged value of the sample stream.

    Every value emitted for the same sample record shares its `time`.
    """

    type: SampleType
    time: int
    value: float


SampleCallback = Callable[[SampleValue], None]
FieldValue = Union[int, float]


class Parser(ABC):
    """Base class for device-family decoders bound to one memory dump."""

    family: DiveFamily

    @abstractmethod
    def set_data(self, data: bytes) -> None:
        """Bind a new dump, discarding anything derived from the old one."""

    @abstractmethod
    def get_datetime(self, tz: Optional[tzinfo] = None) -> datetime:
        """Return the wall-clock start time of the dive."""

    @abstractmethod
    def get_field(self, field_type: FieldType) -> FieldValue:
        """Return a dive-level value such as duration or maximum depth."""

    @abstractmethod
    def samples(self) -> Iterator[SampleValue]:
        """Yield the dive's sample stream in order."""

    def samples_foreach(self, callback: Optional[SampleCallback]) -> None:
        """Drive `samples()` and hand every value to `callback`.

        Values already delivered stay delivered if the stream later fails;
        the error propagates after them.
        """
        count = 0
        for sample in self.samples():
            if callback:
                callback(sample)
            count += 1
        logger.debug(f"{self.family.value}: delivered {count} sample values")
