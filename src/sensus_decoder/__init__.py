"""Sensus Decoder - ReefNet Sensus Ultra dive dump decoding."""

__version__ = "0.1.0"

from .config import AppConfig, load_config
from .exceptions import DataFormatError, InvalidArgumentError, ParserError, UnsupportedError
from .parser import DiveFamily, FieldType, Parser, SampleType, SampleValue
from .profile import DiveProfile
from .reefnet import SensusUltraParser

__all__ = [
    "AppConfig",
    "DataFormatError",
    "DiveFamily",
    "DiveProfile",
    "FieldType",
    "InvalidArgumentError",
    "Parser",
    "ParserError",
    "SampleType",
    "SampleValue",
    "SensusUltraParser",
    "UnsupportedError",
    "load_config",
]
