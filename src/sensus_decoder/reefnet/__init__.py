"""Decoders for ReefNet dive computers."""

from .sensusultra import Calibration, ClockSync, DiveSummary, SensusUltraParser

__all__ = ["Calibration", "ClockSync", "DiveSummary", "SensusUltraParser"]
