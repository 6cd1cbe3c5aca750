"""Physical constants and raw-unit conversions shared by the decoders.

Pressures are in pascal, depths in metres, temperatures in degrees Celsius.
"""

from __future__ import annotations

ATM = 101325.0  # Pa
BAR = 100000.0  # Pa
GRAVITY = 9.80665  # m/s^2
SEAWATER_DENSITY = 1025.0  # kg/m^3
FRESHWATER_DENSITY = 1000.0  # kg/m^3

KELVIN_OFFSET = 273.15


def hydrostatic_coefficient(density: float = SEAWATER_DENSITY) -> float:
    """Pressure per metre of water column for a given density (Pa/m)."""
    return density * GRAVITY


def centikelvin_to_celsius(raw: int) -> float:
    """Convert a temperature in 0.01 K to degrees Celsius."""
    return raw / 100.0 - KELVIN_OFFSET


def millibar_to_depth(raw: int, atmospheric: float, hydrostatic: float) -> float:
    """Convert an absolute pressure in millibar to depth below the surface.

    Args:
        raw: Absolute pressure reading in millibar
        atmospheric: Surface pressure in Pa
        hydrostatic: Pressure increase per metre of water in Pa/m

    Returns:
        Depth in metres (negative when the reading is below atmospheric)
    """
    return (raw * BAR / 1000.0 - atmospheric) / hydrostatic
