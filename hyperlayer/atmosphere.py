"""Standard Earth atmosphere and flight entry conditions."""

from __future__ import annotations

import math
from typing import Sequence

from hyperlayer.gas import CP_AIR, GAM, R_AIR
from hyperlayer.parsing import ParseError
from hyperlayer.profile import ProfileParams

__all__ = ["earth_pt", "set_entry_conditions", "parse_entry_params"]


def earth_pt(altitude_km: float) -> tuple[float, float]:
    """Return ``(temperature, pressure)`` at the given altitude in kilometres."""
    altitude_m = altitude_km * 1e3
    if altitude_km > 25:  # upper stratosphere
        temperature = -131.21 + 0.00299 * altitude_m + 273.15
        pressure = 2.488e3 * (temperature / 216.6) ** -11.388
    elif altitude_km > 11:  # lower stratosphere
        temperature = -56.46 + 273.15
        pressure = 22.65e3 * math.exp(1.73 - 0.000157 * altitude_m)
    else:  # troposphere
        temperature = 15.04 - 0.00649 * altitude_m + 273.15
        pressure = 101.29e3 * (temperature / 288.08) ** 5.256
    return temperature, pressure


def set_entry_conditions(
    altitude_km: float, mach_number: float, profile_params: ProfileParams
) -> None:
    """Set edge pressure, velocity and enthalpy of free flight at altitude."""
    if altitude_km <= 0:
        raise ValueError("altitude must be positive")
    temperature, pressure = earth_pt(altitude_km)
    speed_of_sound = math.sqrt(GAM * R_AIR * temperature)

    profile_params.pe = pressure
    profile_params.ue = mach_number * speed_of_sound
    profile_params.he = CP_AIR * temperature


def _to_float(flag: str, text: str) -> float:
    try:
        return float(text)
    except ValueError as error:
        raise ParseError(f"value {text} requested for flag {flag} is not recognized.") from error


def parse_entry_params(
    argv: Sequence[str], altitude_km: float = 5.0, mach_number: float = 0.2
) -> tuple[float, float]:
    """Return ``(altitude_km, mach_number)`` updated from ``-altitude`` and ``-mach``."""
    args = list(argv)
    position = 0
    while position < len(args):
        arg = args[position]
        if arg in ("-mach", "-altitude"):
            if position + 1 < len(args):
                position += 1
                value = _to_float(arg, args[position])
                if arg == "-mach":
                    mach_number = value
                else:
                    altitude_km = value
            elif arg == "-mach":
                print("mach number spec is incomplete")
            else:
                print("altitude (km) spec is incomplete.")
        position += 1
    return altitude_km, mach_number