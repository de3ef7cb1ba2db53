"""Shock jump and stagnation relations for a calorically perfect gas."""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = [
    "ShockRatios",
    "StagnationRatios",
    "compute_shock_ratios_cpg",
    "compute_stagnation_ratios",
]


@dataclass(frozen=True)
class ShockRatios:
    """Post-shock over pre-shock ratios."""

    pressure: float
    velocity: float
    density: float


@dataclass(frozen=True)
class StagnationRatios:
    """Stagnation over static ratios."""

    temperature: float
    density: float
    pressure: float


def compute_shock_ratios_cpg(
    mach: float, gamma: float = 1.4, beta: float = 0.5 * math.pi
) -> ShockRatios:
    """Jump ratios across a shock of angle ``beta`` (normal shock by default)."""
    gamp1 = gamma + 1
    gamm1 = gamma - 1

    mach2 = mach * mach
    sin2_beta = math.sin(beta) ** 2

    p_ratio = 1.0 + 2.0 * gamma / gamp1 * (mach2 * sin2_beta - 1.0)
    ro_ratio = (gamp1 * mach2 * sin2_beta) / (gamm1 * mach2 * sin2_beta + 2.0)

    u2_v1 = 1.0 - 2.0 * (mach2 * sin2_beta - 1.0) / (gamp1 * mach2)
    v2_v1 = 2.0 * (mach2 * sin2_beta - 1.0) * math.cos(beta) / (gamp1 * mach2)

    u_ratio = math.sqrt(u2_v1 * u2_v1 + v2_v1 * v2_v1)
    return ShockRatios(pressure=p_ratio, velocity=u_ratio, density=ro_ratio)


def compute_stagnation_ratios(mach: float, gamma: float = 1.4) -> StagnationRatios:
    """Isentropic stagnation ratios at the given Mach number."""
    temp_ratio = 1.0 + 0.5 * (gamma - 1) * mach * mach
    return StagnationRatios(
        temperature=temp_ratio,
        density=temp_ratio ** (1.0 / (gamma - 1.0)),
        pressure=temp_ratio ** (gamma / (gamma - 1.0)),
    )