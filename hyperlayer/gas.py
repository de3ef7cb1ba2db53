"""Calorically perfect air: thermodynamic and Sutherland transport laws."""

from __future__ import annotations

import math

__all__ = [
    "GAM",
    "GAM1",
    "GAM_GAM1",
    "R_AIR",
    "R_AIR_INV",
    "CP_AIR",
    "SUTH_T0",
    "SUTH_MU0",
    "SUTH_MU_S0",
    "SUTH_K0",
    "SUTH_K_S0",
    "air_cpg_ro",
    "air_cpg_dro_dh",
    "air_cpg_cp",
    "air_visc",
    "air_visc_grad",
    "air_cond",
    "air_cond_grad",
]

GAM = 1.4
GAM1 = GAM - 1
GAM_GAM1 = GAM / GAM1
R_AIR = 296.92857142857144
R_AIR_INV = 1.0 / R_AIR
CP_AIR = R_AIR * GAM / GAM1

SUTH_T0 = 273.0
SUTH_T0_INV = 1.0 / SUTH_T0

SUTH_MU0 = 1.716e-5
SUTH_MU_S0 = 111.0
SUTH_MU_POW_FACTOR = SUTH_MU0 * (SUTH_T0 + SUTH_MU_S0) * SUTH_T0_INV * math.sqrt(SUTH_T0_INV)

SUTH_K0 = 0.0241
SUTH_K_S0 = 194.0
SUTH_K_POW_FACTOR = SUTH_K0 * (SUTH_T0 + SUTH_K_S0) * SUTH_T0_INV * math.sqrt(SUTH_T0_INV)


def air_cpg_ro(enthalpy: float, pressure: float) -> float:
    """Density from static enthalpy and pressure."""
    return pressure * GAM_GAM1 / enthalpy


def air_cpg_dro_dh(enthalpy: float, pressure: float) -> float:
    """Derivative of density with respect to enthalpy at fixed pressure."""
    return -pressure * GAM_GAM1 / (enthalpy * enthalpy)


def air_cpg_cp(enthalpy: float, pressure: float) -> float:
    """Specific heat at constant pressure; independent of the state for this gas."""
    return R_AIR * GAM / GAM1


def _sutherland(factor: float, s0: float, temperature: float) -> float:
    return factor * temperature * math.sqrt(temperature) / (temperature + s0)


def _sutherland_grad(factor: float, s0: float, temperature: float) -> float:
    return (factor * math.sqrt(temperature) / (temperature + s0)) * (
        1.5 - temperature / (temperature + s0)
    )


def air_visc(temperature: float) -> float:
    """Dynamic viscosity from Sutherland's law."""
    return _sutherland(SUTH_MU_POW_FACTOR, SUTH_MU_S0, temperature)


def air_visc_grad(temperature: float) -> float:
    """Temperature derivative of the dynamic viscosity."""
    return _sutherland_grad(SUTH_MU_POW_FACTOR, SUTH_MU_S0, temperature)


def air_cond(temperature: float) -> float:
    """Thermal conductivity from Sutherland's law."""
    return _sutherland(SUTH_K_POW_FACTOR, SUTH_K_S0, temperature)


def air_cond_grad(temperature: float) -> float:
    """Temperature derivative of the thermal conductivity."""
    return _sutherland_grad(SUTH_K_POW_FACTOR, SUTH_K_S0, temperature)