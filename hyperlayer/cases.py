"""Boundary data of reference flow cases."""

from __future__ import annotations

import math
from os import PathLike
from typing import Sequence, Union

from hyperlayer.atmosphere import earth_pt
from hyperlayer.csv_io import read_csv
from hyperlayer.flow_relations import compute_shock_ratios_cpg, compute_stagnation_ratios
from hyperlayer.gas import R_AIR, air_cpg_ro, air_visc
from hyperlayer.profile import (
    EDGE_DH_DXI_ID,
    EDGE_DU_DXI_ID,
    EDGE_DXI_DX_ID,
    EDGE_FIELD_RANK,
    EDGE_H_ID,
    EDGE_MU_ID,
    EDGE_P_ID,
    EDGE_RO_ID,
    EDGE_U_ID,
    EDGE_X_ID,
    EDGE_XI_ID,
    BoundaryData,
)

__all__ = [
    "gen_flat_plate_constant",
    "gen_chapmann_rubesin_flat_plate",
    "gen_flat_nosed_cylinder",
    "gen_flat_nosed_cylinder_from_csv",
]

PathType = Union[str, "PathLike[str]"]


def _set(edge_field: list[float], station: int, values: dict[int, float]) -> None:
    base = station * EDGE_FIELD_RANK
    for index, value in values.items():
        edge_field[base + index] = value


def gen_flat_plate_constant(
    ue: float, he: float, pe: float, g0: float, nb_points: int
) -> BoundaryData:
    """Flat plate with uniform edge conditions and ``xi`` stepping by 0.1."""
    edge_field = [0.0] * (nb_points * EDGE_FIELD_RANK)
    for xid in range(nb_points):
        _set(edge_field, xid, {EDGE_U_ID: ue, EDGE_H_ID: he, EDGE_P_ID: pe, EDGE_XI_ID: xid / 10.0})
    return BoundaryData(edge_field, [g0] * nb_points)


def gen_chapmann_rubesin_flat_plate(
    mach: float, nb_points: int, prandtl: float
) -> BoundaryData:
    """Flat plate of unit length with a quadratic wall enthalpy distribution."""
    if nb_points < 2:
        raise ValueError("at least two points are required")

    dx = 1.0 / (nb_points - 1)

    sound_speed = 340.0
    roe = 1.0
    gam = 1.4
    ue = mach * sound_speed
    he = sound_speed * sound_speed / (gam - 1)
    pe = roe * sound_speed * sound_speed / gam

    mue = air_visc(pe / (R_AIR * roe))
    dxi_dx = roe * ue * mue

    recovery = math.sqrt(prandtl)
    gaw = 1 + 0.5 * recovery * (gam - 1) * mach * mach

    edge_field = [0.0] * (nb_points * EDGE_FIELD_RANK)
    wall_field = [0.0] * nb_points
    for xid in range(nb_points):
        xval = xid * dx
        _set(
            edge_field,
            xid,
            {
                EDGE_U_ID: ue,
                EDGE_H_ID: he,
                EDGE_P_ID: pe,
                EDGE_XI_ID: xval * dxi_dx,
                EDGE_X_ID: xval,
                EDGE_RO_ID: roe,
                EDGE_MU_ID: mue,
            },
        )
        wall_field[xid] = gaw * (1 + 0.25 - 0.83 * xval + 0.33 * xval * xval)
        print(
            f"boundary data at station #{xid}: xi={xval * dxi_dx:.2e}, ue={ue:.2e}, "
            f"he={he:.2e}, pe={pe:.2e}, gw={wall_field[xid]:.2e}."
        )
    print()

    return BoundaryData(edge_field, wall_field)


def gen_flat_nosed_cylinder(
    altitude_km: float,
    mach: float,
    csv_data: Sequence[Sequence[float]],
    verbose: bool = False,
) -> BoundaryData:
    """Edge conditions behind a normal shock along a flat-nosed body.

    ``csv_data`` holds the columns body abscissa, pressure, density and
    velocity, scaled by the stagnation pressure, density and
    ``sqrt(p_s / ro_s)``.
    """
    if mach <= 1:
        raise ValueError("the flow must be supersonic")
    if altitude_km <= 0:
        raise ValueError("altitude must be positive")
    if len(csv_data) < 4:
        raise ValueError("body, pressure, density and velocity columns are required")
    body_grid, pressure_field, density_field, velocity_field = (
        list(column) for column in csv_data[:4]
    )
    grid_size = len(body_grid)
    if grid_size == 0:
        raise ValueError("body grid must not be empty")
    if any(len(column) != grid_size for column in (pressure_field, density_field, velocity_field)):
        raise ValueError("all columns must have the same length")

    gamma = 1.4

    # Shock conditions
    pre_temperature, pre_pressure = earth_pt(altitude_km)
    pre_density = pre_pressure / (pre_temperature * R_AIR)
    pre_sound_speed = math.sqrt(gamma * pre_pressure / pre_density)
    pre_velocity = mach * pre_sound_speed

    ratios = compute_shock_ratios_cpg(mach, 1.4)
    post_pressure = pre_pressure * ratios.pressure
    post_density = pre_density * ratios.density
    post_velocity = pre_velocity * ratios.velocity

    post_sound_speed2 = gamma * post_pressure / post_density
    post_enthalpy = post_sound_speed2 / (gamma - 1.0)

    # Stagnation point
    post_mach = post_velocity / math.sqrt(post_sound_speed2)
    stagnation = compute_stagnation_ratios(post_mach, 1.4)

    if verbose:
        print(
            f"Enthalpy ratio {stagnation.temperature:.2e}, "
            f"Post-shock enthalpy: {post_enthalpy:.2e}, \n"
        )

    stag_enthalpy = stagnation.temperature * post_enthalpy
    stag_density = stagnation.density * post_density
    stag_pressure = stagnation.pressure * post_pressure

    check_ratio = stag_enthalpy * stag_density / stag_pressure * (gamma - 1) / gamma
    if abs(check_ratio - 1.0) > 1e-4:
        raise RuntimeError("inconsistent stagnation state")

    v_scale = math.sqrt(stag_pressure / stag_density)

    edge_field = [0.0] * (grid_size * EDGE_FIELD_RANK)
    wall_field = [0.2] * grid_size

    _set(
        edge_field,
        0,
        {
            EDGE_U_ID: 0.0,
            EDGE_H_ID: stag_enthalpy,
            EDGE_P_ID: stag_pressure,
            EDGE_RO_ID: stag_density,
            EDGE_MU_ID: air_visc(stag_pressure / (stag_density * R_AIR)),
        },
    )

    def previous(xid: int, index: int) -> float:
        return edge_field[(xid - 1) * EDGE_FIELD_RANK + index]

    for xid in range(1, grid_size):
        dx = body_grid[xid] - body_grid[xid - 1]

        roe = density_field[xid] * stag_density
        ue = velocity_field[xid] * v_scale
        he = stag_enthalpy - 0.5 * ue * ue
        pe = pressure_field[xid] * stag_pressure

        due_dx = (ue - velocity_field[xid - 1] * v_scale) / dx
        dhe_dx = -ue * due_dx

        mue = air_visc(pe / (roe * R_AIR))
        dxi_dx = roe * ue * mue

        ue_m1 = previous(xid, EDGE_U_ID)
        he_m1 = previous(xid, EDGE_H_ID)
        pe_m1 = previous(xid, EDGE_P_ID)

        roe_m1 = air_cpg_ro(he_m1, pe_m1)
        mue_m1 = air_visc(pe_m1 / (R_AIR * roe_m1))
        dxi_dx_m1 = roe_m1 * ue_m1 * mue_m1
        mean_dxi_dx = 0.5 * (dxi_dx + dxi_dx_m1)

        _set(
            edge_field,
            xid,
            {
                EDGE_U_ID: ue,
                EDGE_H_ID: he,
                EDGE_P_ID: pe,
                EDGE_XI_ID: previous(xid, EDGE_XI_ID) + dx * mean_dxi_dx,
                EDGE_X_ID: body_grid[xid],
                EDGE_DU_DXI_ID: due_dx / dxi_dx,
                EDGE_DH_DXI_ID: dhe_dx / dxi_dx,
                EDGE_DXI_DX_ID: dxi_dx,
                EDGE_RO_ID: roe,
                EDGE_MU_ID: mue,
            },
        )

        if verbose:
            print(
                f"{xid}: dx={dx:.2e}, roe={roe:.2e}, ue={ue:.2e}, he={he:.2e}, "
                f"pe={pe:.2e}, dxi_dx={dxi_dx:.2e} "
            )

    print()
    return BoundaryData(edge_field, wall_field)


def gen_flat_nosed_cylinder_from_csv(
    altitude_km: float, mach: float, path: PathType, verbose: bool = False
) -> BoundaryData:
    """Same as :func:`gen_flat_nosed_cylinder` with the columns read from a CSV file."""
    return gen_flat_nosed_cylinder(altitude_km, mach, read_csv(path), verbose)