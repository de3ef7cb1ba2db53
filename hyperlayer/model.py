"""Default boundary-layer model: constant-property similarity equations.

The state holds, in order of the ``*_ID`` indices of :mod:`hyperlayer.profile`,
the scaled shear ``f''``, heat flux ``g'``, velocity ratio ``f'``, stream
function ``f`` and enthalpy ratio ``g``. The default model takes the
Chapman-Rubesin factor, Prandtl and Eckert numbers equal to one.
Jacobians are returned row-major, ``BL_RANK`` by ``BL_RANK``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from hyperlayer.profile import (
    BL_RANK,
    F_ID,
    FIELD_E0_ID,
    FIELD_E1_ID,
    FIELD_M0_ID,
    FIELD_M1_ID,
    FIELD_RANK,
    FIELD_S0_ID,
    FIELD_S1_ID,
    FP_ID,
    FPP_ID,
    G_ID,
    GP_ID,
    OUTPUT_CHAPMANN_ID,
    OUTPUT_PRANDTL_ID,
    OUTPUT_Q_ID,
    OUTPUT_RANK,
    OUTPUT_RO_ID,
    OUTPUT_TAU_ID,
    ProfileParams,
    WallType,
)

__all__ = [
    "BLModel",
    "DEFAULT_MODEL",
    "initialize_default",
    "initialize_sensitivity_default",
    "limit_update_default",
    "compute_rhs_default",
    "compute_lsim_rhs_default",
    "compute_full_rhs_default",
    "compute_rhs_jacobian_default",
    "compute_lsim_rhs_jacobian_default",
    "compute_full_rhs_jacobian_default",
    "compute_outputs_default",
]

# Number of shooting parameters the sensitivities are taken with respect to.
_TARGET_RANK = 2

_ROMU = 1.0
_PRANDTL = 1.0
_ECKERT = 1.0

RhsFunction = Callable[
    [Sequence[float], int, Sequence[float], int, ProfileParams], "tuple[list[float], float]"
]
JacobianFunction = Callable[
    [Sequence[float], int, Sequence[float], int, ProfileParams], "list[float]"
]


@dataclass(frozen=True)
class BLModel:
    """Bundle of the functions that define a boundary-layer model."""

    initialize: Callable[[ProfileParams], list[float]]
    initialize_sensitivity: Callable[[ProfileParams], list[float]]
    compute_rhs_self_similar: RhsFunction
    compute_rhs_locally_similar: RhsFunction
    compute_rhs_diff_diff: RhsFunction
    compute_rhs_jacobian_self_similar: JacobianFunction
    compute_rhs_jacobian_locally_similar: JacobianFunction
    compute_rhs_jacobian_diff_diff: JacobianFunction
    limit_update: Callable[[Sequence[float], Sequence[float], ProfileParams], float]
    compute_outputs: Callable[
        [Sequence[float], Sequence[float], int, ProfileParams], list[float]
    ]


def _unpack(state: Sequence[float], offset: int) -> tuple[float, float, float, float, float]:
    """Return ``(fpp, gp, fp, f, g)`` with the model scalings applied."""
    if offset < 0 or len(state) < offset + BL_RANK:
        raise ValueError("state holds too few values for the requested offset")
    fpp = state[offset + FPP_ID] / _ROMU
    gp = state[offset + GP_ID] / _ROMU * _PRANDTL
    fp = state[offset + FP_ID]
    f = state[offset + F_ID]
    g = state[offset + G_ID]
    return fpp, gp, fp, f, g


def _field_coefficients(
    field: Sequence[float], offset: int
) -> tuple[float, float, float, float, float, float]:
    """Return ``(m0, m1, s0, s1, e0, e1)`` of the difference-differential field."""
    if offset < 0 or len(field) < offset + FIELD_RANK:
        raise ValueError("field holds too few values for the requested offset")
    return (
        field[offset + FIELD_M0_ID],
        field[offset + FIELD_M1_ID],
        field[offset + FIELD_S0_ID],
        field[offset + FIELD_S1_ID],
        field[offset + FIELD_E0_ID],
        field[offset + FIELD_E1_ID],
    )


def _edge_factors(params: ProfileParams) -> tuple[float, float, float]:
    c1 = 2.0 * (params.xi / params.ue) * params.due_dxi
    c2 = 2.0 * params.xi * params.dhe_dxi / params.he
    c3 = 2.0 * params.xi * params.ue * params.due_dxi / params.he
    return c1, c2, c3


def _step_limit(state: Sequence[float], offset: int, rhs: Sequence[float]) -> float:
    return 0.2 * state[offset + G_ID] / abs(rhs[G_ID] + 1e-20)


def _rhs_vector(fpp_rhs: float, gp_rhs: float, fpp: float, fp: float, gp: float) -> list[float]:
    rhs = [0.0] * BL_RANK
    rhs[FPP_ID] = fpp_rhs
    rhs[FP_ID] = fpp
    rhs[F_ID] = fp
    rhs[GP_ID] = gp_rhs
    rhs[G_ID] = gp
    return rhs


def _jacobian(fpp_row: dict[int, float], gp_row: dict[int, float]) -> list[float]:
    """Assemble the row-major Jacobian from the two non-trivial rows."""
    rows: dict[int, dict[int, float]] = {
        FPP_ID: fpp_row,
        FP_ID: {FPP_ID: 1.0 / _ROMU},
        F_ID: {FP_ID: 1.0},
        GP_ID: gp_row,
        G_ID: {GP_ID: _PRANDTL / _ROMU},
    }
    matrix = [0.0] * (BL_RANK * BL_RANK)
    for row_id, entries in rows.items():
        for col_id, value in entries.items():
            matrix[row_id * BL_RANK + col_id] = value
    return matrix


def initialize_default(profile_params: ProfileParams) -> list[float]:
    """Wall state of a profile from its shooting parameters."""
    state = [0.0] * BL_RANK
    state[FPP_ID] = _ROMU * profile_params.fpp0
    state[G_ID] = profile_params.g0
    if profile_params.wall_type is WallType.WALL:
        state[GP_ID] = (_ROMU / _PRANDTL) * profile_params.gp0
    return state


def initialize_sensitivity_default(profile_params: ProfileParams) -> list[float]:
    """Column-major wall sensitivities with respect to the two shooting parameters.

    The first column is with respect to ``f''(0)``, the second with respect to
    ``g'(0)`` on an isothermal wall or ``g(0)`` on an adiabatic wall.
    """
    sensitivity = [0.0] * (BL_RANK * _TARGET_RANK)
    sensitivity[FPP_ID] = _ROMU
    if profile_params.wall_type is WallType.WALL:
        sensitivity[BL_RANK + GP_ID] = _ROMU / _PRANDTL
    else:
        sensitivity[BL_RANK + G_ID] = 1.0
    return sensitivity


def limit_update_default(
    state: Sequence[float], state_varn: Sequence[float], profile_params: ProfileParams
) -> float:
    """Largest fraction of ``state_varn`` keeping the state physically admissible."""
    alpha = 1.0
    if state_varn[FP_ID] < 0:
        alpha = min(alpha, 0.2 * state[FP_ID] / (-state_varn[FP_ID]))
    else:
        alpha = min(alpha, 0.2 * (1.2 - state[FP_ID]) / (state_varn[FP_ID] + 1e-30))

    alpha = min(alpha, 0.2 * state[FPP_ID] / abs(state_varn[FPP_ID] + 1e-30))
    alpha = min(alpha, 0.2 * state[G_ID] / abs(state_varn[G_ID] + 1e-30))
    return alpha


def compute_rhs_default(
    state: Sequence[float],
    state_offset: int,
    field: Sequence[float],
    field_offset: int,
    params: ProfileParams,
) -> tuple[list[float], float]:
    """Self-similar right-hand side and the suggested eta step limit."""
    fpp, gp, fp, f, _ = _unpack(state, state_offset)
    rhs = _rhs_vector(
        -f * fpp,
        -(f * gp + _ROMU * _ECKERT * fpp * fpp),
        fpp,
        fp,
        gp,
    )
    return rhs, _step_limit(state, state_offset, rhs)


def compute_lsim_rhs_default(
    state: Sequence[float],
    state_offset: int,
    field: Sequence[float],
    field_offset: int,
    params: ProfileParams,
) -> tuple[list[float], float]:
    """Locally-similar right-hand side and the suggested eta step limit."""
    fpp, gp, fp, f, g = _unpack(state, state_offset)
    xi, ue, he = params.xi, params.ue, params.he
    due_dxi, dhe_dxi = params.due_dxi, params.dhe_dxi

    fpp_rhs = -f * fpp + 2.0 * (xi / ue) * (fp * fp - g) * due_dxi
    gp_rhs = -(f * gp + _ROMU * _ECKERT * fpp * fpp) + 2.0 * xi * (
        fp * g * dhe_dxi / he + g * (ue / he) * fp * due_dxi
    )
    rhs = _rhs_vector(fpp_rhs, gp_rhs, fpp, fp, gp)
    return rhs, _step_limit(state, state_offset, rhs)


def compute_full_rhs_default(
    state: Sequence[float],
    state_offset: int,
    field: Sequence[float],
    field_offset: int,
    params: ProfileParams,
) -> tuple[list[float], float]:
    """Difference-differential right-hand side and the suggested eta step limit."""
    fpp, gp, fp, f, g = _unpack(state, state_offset)
    c1, c2, c3 = _edge_factors(params)
    m0, m1, s0, s1, e0, e1 = _field_coefficients(field, field_offset)

    fpp_rhs = -f * fpp + c1 * (fp * fp - g) + fp * (m0 * fp + m1) - fpp * (s0 * f + s1)
    gp_rhs = (
        -(f * gp + _ROMU * _ECKERT * fpp * fpp)
        + fp * g * (c2 + c3)
        + fp * (e0 * g + e1)
        - gp * (s0 * gp * f + s1)
    )
    rhs = _rhs_vector(fpp_rhs, gp_rhs, fpp, fp, gp)
    return rhs, _step_limit(state, state_offset, rhs)


def compute_rhs_jacobian_default(
    state: Sequence[float],
    state_offset: int,
    field: Sequence[float],
    field_offset: int,
    params: ProfileParams,
) -> list[float]:
    """Jacobian of the self-similar right-hand side."""
    fpp, gp, _, f, _ = _unpack(state, state_offset)
    return _jacobian(
        {FPP_ID: -f / _ROMU, F_ID: -fpp},
        {
            FPP_ID: -_ECKERT * 2.0 * fpp,
            F_ID: -gp,
            GP_ID: -f * _PRANDTL / _ROMU,
        },
    )


def compute_lsim_rhs_jacobian_default(
    state: Sequence[float],
    state_offset: int,
    field: Sequence[float],
    field_offset: int,
    params: ProfileParams,
) -> list[float]:
    """Jacobian of the locally-similar right-hand side."""
    fpp, gp, fp, f, g = _unpack(state, state_offset)
    c1, c2, c3 = _edge_factors(params)
    return _jacobian(
        {
            FPP_ID: -f / _ROMU,
            FP_ID: 2.0 * c1 * fp,
            F_ID: -fpp,
            G_ID: -c1,
        },
        {
            FPP_ID: -_ECKERT * 2.0 * fpp,
            FP_ID: g * (c2 + c3),
            F_ID: -gp,
            GP_ID: -f * _PRANDTL / _ROMU,
            G_ID: fp * (c2 + c3),
        },
    )


def compute_full_rhs_jacobian_default(
    state: Sequence[float],
    state_offset: int,
    field: Sequence[float],
    field_offset: int,
    params: ProfileParams,
) -> list[float]:
    """Jacobian of the difference-differential right-hand side."""
    fpp, gp, fp, f, g = _unpack(state, state_offset)
    c1, c2, c3 = _edge_factors(params)
    m0, m1, s0, s1, e0, e1 = _field_coefficients(field, field_offset)
    return _jacobian(
        {
            FPP_ID: -f / _ROMU - (s0 * f + s1) / _ROMU,
            FP_ID: 2.0 * c1 * fp + (2.0 * m0 * fp + m1),
            F_ID: -fpp - s0 * fpp,
            G_ID: -c1,
        },
        {
            FPP_ID: -_ECKERT * 2.0 * fpp,
            FP_ID: g * (c2 + c3) + (e0 * g + e1),
            F_ID: -gp - s0 * gp,
            GP_ID: -f * _PRANDTL / _ROMU - (s0 * f + s1) * _PRANDTL / _ROMU,
            G_ID: fp * (c2 + c3) + e0 * fp,
        },
    )


def compute_outputs_default(
    state_grid: Sequence[float],
    eta_grid: Sequence[float],
    profile_size: int,
    profile_params: ProfileParams,
) -> list[float]:
    """Wall-normal output fields, ``OUTPUT_RANK`` values per eta point.

    Fields this model does not compute are left at zero.
    """
    if profile_size < 0:
        raise ValueError("profile size must not be negative")
    if len(state_grid) < profile_size * BL_RANK:
        raise ValueError("state grid holds too few values for the profile size")

    output_grid = [0.0] * (profile_size * OUTPUT_RANK)
    for eta_id in range(profile_size):
        state = state_grid[eta_id * BL_RANK : (eta_id + 1) * BL_RANK]
        record = eta_id * OUTPUT_RANK
        output_grid[record + OUTPUT_TAU_ID] = state[FPP_ID]
        output_grid[record + OUTPUT_Q_ID] = state[GP_ID]
        output_grid[record + OUTPUT_RO_ID] = 1.0 / state[G_ID]
        output_grid[record + OUTPUT_CHAPMANN_ID] = _ROMU
        output_grid[record + OUTPUT_PRANDTL_ID] = _PRANDTL
    return output_grid


DEFAULT_MODEL = BLModel(
    initialize=initialize_default,
    initialize_sensitivity=initialize_sensitivity_default,
    compute_rhs_self_similar=compute_rhs_default,
    compute_rhs_locally_similar=compute_lsim_rhs_default,
    compute_rhs_diff_diff=compute_full_rhs_default,
    compute_rhs_jacobian_self_similar=compute_rhs_jacobian_default,
    compute_rhs_jacobian_locally_similar=compute_lsim_rhs_jacobian_default,
    compute_rhs_jacobian_diff_diff=compute_full_rhs_jacobian_default,
    limit_update=limit_update_default,
    compute_outputs=compute_outputs_default,
)