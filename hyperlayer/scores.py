"""Outer boundary-condition scores of a developed profile and their Jacobians.

A score measures how far the outer state of a profile is from the edge
conditions ``f' = 1`` and ``g = 1``. Jacobians are taken with respect to the
two shooting parameters. They are returned row-major as ``[d s0/d p0,
d s0/d p1, d s1/d p0, d s1/d p1]``. ``sensitivity_cm`` holds the state
sensitivities column-major, one column of ``BL_RANK`` values per parameter.
"""

from __future__ import annotations

from typing import Callable, Sequence

from hyperlayer.gas import (
    R_AIR,
    air_cond,
    air_cond_grad,
    air_cpg_cp,
    air_cpg_dro_dh,
    air_cpg_ro,
    air_visc,
    air_visc_grad,
)
from hyperlayer.profile import BL_RANK, FP_ID, FPP_ID, G_ID, GP_ID, ProfileParams, Scoring

__all__ = [
    "compute_score",
    "compute_score_jacobian",
    "compute_score_default",
    "compute_score_jacobian_default",
    "compute_score_square",
    "compute_score_jacobian_square",
    "compute_score_square_steady",
    "compute_score_jacobian_square_steady",
    "compute_score_exp",
    "compute_score_jacobian_exp",
    "compute_score_exp_scaled",
    "compute_score_jacobian_exp_scaled",
]

_TARGET_RANK = 2


def _outer_state(state: Sequence[float], offset: int) -> tuple[float, float, float, float]:
    """Return ``(fpp, gp, fp, g)`` of the record at ``offset``."""
    if offset < 0 or len(state) < offset + BL_RANK:
        raise ValueError("state holds too few values for the requested offset")
    return (
        state[offset + FPP_ID],
        state[offset + GP_ID],
        state[offset + FP_ID],
        state[offset + G_ID],
    )


def _columns(sensitivity_cm: Sequence[float], offset: int) -> list[Sequence[float]]:
    """Split the sensitivities into one state-sized column per shooting parameter."""
    if offset < 0 or len(sensitivity_cm) < offset + _TARGET_RANK * BL_RANK:
        raise ValueError("sensitivity holds too few values for the requested offset")
    return [
        sensitivity_cm[offset + column * BL_RANK : offset + (column + 1) * BL_RANK]
        for column in range(_TARGET_RANK)
    ]


def compute_score_default(
    params: ProfileParams, state: Sequence[float], state_offset: int
) -> list[float]:
    """Plain errors ``[f' - 1, g - 1]``."""
    _, _, fp, g = _outer_state(state, state_offset)
    return [fp - 1.0, g - 1.0]


def compute_score_jacobian_default(
    params: ProfileParams,
    state: Sequence[float],
    state_offset: int,
    sensitivity_cm: Sequence[float],
    svty_offset: int,
) -> list[float]:
    """Jacobian of the plain errors."""
    columns = _columns(sensitivity_cm, svty_offset)
    return [column[FP_ID] for column in columns] + [column[G_ID] for column in columns]


def compute_score_square(
    params: ProfileParams, state: Sequence[float], state_offset: int
) -> list[float]:
    """Squared errors ``[(f' - 1)^2, (g - 1)^2]``."""
    _, _, fp, g = _outer_state(state, state_offset)
    return [(fp - 1.0) * (fp - 1.0), (g - 1.0) * (g - 1.0)]


def compute_score_jacobian_square(
    params: ProfileParams,
    state: Sequence[float],
    state_offset: int,
    sensitivity_cm: Sequence[float],
    svty_offset: int,
) -> list[float]:
    """Jacobian of the squared errors."""
    _, _, fp, g = _outer_state(state, state_offset)
    columns = _columns(sensitivity_cm, svty_offset)
    return [2.0 * (fp - 1.0) * column[FP_ID] for column in columns] + [
        2.0 * (g - 1.0) * column[G_ID] for column in columns
    ]


def compute_score_square_steady(
    params: ProfileParams, state: Sequence[float], state_offset: int
) -> list[float]:
    """Squared errors plus squared outer gradients."""
    fpp, gp, fp, g = _outer_state(state, state_offset)
    fp_error, g_error = fp - 1.0, g - 1.0
    return [fp_error * fp_error + fpp * fpp, g_error * g_error + gp * gp]


def compute_score_jacobian_square_steady(
    params: ProfileParams,
    state: Sequence[float],
    state_offset: int,
    sensitivity_cm: Sequence[float],
    svty_offset: int,
) -> list[float]:
    """Jacobian of the squared errors plus squared outer gradients."""
    fpp, gp, fp, g = _outer_state(state, state_offset)
    fp_error, g_error = fp - 1.0, g - 1.0
    columns = _columns(sensitivity_cm, svty_offset)
    return [
        2.0 * (fp_error * column[FP_ID] + fpp * column[FPP_ID]) for column in columns
    ] + [2.0 * (g_error * column[G_ID] + gp * column[GP_ID]) for column in columns]


def compute_score_exp(
    params: ProfileParams, state: Sequence[float], state_offset: int
) -> list[float]:
    """Errors plus outer gradients, suited to exponential decay to the edge."""
    fpp, gp, fp, g = _outer_state(state, state_offset)
    return [fp - 1.0 + fpp, g - 1.0 + gp]


def compute_score_jacobian_exp(
    params: ProfileParams,
    state: Sequence[float],
    state_offset: int,
    sensitivity_cm: Sequence[float],
    svty_offset: int,
) -> list[float]:
    """Jacobian of the errors plus outer gradients."""
    _outer_state(state, state_offset)
    columns = _columns(sensitivity_cm, svty_offset)
    return [column[FP_ID] + column[FPP_ID] for column in columns] + [
        column[G_ID] + column[GP_ID] for column in columns
    ]


def _transport(params: ProfileParams, g: float) -> tuple[float, float, float, float, float]:
    """Return ``(ro, cp, temperature, mu, k)`` at enthalpy ratio ``g``."""
    he, pe = params.he, params.pe
    ro = air_cpg_ro(g * he, pe)
    cp = air_cpg_cp(g * he, pe)
    temperature = pe / (ro * R_AIR)
    return ro, cp, temperature, air_visc(temperature), air_cond(temperature)


def compute_score_exp_scaled(
    params: ProfileParams, state: Sequence[float], state_offset: int
) -> list[float]:
    """Errors plus outer gradients scaled by the local gas properties."""
    cfpp, cgp, fp, g = _outer_state(state, state_offset)
    ro, cp, _, mu, k = _transport(params, g)

    romu = (ro * mu) / (params.roe * params.mue)
    prandtl = mu * cp / k

    fpp = cfpp / romu
    gp = cgp / romu * prandtl
    return [fp - 1.0 + fpp, g - 1.0 + gp]


def compute_score_jacobian_exp_scaled(
    params: ProfileParams,
    state: Sequence[float],
    state_offset: int,
    sensitivity_cm: Sequence[float],
    svty_offset: int,
) -> list[float]:
    """Jacobian of the scaled errors plus outer gradients."""
    cfpp, cgp, _, g = _outer_state(state, state_offset)
    columns = _columns(sensitivity_cm, svty_offset)
    he, pe = params.he, params.pe

    ro, cp, temperature, mu, k = _transport(params, g)
    dro_dg = air_cpg_dro_dh(g * he, pe) * he
    dtemp_dg = -pe * dro_dg / (ro * ro * R_AIR)

    dmu_dg = air_visc_grad(temperature) * dtemp_dg
    dk_dg = air_cond_grad(temperature) * dtemp_dg

    ref = params.roe * params.mue
    romu = (ro * mu) / ref
    prandtl = mu * cp / k

    dromu_dg = (dro_dg * mu + ro * dmu_dg) / ref
    dprandtl_dg = (dmu_dg / k - mu * dk_dg / (k * k)) * cp

    fpp = cfpp / romu
    dfpp_dfpp = 1.0 / romu
    dfpp_dg = -dromu_dg * fpp / romu

    dgp_dgp = prandtl / romu
    dgp_dg = cgp * (dprandtl_dg / romu - dromu_dg * prandtl / (romu * romu))

    return [
        column[FP_ID] + dfpp_dfpp * column[FPP_ID] + dfpp_dg * column[G_ID]
        for column in columns
    ] + [
        column[G_ID] + dgp_dgp * column[GP_ID] + dgp_dg * column[G_ID]
        for column in columns
    ]


_ScoreFunction = Callable[[ProfileParams, Sequence[float], int], list[float]]
_JacobianFunction = Callable[
    [ProfileParams, Sequence[float], int, Sequence[float], int], list[float]
]

_SCORES: dict[Scoring, tuple[_ScoreFunction, _JacobianFunction]] = {
    Scoring.DEFAULT: (compute_score_default, compute_score_jacobian_default),
    Scoring.SQUARE: (compute_score_square, compute_score_jacobian_square),
    Scoring.SQUARE_STEADY: (
        compute_score_square_steady,
        compute_score_jacobian_square_steady,
    ),
    Scoring.EXP: (compute_score_exp, compute_score_jacobian_exp),
    Scoring.EXP_SCALED: (compute_score_exp_scaled, compute_score_jacobian_exp_scaled),
}


def compute_score(
    params: ProfileParams, state: Sequence[float], state_offset: int
) -> list[float]:
    """Score selected by ``params.scoring``."""
    score_fun, _ = _SCORES[params.scoring]
    return score_fun(params, state, state_offset)


def compute_score_jacobian(
    params: ProfileParams,
    state: Sequence[float],
    state_offset: int,
    sensitivity_cm: Sequence[float],
    svty_offset: int,
) -> list[float]:
    """Score Jacobian selected by ``params.scoring``."""
    _, jacobian_fun = _SCORES[params.scoring]
    return jacobian_fun(params, state, state_offset, sensitivity_cm, svty_offset)