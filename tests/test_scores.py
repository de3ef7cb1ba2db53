import pytest

from hyperlayer.profile import BL_RANK, FP_ID, FPP_ID, G_ID, GP_ID, ProfileParams, Scoring
from hyperlayer.scores import (
    compute_score,
    compute_score_default,
    compute_score_exp,
    compute_score_exp_scaled,
    compute_score_jacobian,
    compute_score_jacobian_default,
    compute_score_jacobian_exp,
    compute_score_jacobian_exp_scaled,
    compute_score_jacobian_square,
    compute_score_jacobian_square_steady,
    compute_score_square,
    compute_score_square_steady,
)


def make_state(fpp, gp, fp, g):
    state = [0.0] * BL_RANK
    state[FPP_ID] = fpp
    state[GP_ID] = gp
    state[FP_ID] = fp
    state[G_ID] = g
    return state


SENSITIVITY = [float(value + 1) for value in range(2 * BL_RANK)]


def test_default_score_vanishes_at_edge():
    params = ProfileParams()
    assert compute_score_default(params, make_state(0.3, 0.1, 1.0, 1.0), 0) == [0.0, 0.0]


def test_default_score_respects_offset():
    params = ProfileParams()
    state = [9.0] * 3 + make_state(0.3, 0.1, 0.5, 2.0)
    assert compute_score_default(params, state, 3) == pytest.approx([-0.5, 1.0])


def test_default_jacobian_picks_sensitivities():
    params = ProfileParams()
    jac = compute_score_jacobian_default(params, make_state(0, 0, 1, 1), 0, SENSITIVITY, 0)
    assert jac == [
        SENSITIVITY[FP_ID],
        SENSITIVITY[BL_RANK + FP_ID],
        SENSITIVITY[G_ID],
        SENSITIVITY[BL_RANK + G_ID],
    ]


def test_default_jacobian_respects_sensitivity_offset():
    params = ProfileParams()
    padded = [0.0, 0.0] + SENSITIVITY
    state = make_state(0, 0, 1, 1)
    assert compute_score_jacobian_default(params, state, 0, padded, 2) == (
        compute_score_jacobian_default(params, state, 0, SENSITIVITY, 0)
    )


def test_square_is_default_squared():
    params = ProfileParams()
    state = make_state(0.2, 0.4, 0.7, 1.6)
    default = compute_score_default(params, state, 0)
    assert compute_score_square(params, state, 0) == pytest.approx([v * v for v in default])


def test_square_jacobian_chain_rule():
    params = ProfileParams()
    state = make_state(0.2, 0.4, 0.7, 1.6)
    s0, s1 = compute_score_default(params, state, 0)
    base = compute_score_jacobian_default(params, state, 0, SENSITIVITY, 0)
    expected = [2 * s0 * base[0], 2 * s0 * base[1], 2 * s1 * base[2], 2 * s1 * base[3]]
    assert compute_score_jacobian_square(params, state, 0, SENSITIVITY, 0) == pytest.approx(expected)


def test_square_steady_matches_square_without_gradients():
    params = ProfileParams()
    state = make_state(0.0, 0.0, 0.7, 1.6)
    assert compute_score_square_steady(params, state, 0) == pytest.approx(
        compute_score_square(params, state, 0)
    )
    assert compute_score_jacobian_square_steady(params, state, 0, SENSITIVITY, 0) == pytest.approx(
        compute_score_jacobian_square(params, state, 0, SENSITIVITY, 0)
    )


def test_square_steady_adds_gradient_penalty():
    params = ProfileParams()
    state = make_state(0.5, 0.25, 1.0, 1.0)
    score = compute_score_square_steady(params, state, 0)
    assert score == pytest.approx([0.5 * 0.5, 0.25 * 0.25])


def test_exp_score_is_error_plus_gradient():
    params = ProfileParams()
    state = make_state(0.2, 0.4, 0.7, 1.6)
    default = compute_score_default(params, state, 0)
    assert compute_score_exp(params, state, 0) == pytest.approx([default[0] + 0.2, default[1] + 0.4])


def test_exp_jacobian_sums_sensitivities():
    params = ProfileParams()
    jac = compute_score_jacobian_exp(params, make_state(0, 0, 1, 1), 0, SENSITIVITY, 0)
    assert jac == pytest.approx(
        [
            SENSITIVITY[FP_ID] + SENSITIVITY[FPP_ID],
            SENSITIVITY[BL_RANK + FP_ID] + SENSITIVITY[BL_RANK + FPP_ID],
            SENSITIVITY[G_ID] + SENSITIVITY[GP_ID],
            SENSITIVITY[BL_RANK + G_ID] + SENSITIVITY[BL_RANK + GP_ID],
        ]
    )


def scaled_params():
    return ProfileParams(pe=1.0e5, he=3.0e5, roe=0.8, mue=1.5e-5, scoring=Scoring.EXP_SCALED)


def test_exp_scaled_error_part_at_zero_gradients():
    params = scaled_params()
    state = make_state(0.0, 0.0, 0.7, 1.6)
    assert compute_score_exp_scaled(params, state, 0) == pytest.approx(
        compute_score_default(params, state, 0)
    )


@pytest.mark.parametrize("var_id", [FPP_ID, GP_ID, FP_ID, G_ID])
def test_exp_scaled_jacobian_matches_finite_differences(var_id):
    params = scaled_params()
    state = make_state(0.3, 0.2, 0.8, 0.9)
    sensitivity = [0.0] * (2 * BL_RANK)
    sensitivity[var_id] = 1.0

    jac = compute_score_jacobian_exp_scaled(params, state, 0, sensitivity, 0)

    step = 1e-6
    plus = list(state)
    minus = list(state)
    plus[var_id] += step
    minus[var_id] -= step
    score_plus = compute_score_exp_scaled(params, plus, 0)
    score_minus = compute_score_exp_scaled(params, minus, 0)
    fd = [(p - m) / (2 * step) for p, m in zip(score_plus, score_minus)]

    assert jac[0] == pytest.approx(fd[0], rel=1e-5, abs=1e-8)
    assert jac[2] == pytest.approx(fd[1], rel=1e-5, abs=1e-8)
    assert jac[1] == 0.0 and jac[3] == 0.0


@pytest.mark.parametrize(
    "scoring, score_fun, jacobian_fun",
    [
        (Scoring.DEFAULT, compute_score_default, compute_score_jacobian_default),
        (Scoring.SQUARE, compute_score_square, compute_score_jacobian_square),
        (Scoring.SQUARE_STEADY, compute_score_square_steady, compute_score_jacobian_square_steady),
        (Scoring.EXP, compute_score_exp, compute_score_jacobian_exp),
        (Scoring.EXP_SCALED, compute_score_exp_scaled, compute_score_jacobian_exp_scaled),
    ],
)
def test_dispatch_follows_scoring(scoring, score_fun, jacobian_fun):
    params = ProfileParams(pe=1.0e5, he=3.0e5, roe=0.8, mue=1.5e-5, scoring=scoring)
    state = make_state(0.3, 0.2, 0.8, 0.9)
    assert compute_score(params, state, 0) == score_fun(params, state, 0)
    assert compute_score_jacobian(params, state, 0, SENSITIVITY, 0) == jacobian_fun(
        params, state, 0, SENSITIVITY, 0
    )


def test_short_state_is_rejected():
    with pytest.raises(ValueError):
        compute_score_default(ProfileParams(), [1.0, 1.0], 0)


def test_short_sensitivity_is_rejected():
    with pytest.raises(ValueError):
        compute_score_jacobian_exp(ProfileParams(), make_state(0, 0, 1, 1), 0, [1.0] * 5, 0)