"""Edge velocity and density marched from a prescribed wall pressure."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence

from hyperlayer.newton import NewtonParams, newton_solve_direct

__all__ = [
    "EdgeSolution",
    "compute_from_pressure_be",
    "compute_from_pressure_cn",
    "compute_from_pressure_constant_density",
]

_System = tuple[
    Callable[[Sequence[float]], list[float]],
    Callable[[Sequence[float]], list[float]],
]
_LimitUpdate = Callable[[Sequence[float], Sequence[float]], float]


@dataclass
class EdgeSolution:
    """Density and velocity along the edge, valid up to ``solve_size`` points."""

    density: list[float]
    velocity: list[float]
    solve_size: int

    @property
    def complete(self) -> bool:
        """Whether every station was solved."""
        return self.solve_size == len(self.density)


def _prepare(
    pressure_field: Sequence[float], initial_density: float, initial_velocity: float
) -> tuple[list[float], list[float], list[float]]:
    pressures = list(pressure_field)
    if not pressures:
        raise ValueError("pressure field must not be empty")
    if initial_density <= 0:
        raise ValueError("initial density must be positive")
    if pressures[0] <= 0:
        raise ValueError("initial pressure must be positive")
    grid_size = len(pressures)
    density = [float(initial_density)] + [0.0] * (grid_size - 1)
    velocity = [float(initial_velocity)] + [0.0] * (grid_size - 1)
    return pressures, density, velocity


def _positivity_limit(state: Sequence[float], state_varn: Sequence[float]) -> float:
    alpha = 1.0
    if state_varn[0] < 0:
        alpha = min(alpha, 0.2 * state[0] / (-state_varn[0]))
    if state_varn[1] < 0:
        alpha = min(alpha, 0.2 * state[1] / (-state_varn[1]))
    return alpha


def _max_velocity(gamma_ref: float) -> float:
    return math.sqrt(2.0 * gamma_ref / (gamma_ref - 1))


def _march(
    pressures: list[float],
    density: list[float],
    velocity: list[float],
    system: Callable[[float, float, float], _System],
    limit_update: _LimitUpdate,
) -> EdgeSolution:
    params = NewtonParams(rtol=1e-6, max_iter=2000, verbose=False)
    for xid in range(1, len(pressures)):
        delta_p = pressures[xid] - pressures[xid - 1]
        ue = velocity[xid - 1]
        roe = density[xid - 1]

        objective, jacobian = system(ue, roe, delta_p)
        guess = [roe, math.sqrt(abs(delta_p) / roe) if ue == 0 else ue]

        try:
            result = newton_solve_direct(objective, jacobian, limit_update, guess, params)
            converged = result.converged
        except ZeroDivisionError:
            converged = False

        if not converged:
            print(f"\nLocal edge solve unsuccessfull at iter #{xid}, abort.")
            return EdgeSolution(density, velocity, xid)

        density[xid], velocity[xid] = result.state

    return EdgeSolution(density, velocity, len(pressures))


def _backward_euler_system(ue: float, roe: float, delta_p: float) -> _System:
    def objective(state: Sequence[float]) -> list[float]:
        ro1, u1 = state
        return [u1 * u1 * (ro1 - roe) - delta_p, u1 * ro1 * (u1 - ue) + delta_p]

    def jacobian(state: Sequence[float]) -> list[float]:
        ro1, u1 = state
        return [u1 * u1, 2.0 * u1 * (ro1 - roe), u1 * (u1 - ue), ro1 * (2.0 * u1 - ue)]

    return objective, jacobian


def _crank_nicolson_system(ue: float, roe: float, delta_p: float) -> _System:
    def objective(state: Sequence[float]) -> list[float]:
        ro1, u1 = state
        return [
            0.5 * (u1 * u1 + ue * ue) * (ro1 - roe) - delta_p,
            0.5 * (u1 * ro1 + ue * roe) * (u1 - ue) + delta_p,
        ]

    def jacobian(state: Sequence[float]) -> list[float]:
        ro1, u1 = state
        return [
            0.5 * (u1 * u1 + ue * ue),
            u1 * (ro1 - roe),
            0.5 * u1 * (u1 - ue),
            0.5 * (ro1 * (u1 - ue) + (u1 * ro1 + ue * roe)),
        ]

    return objective, jacobian


def compute_from_pressure_be(
    pressure_field: Sequence[float],
    initial_density: float,
    initial_velocity: float,
    gamma_ref: float = 1.4,
) -> EdgeSolution:
    """March the momentum and mass balances with a backward Euler scheme."""
    pressures, density, velocity = _prepare(pressure_field, initial_density, initial_velocity)
    return _march(pressures, density, velocity, _backward_euler_system, _positivity_limit)


def compute_from_pressure_cn(
    pressure_field: Sequence[float],
    initial_density: float,
    initial_velocity: float,
    gamma_ref: float = 1.4,
) -> EdgeSolution:
    """March the momentum and mass balances with a Crank-Nicolson scheme."""
    pressures, density, velocity = _prepare(pressure_field, initial_density, initial_velocity)
    max_ue = _max_velocity(gamma_ref)

    def limit_update(state: Sequence[float], state_varn: Sequence[float]) -> float:
        alpha = _positivity_limit(state, state_varn)
        if state_varn[1] > 0:
            alpha = min(alpha, 0.5 * (max_ue - state[1]) / state_varn[1])
        if state[1] > max_ue:
            return 0.0
        return alpha

    return _march(pressures, density, velocity, _crank_nicolson_system, limit_update)


def compute_from_pressure_constant_density(
    pressure_field: Sequence[float],
    initial_density: float,
    initial_velocity: float,
    gamma_ref: float = 1.4,
) -> EdgeSolution:
    """Incompressible Bernoulli relation on a scaled pressure field (values <= 1)."""
    pressures, density, velocity = _prepare(pressure_field, initial_density, initial_velocity)
    if any(value > 1.0 for value in pressures):
        raise ValueError("scaled pressure values must not exceed one")

    max_ue = _max_velocity(gamma_ref)
    for xid in range(1, len(pressures)):
        ue = math.sqrt(1.0 - pressures[xid])
        density[xid] = 1.0
        velocity[xid] = ue
        if ue > max_ue:
            print("\n edge velocity above total enthalpy limit.")
            return EdgeSolution(density, velocity, xid)

    return EdgeSolution(density, velocity, len(pressures))