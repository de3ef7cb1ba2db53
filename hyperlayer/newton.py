"""Damped Newton solver with a backtracking line search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from hyperlayer.linalg import vector_norm
from hyperlayer.matrix import DenseMatrix

__all__ = ["NewtonParams", "NewtonResult", "newton_solve_direct"]

ObjectiveFun = Callable[[Sequence[float]], Sequence[float]]
JacobianFun = Callable[[Sequence[float]], Sequence[float]]
LimitUpdateFun = Callable[[Sequence[float], Sequence[float]], float]


@dataclass
class NewtonParams:
    """Tolerances and iteration limits of the Newton solver."""

    rtol: float = 1e-6
    max_iter: int = 1000
    max_ls_iter: int = 10
    verbose: bool = False


@dataclass
class NewtonResult:
    """Final state of a Newton solve."""

    state: list[float]
    residual_norm: float
    converged: bool
    iterations: int


def newton_solve_direct(
    objective_fun: ObjectiveFun,
    jacobian_fun: JacobianFun,
    limit_update_fun: LimitUpdateFun,
    initial_state: Sequence[float],
    params: NewtonParams | None = None,
) -> NewtonResult:
    """Solve ``objective_fun(state) = 0`` starting from ``initial_state``.

    ``jacobian_fun`` returns the row-major Jacobian, ``limit_update_fun``
    returns the largest admissible step fraction along an update. The solve
    stops when the residual norm falls under ``rtol``, when the step limit
    is zero, when the line search fails or after ``max_iter`` iterations.
    """
    params = params or NewtonParams()
    state = list(initial_state)
    system_size = len(state)
    if system_size == 0:
        raise ValueError("state must not be empty")

    matrix = DenseMatrix(system_size)
    residual = list(objective_fun(state))
    matrix.data = list(jacobian_fun(state))

    res_norm = vector_norm(residual)
    if params.verbose:
        print("\n*************************************")
        print(
            f"** NEWTON START: res_norm={res_norm:.2e}, "
            f"jac_norm={vector_norm(matrix.data):.2e} **"
        )

    iterations = 0
    while iterations < params.max_iter:
        state_varn = [-value for value in matrix.solve(residual)]

        alpha = limit_update_fun(state, state_varn)
        if alpha == 0:
            if params.verbose:
                print(
                    "** ERROR : Initial line search coeff is zero, "
                    f"||state_varn||={vector_norm(state_varn):.2e}."
                )
            break

        state = [value + alpha * step for value, step in zip(state, state_varn)]

        success = False
        for _ in range(params.max_ls_iter):
            residual = list(objective_fun(state))
            new_res_norm = vector_norm(residual)
            if new_res_norm < res_norm:
                res_norm = new_res_norm
                success = True
                break
            alpha *= 0.5
            state = [value - alpha * step for value, step in zip(state, state_varn)]

        if not success:
            if params.verbose:
                print(" => Unsuccessful line search.")
            break

        matrix.data = list(jacobian_fun(state))

        if params.verbose:
            print(
                f"**  NEWTON Iter#{iterations + 1}, ||x|| = {vector_norm(state):.2e}, "
                f"||dx|| = {vector_norm(state_varn):.2e}, a = {alpha:.2e}, "
                f"||R|| = {res_norm:.2e}"
            )

        if res_norm < params.rtol:
            iterations += 1
            if params.verbose:
                print(f" => Solution found. ||R|| = {res_norm:.2e}")
            break

        iterations += 1

    if params.verbose:
        print(f"\n** NEWTON END: ||R|| = {res_norm:.2e} **")
        print("**********************************\n")

    return NewtonResult(
        state=state,
        residual_norm=res_norm,
        converged=res_norm < params.rtol,
        iterations=iterations,
    )