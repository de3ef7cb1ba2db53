"""Dense square matrices with direct solves and matrix products.

Matrices are stored row-major as flat lists; right-hand-side matrices are
stored column-major.
"""

from __future__ import annotations

from typing import Sequence

from hyperlayer.linalg import (
    factorize_lu,
    lower_matrix_solve,
    lower_solve,
    lu_solve,
    read_lower_upper,
    upper_determinant,
    upper_matrix_solve,
    upper_solve,
)

__all__ = ["DenseMatrix", "matrix_multiply", "matrix_matrix_multiply"]


def _check_size(data: Sequence[float], size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"{what} holds {len(data)} values, at least {size} required")


class DenseMatrix:
    """Square matrix solved by LU factorisation without pivoting.

    ``data`` holds the row-major entries. The determinant reports the upper
    factor of the most recent LU factorisation; two-by-two systems are solved
    in closed form and leave the stored factors untouched.
    """

    def __init__(self, xdim: int) -> None:
        if xdim < 1:
            raise ValueError("matrix dimension must be positive")
        self.xdim = xdim
        self.data: list[float] = [0.0] * (xdim * xdim)
        self._lower: list[float] = [0.0] * (xdim * (xdim - 1) // 2)
        self._upper: list[float] = [0.0] * (xdim * (xdim + 1) // 2)

    def __repr__(self) -> str:
        return f"DenseMatrix(xdim={self.xdim}, data={self.data!r})"

    def _factorize(self) -> None:
        self._lower, self._upper = factorize_lu(
            *read_lower_upper(self.data, self.xdim), self.xdim
        )

    def solve(self, rhs: Sequence[float]) -> list[float]:
        """Return the solution of ``A x = rhs``."""
        _check_size(rhs, self.xdim, "right-hand side")
        if self.xdim == 1:
            return [rhs[0] / self.data[0]]
        if self.xdim == 2:
            return lu_solve(self.data, rhs, self.xdim)
        self._factorize()
        partial = lower_solve(self._lower, rhs, self.xdim)
        return upper_solve(self._upper, partial, self.xdim)

    def matrix_solve(self, solution_matrix_cm: Sequence[float], zdim: int) -> list[float]:
        """Return ``X`` solving ``A X = B`` for a column-major ``B`` of ``zdim`` columns."""
        if self.xdim < 2:
            raise ValueError("system dimension must be greater than one")
        _check_size(solution_matrix_cm, self.xdim * zdim, "right-hand-side matrix")
        self._factorize()
        partial = lower_matrix_solve(self._lower, solution_matrix_cm, self.xdim, zdim)
        return upper_matrix_solve(self._upper, partial, self.xdim, zdim)

    def determinant(self) -> float:
        """Determinant from the last LU factorisation."""
        return upper_determinant(self._upper, self.xdim)


def matrix_multiply(
    matrix_data_rm: Sequence[float], input_vector: Sequence[float], xdim: int
) -> list[float]:
    """Product of a row-major square matrix with a vector."""
    _check_size(matrix_data_rm, xdim * xdim, "matrix data")
    _check_size(input_vector, xdim, "input vector")
    vector = input_vector[:xdim]
    return [
        sum(coeff * value for coeff, value in zip(matrix_data_rm[i * xdim : (i + 1) * xdim], vector))
        for i in range(xdim)
    ]


def matrix_matrix_multiply(
    matrix_data_rm: Sequence[float],
    input_matrix_cm: Sequence[float],
    xdim: int,
    zdim: int,
) -> list[float]:
    """Product of a row-major square matrix with a column-major matrix."""
    _check_size(input_matrix_cm, xdim * zdim, "input matrix")
    return [
        value
        for k in range(zdim)
        for value in matrix_multiply(
            matrix_data_rm, input_matrix_cm[k * xdim : (k + 1) * xdim], xdim
        )
    ]