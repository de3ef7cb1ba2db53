"""Dense LU factorisation and triangular solves on packed storage.

Matrices are given row-major as flat sequences. The strictly lower part of
an LU factorisation is stored row by row (row ``i`` holds ``i`` values), the
upper part including the diagonal is stored row by row (row ``i`` holds
``xdim - i`` values). Right-hand-side matrices are stored column-major.
"""

from __future__ import annotations

import math
import warnings
from itertools import islice
from typing import Iterable, Sequence

__all__ = [
    "vector_norm",
    "read_lower_upper",
    "factorize_lu",
    "lower_solve",
    "upper_solve",
    "lu_solve",
    "upper_determinant",
    "lower_matrix_solve",
    "upper_matrix_solve",
    "lu_matrix_solve",
]


def _lower_size(xdim: int) -> int:
    return xdim * (xdim - 1) // 2


def _upper_size(xdim: int) -> int:
    return xdim * (xdim + 1) // 2


def _require(data: Sequence[float], size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"{what} holds {len(data)} values, at least {size} required")


def _split(data: Iterable[float], sizes: Iterable[int]) -> list[list[float]]:
    values = iter(data)
    return [list(islice(values, size)) for size in sizes]


def _lower_rows(lower_data: Sequence[float], xdim: int) -> list[list[float]]:
    _require(lower_data, _lower_size(xdim), "lower data")
    return _split(lower_data, range(xdim))


def _upper_rows(upper_data: Sequence[float], xdim: int) -> list[list[float]]:
    _require(upper_data, _upper_size(xdim), "upper data")
    return _split(upper_data, range(xdim, 0, -1))


def _pack(rows: Sequence[Sequence[float]]) -> tuple[list[float], list[float]]:
    lower = [value for row_id, row in enumerate(rows) for value in row[:row_id]]
    upper = [value for row_id, row in enumerate(rows) for value in row[row_id:]]
    return lower, upper


def vector_norm(values: Iterable[float]) -> float:
    """Euclidean norm of a sequence of numbers."""
    return math.sqrt(sum(value * value for value in values))


def read_lower_upper(
    matrix_data: Sequence[float], xdim: int
) -> tuple[list[float], list[float]]:
    """Split a row-major square matrix into packed lower and upper parts."""
    _require(matrix_data, xdim * xdim, "matrix data")
    rows = [matrix_data[row_id * xdim : (row_id + 1) * xdim] for row_id in range(xdim)]
    return _pack(rows)


def factorize_lu(
    lower_data: Sequence[float], upper_data: Sequence[float], xdim: int
) -> tuple[list[float], list[float]]:
    """LU-factorise packed matrix parts without pivoting.

    Returns the packed unit-lower factor (diagonal implied) and the packed
    upper factor. Warns when the resulting determinant is zero.
    """
    rows = [
        lower + upper
        for lower, upper in zip(_lower_rows(lower_data, xdim), _upper_rows(upper_data, xdim))
    ]

    for pivot_id, pivot_row in enumerate(rows[:-1]):
        pivot_inv = 1.0 / pivot_row[pivot_id]
        tail = pivot_row[pivot_id + 1 :]
        for row in rows[pivot_id + 1 :]:
            gauss_coeff = row[pivot_id] * pivot_inv
            row[pivot_id] = gauss_coeff
            row[pivot_id + 1 :] = [
                value - gauss_coeff * pivot_value
                for value, pivot_value in zip(row[pivot_id + 1 :], tail)
            ]

    lower, upper = _pack(rows)
    if upper_determinant(upper, xdim) == 0.0:
        warnings.warn("LU determinant is zero.", RuntimeWarning, stacklevel=2)
    return lower, upper


def lower_solve(
    lower_data: Sequence[float], rhs: Sequence[float], xdim: int
) -> list[float]:
    """Forward substitution with a packed unit-lower factor."""
    _require(rhs, xdim, "right-hand side")
    solution = list(rhs)
    for row_id, row in enumerate(_lower_rows(lower_data, xdim)):
        solution[row_id] -= sum(coeff * value for coeff, value in zip(row, solution))
    return solution


def upper_solve(
    upper_data: Sequence[float], rhs: Sequence[float], xdim: int
) -> list[float]:
    """Backward substitution with a packed upper factor."""
    _require(rhs, xdim, "right-hand side")
    solution = list(rhs)
    rows = _upper_rows(upper_data, xdim)
    for row_id in reversed(range(xdim)):
        row = rows[row_id]
        pivot_inv = 1.0 / row[0]
        known = solution[row_id + 1 : xdim]
        residual = solution[row_id] - sum(
            coeff * value for coeff, value in zip(row[1:], known)
        )
        solution[row_id] = residual * pivot_inv
    return solution


def lu_solve(
    matrix_data: Sequence[float], rhs: Sequence[float], xdim: int
) -> list[float]:
    """Solve a dense row-major linear system directly."""
    if xdim == 2:
        _require(matrix_data, 4, "matrix data")
        _require(rhs, 2, "right-hand side")
        a00, a01, a10, a11 = matrix_data[:4]
        det_inv = 1.0 / (a00 * a11 - a01 * a10)
        solution = list(rhs)
        solution[0] = det_inv * (a11 * rhs[0] - a01 * rhs[1])
        solution[1] = det_inv * (-a10 * rhs[0] + a00 * rhs[1])
        return solution

    if xdim < 2:
        raise ValueError("system dimension must be greater than one")

    lower, upper = factorize_lu(*read_lower_upper(matrix_data, xdim), xdim)
    return upper_solve(upper, lower_solve(lower, rhs, xdim), xdim)


def upper_determinant(upper_data: Sequence[float], xdim: int) -> float:
    """Product of the diagonal of a packed upper-triangular matrix."""
    return math.prod(row[0] for row in _upper_rows(upper_data, xdim))


def _columns(rhs_matrix_cm: Sequence[float], xdim: int, zdim: int) -> list[list[float]]:
    _require(rhs_matrix_cm, xdim * zdim, "right-hand-side matrix")
    return [list(rhs_matrix_cm[k * xdim : (k + 1) * xdim]) for k in range(zdim)]


def _join(columns: list[list[float]], original: Sequence[float], xdim: int) -> list[float]:
    result = [value for column in columns for value in column]
    result.extend(original[len(columns) * xdim :])
    return result


def lower_matrix_solve(
    lower_data: Sequence[float], rhs_matrix_cm: Sequence[float], xdim: int, zdim: int
) -> list[float]:
    """Forward substitution on every column of a column-major matrix."""
    columns = [
        lower_solve(lower_data, column, xdim)
        for column in _columns(rhs_matrix_cm, xdim, zdim)
    ]
    return _join(columns, rhs_matrix_cm, xdim)


def upper_matrix_solve(
    upper_data: Sequence[float], rhs_matrix_cm: Sequence[float], xdim: int, zdim: int
) -> list[float]:
    """Backward substitution on every column of a column-major matrix."""
    columns = [
        upper_solve(upper_data, column, xdim)
        for column in _columns(rhs_matrix_cm, xdim, zdim)
    ]
    return _join(columns, rhs_matrix_cm, xdim)


def lu_matrix_solve(
    matrix_data: Sequence[float], rhs_matrix_cm: Sequence[float], xdim: int, zdim: int
) -> list[float]:
    """Solve ``A X = B`` for a column-major right-hand-side matrix ``B``."""
    if xdim < 2:
        raise ValueError("system dimension must be greater than one")
    _require(rhs_matrix_cm, xdim * zdim, "right-hand-side matrix")
    lower, upper = factorize_lu(*read_lower_upper(matrix_data, xdim), xdim)
    partial = lower_matrix_solve(lower, rhs_matrix_cm, xdim, zdim)
    return upper_matrix_solve(upper, partial, xdim, zdim)