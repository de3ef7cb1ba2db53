import pytest

from hyperlayer.matrix import DenseMatrix, matrix_matrix_multiply, matrix_multiply

MATRIX_3 = [4.0, 1.0, 2.0, 1.0, 5.0, 1.0, 2.0, 1.0, 6.0]


def test_solve_one_by_one():
    matrix = DenseMatrix(1)
    matrix.data = [4.0]
    assert matrix.solve([2.0]) == [0.5]


def test_solve_two_by_two_known_solution():
    matrix = DenseMatrix(2)
    matrix.data = [3.0, 1.0, 1.0, 2.0]
    # [[3, 1], [1, 2]] @ [2, 3] == [9, 8]
    solution = matrix.solve([9.0, 8.0])
    assert solution == pytest.approx([2.0, 3.0])


def test_solve_three_by_three_known_solution():
    matrix = DenseMatrix(3)
    matrix.data = list(MATRIX_3)
    # MATRIX_3 @ [1, -1, 2] == [7, -2, 13]
    solution = matrix.solve([7.0, -2.0, 13.0])
    assert solution == pytest.approx([1.0, -1.0, 2.0])


def test_solve_three_by_three_round_trip():
    matrix = DenseMatrix(3)
    matrix.data = list(MATRIX_3)
    rhs = [1.0, -2.0, 3.5]
    solution = matrix.solve(rhs)
    assert matrix_multiply(MATRIX_3, solution, 3) == pytest.approx(rhs)


def test_solve_does_not_modify_rhs():
    matrix = DenseMatrix(3)
    matrix.data = list(MATRIX_3)
    rhs = [1.0, 2.0, 3.0]
    matrix.solve(rhs)
    assert rhs == [1.0, 2.0, 3.0]


def test_determinant_before_factorisation_is_zero():
    assert DenseMatrix(3).determinant() == 0.0


def test_determinant_of_diagonal_matrix():
    matrix = DenseMatrix(3)
    matrix.data = [2.0, 0.0, 0.0, 0.0, 3.0, 0.0, 0.0, 0.0, 4.0]
    matrix.solve([1.0, 1.0, 1.0])
    assert matrix.determinant() == pytest.approx(24.0)


def test_determinant_scales_with_matrix():
    matrix = DenseMatrix(3)
    matrix.data = list(MATRIX_3)
    matrix.solve([1.0, 1.0, 1.0])
    det = matrix.determinant()
    scaled = DenseMatrix(3)
    scaled.data = [2.0 * value for value in MATRIX_3]
    scaled.solve([1.0, 1.0, 1.0])
    assert scaled.determinant() == pytest.approx(8.0 * det)


def test_matrix_solve_known_solution():
    matrix = DenseMatrix(3)
    matrix.data = list(MATRIX_3)
    # Columns [1, -1, 2] and [0, 1, 0] map to [7, -2, 13] and [1, 5, 1].
    rhs_cm = [7.0, -2.0, 13.0, 1.0, 5.0, 1.0]
    solution_cm = matrix.matrix_solve(rhs_cm, 2)
    assert solution_cm == pytest.approx([1.0, -1.0, 2.0, 0.0, 1.0, 0.0])


def test_matrix_solve_two_by_two_known_solution():
    matrix = DenseMatrix(2)
    matrix.data = [3.0, 1.0, 1.0, 2.0]
    # Columns [2, 3] and [1, 0] map to [9, 8] and [3, 1].
    rhs_cm = [9.0, 8.0, 3.0, 1.0]
    solution_cm = matrix.matrix_solve(rhs_cm, 2)
    assert solution_cm == pytest.approx([2.0, 3.0, 1.0, 0.0])


def test_matrix_multiply_identity():
    identity = [1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0]
    assert matrix_multiply(identity, [7.0, -3.0, 2.0], 3) == [7.0, -3.0, 2.0]


def test_matrix_matrix_multiply_identity_keeps_columns():
    identity = [1.0, 0.0, 0.0, 1.0]
    columns = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    assert matrix_matrix_multiply(identity, columns, 2, 3) == columns


def test_matrix_matrix_multiply_short_input():
    with pytest.raises(ValueError):
        matrix_matrix_multiply([1.0, 0.0, 0.0, 1.0], [1.0, 2.0, 3.0], 2, 2)


def test_zero_pivot_raises():
    matrix = DenseMatrix(3)
    matrix.data = [0.0, 1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0]
    with pytest.raises(ZeroDivisionError):
        matrix.solve([1.0, 2.0, 3.0])


def test_invalid_dimension():
    with pytest.raises(ValueError):
        DenseMatrix(0)