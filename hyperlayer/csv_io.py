"""Comma-separated numeric tables, read and written column by column."""

from __future__ import annotations

from os import PathLike
from typing import Sequence, Union

__all__ = ["get_dims_csv", "read_csv", "write_csv_columns", "write_csv_records"]

PathType = Union[str, "PathLike[str]"]


def _split_cells(line: str) -> list[str]:
    cells = line.split(",")
    if cells[-1] == "":
        cells.pop()
    return cells


def _read_rows(file_path: PathType) -> list[list[str]]:
    with open(file_path, encoding="utf-8") as file:
        rows = [_split_cells(line.rstrip("\n")) for line in file]

    if not rows:
        raise ValueError(f"{file_path}: file holds no rows")
    nb_cols = len(rows[0])
    if nb_cols == 0:
        raise ValueError(f"{file_path}: first row holds no columns")
    for row_id, row in enumerate(rows[1:], start=2):
        if len(row) != nb_cols:
            raise ValueError(
                f"{file_path}: row {row_id} holds {len(row)} columns, expected {nb_cols}"
            )
    return rows


def get_dims_csv(file_path: PathType) -> tuple[int, int]:
    """Return ``(nb_rows, nb_cols)``, checking that every row has as many columns."""
    rows = _read_rows(file_path)
    return len(rows), len(rows[0])


def read_csv(file_path: PathType) -> list[list[float]]:
    """Read a numeric table and return its columns."""
    rows = _read_rows(file_path)
    return [[float(cell) for cell in column] for column in zip(*rows)]


def _format_row(values: Sequence[float]) -> str:
    return ", ".join(f"{value:.6e}" for value in values) + "\n"


def write_csv_columns(file_path: PathType, data_columns: Sequence[Sequence[float]]) -> None:
    """Write equally long columns as a table in scientific notation."""
    if not data_columns:
        raise ValueError("at least one column is required")
    nb_rows = len(data_columns[0])
    if any(len(column) != nb_rows for column in data_columns):
        raise ValueError("all columns must have the same length")

    with open(file_path, "w", encoding="utf-8", newline="") as file:
        file.writelines(_format_row(row) for row in zip(*data_columns))


def write_csv_records(
    file_path: PathType,
    data: Sequence[float],
    rank: int,
    nb_points: int,
    var_indices: Sequence[int] | None = None,
) -> None:
    """Write ``nb_points`` interleaved records of ``rank`` values each.

    ``var_indices`` selects and orders the fields written; all are written
    when it is omitted.
    """
    if rank <= 0:
        raise ValueError("rank must be positive")
    if len(data) < rank * nb_points:
        raise ValueError(f"data holds {len(data)} values, at least {rank * nb_points} required")

    indices = list(range(rank)) if var_indices is None else list(var_indices)
    if not indices:
        raise ValueError("at least one field index is required")
    if len(indices) > rank:
        raise ValueError("more field indices than the rank")
    if any(not 0 <= index < rank for index in indices):
        raise ValueError("field index out of range")

    records = (data[point * rank : (point + 1) * rank] for point in range(nb_points))
    with open(file_path, "w", encoding="utf-8", newline="") as file:
        file.writelines(_format_row([record[index] for index in indices]) for record in records)