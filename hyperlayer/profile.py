"""Boundary-layer profile parameters, variable layouts and boundary data."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from hyperlayer.parsing import parse_values

__all__ = [
    "BL_RANK",
    "FPP_ID",
    "GP_ID",
    "FP_ID",
    "F_ID",
    "G_ID",
    "FIELD_RANK",
    "FIELD_M0_ID",
    "FIELD_M1_ID",
    "FIELD_S0_ID",
    "FIELD_S1_ID",
    "FIELD_E0_ID",
    "FIELD_E1_ID",
    "OUTPUT_RANK",
    "OUTPUT_TAU_ID",
    "OUTPUT_Q_ID",
    "OUTPUT_RO_ID",
    "OUTPUT_Y_ID",
    "OUTPUT_MU_ID",
    "OUTPUT_PRANDTL_ID",
    "OUTPUT_CHAPMANN_ID",
    "EDGE_FIELD_RANK",
    "EDGE_U_ID",
    "EDGE_H_ID",
    "EDGE_P_ID",
    "EDGE_XI_ID",
    "EDGE_DU_DXI_ID",
    "EDGE_DH_DXI_ID",
    "EDGE_DXI_DX_ID",
    "EDGE_X_ID",
    "EDGE_RO_ID",
    "EDGE_MU_ID",
    "EDGE_DATA_LABELS",
    "WallType",
    "TimeScheme",
    "SolveType",
    "DevelMode",
    "Scoring",
    "ProfileParams",
    "BoundaryData",
    "complete_indexing",
    "wall_type_from_string",
    "scheme_from_string",
    "solve_type_from_string",
]


def complete_indexing(indices: Sequence[int]) -> bool:
    """Whether ``indices`` covers every integer from 0 to ``len(indices) - 1``."""
    size = len(indices)
    covered = {index for index in indices if 0 <= index < size}
    return len(covered) == size


# State variables
BL_RANK = 5
FPP_ID = 0
GP_ID = 1
FP_ID = 2
F_ID = 3
G_ID = 4

# Field variables of the difference-differential method
FIELD_RANK = 6
FIELD_M0_ID = 0
FIELD_M1_ID = 1
FIELD_S0_ID = 2
FIELD_S1_ID = 3
FIELD_E0_ID = 4
FIELD_E1_ID = 5

# Output fields
OUTPUT_RANK = 7
OUTPUT_TAU_ID = 0
OUTPUT_Q_ID = 1
OUTPUT_RO_ID = 2
OUTPUT_Y_ID = 3
OUTPUT_MU_ID = 4
OUTPUT_PRANDTL_ID = 5
OUTPUT_CHAPMANN_ID = 6

# Edge fields
EDGE_FIELD_RANK = 10
EDGE_U_ID = 0
EDGE_H_ID = 1
EDGE_P_ID = 2
EDGE_XI_ID = 3
EDGE_DU_DXI_ID = 4
EDGE_DH_DXI_ID = 5
EDGE_DXI_DX_ID = 6
EDGE_X_ID = 7
EDGE_RO_ID = 8
EDGE_MU_ID = 9

EDGE_DATA_LABELS: tuple[tuple[str, int], ...] = (
    ("ue", EDGE_U_ID),
    ("he", EDGE_H_ID),
    ("pe", EDGE_P_ID),
    ("xi", EDGE_XI_ID),
    ("due/dxi", EDGE_DU_DXI_ID),
    ("dhe/dxi", EDGE_DH_DXI_ID),
    ("dxi/dx", EDGE_DXI_DX_ID),
    ("x", EDGE_X_ID),
    ("roe", EDGE_RO_ID),
    ("mue", EDGE_MU_ID),
)

for _layout in (
    (FPP_ID, GP_ID, FP_ID, F_ID, G_ID),
    (FIELD_M0_ID, FIELD_M1_ID, FIELD_S0_ID, FIELD_S1_ID, FIELD_E0_ID, FIELD_E1_ID),
    (
        OUTPUT_TAU_ID,
        OUTPUT_Q_ID,
        OUTPUT_RO_ID,
        OUTPUT_Y_ID,
        OUTPUT_MU_ID,
        OUTPUT_PRANDTL_ID,
        OUTPUT_CHAPMANN_ID,
    ),
    tuple(index for _, index in EDGE_DATA_LABELS),
):
    assert complete_indexing(_layout)


class WallType(Enum):
    """Thermal wall condition."""

    WALL = "wall"
    ADIABATIC = "adiab"


class TimeScheme(Enum):
    """Marching scheme along eta."""

    EXPLICIT = "explicit"
    IMPLICIT = "implicit"
    IMPLICIT_CN = "implicit_cn"

    @property
    def theta(self) -> float:
        """Implicitness weight of the scheme."""
        return {"explicit": 0.0, "implicit": 1.0, "implicit_cn": 0.5}[self.value]


class SolveType(Enum):
    """Similarity assumption used to develop a profile."""

    SELF_SIMILAR = "self_sim"
    LOCALLY_SIMILAR = "loc_sim"
    DIFFERENCE_DIFFERENTIAL = "diff_diff"


class DevelMode(Enum):
    """What a profile development computes."""

    FULL = "Full"
    PRIMAL = "Primal"
    TANGENT = "Tangent"

    def __str__(self) -> str:
        return self.value


class Scoring(Enum):
    """Shape of the outer boundary-condition score."""

    DEFAULT = "default"
    SQUARE = "square"
    SQUARE_STEADY = "square_steady"
    EXP = "exp"
    EXP_SCALED = "exp_scaled"


_WALL_STRINGS = {"adiab": WallType.ADIABATIC}
_SCHEME_STRINGS = {scheme.value: scheme for scheme in TimeScheme}
_SOLVE_TYPE_STRINGS = {solve_type.value: solve_type for solve_type in SolveType}


def wall_type_from_string(key: str) -> Optional[WallType]:
    """Wall type named by ``key``, or ``None``."""
    return _WALL_STRINGS.get(key)


def scheme_from_string(key: str) -> Optional[TimeScheme]:
    """Time scheme named by ``key``, or ``None``."""
    return _SCHEME_STRINGS.get(key)


def solve_type_from_string(key: str) -> Optional[SolveType]:
    """Solve type named by ``key``, or ``None``."""
    return _SOLVE_TYPE_STRINGS.get(key)


@dataclass
class ProfileParams:
    """Edge conditions, wall conditions and numerical settings of one profile."""

    he: float = 1.0
    pe: float = 1.0
    roe: float = 1.0
    mue: float = 1.0
    eckert: float = 1.0
    c1: float = 0.0
    c2: float = 0.0
    c3: float = 0.0
    xi: float = 0.0
    ue: float = 1.0
    due_dxi: float = 0.0
    dhe_dxi: float = 0.0

    nb_steps: int = 2000
    wall_type: WallType = WallType.WALL
    fpp0: float = 0.5
    gp0: float = 0.5
    g0: float = 0.2
    max_step: float = 1e-2

    solve_type: SolveType = SolveType.SELF_SIMILAR
    scheme: TimeScheme = TimeScheme.EXPLICIT
    scoring: Scoring = Scoring.DEFAULT
    devel_mode: DevelMode = DevelMode.FULL

    def read_edge_conditions(self, edge_field: Sequence[float], offset: int) -> None:
        """Load the edge values of the station starting at ``offset``."""
        self.ue = edge_field[offset + EDGE_U_ID]
        self.he = edge_field[offset + EDGE_H_ID]
        self.pe = edge_field[offset + EDGE_P_ID]
        self.xi = edge_field[offset + EDGE_XI_ID]
        self.due_dxi = edge_field[offset + EDGE_DU_DXI_ID]
        self.dhe_dxi = edge_field[offset + EDGE_DH_DXI_ID]

        self.c1 = 2.0 * (self.xi / self.ue) * self.due_dxi
        self.c2 = 2.0 * self.xi * self.dhe_dxi / self.he
        self.c3 = 2.0 * self.xi * (self.ue / self.he) * self.due_dxi

    def read_wall_conditions(self, wall_field: Sequence[float], offset: int) -> None:
        """Load the wall enthalpy ratio of the station at ``offset``."""
        self.g0 = wall_field[offset]

    def print_edge_values(self) -> None:
        """Print the edge conditions."""
        print(
            f"Profile parameters: -ue={self.ue:.2e}, -he={self.he:.2e}, "
            f"-pe={self.pe:.2e}, -xi={self.xi:.2e}, -due_dxi={self.due_dxi:.2e}, "
            f"-dhe_dxi={self.dhe_dxi:.2e}, -eckert={self.eckert:.2e}."
        )

    def print_ode_factors(self) -> None:
        """Print the coefficients of the profile equations."""
        if self.solve_type is SolveType.SELF_SIMILAR:
            print(f"Profile ODE factors (self-similar): eckert = {self.eckert:.2e}.")
            return
        label = (
            "locally-similar"
            if self.solve_type is SolveType.LOCALLY_SIMILAR
            else "difference-differential"
        )
        print(
            f"Profile ODE factors ({label}):\n - eckert={self.eckert:.2e}, "
            f"c1={self.c1:.2e}, c2={self.c2:.2e}, c3={self.c3:.2e}\n"
        )

    def are_valid(self) -> bool:
        """Whether the parameters describe a solvable profile; prints the reason if not."""
        if self.wall_type is WallType.ADIABATIC and self.gp0 != 0.0:
            print("Adiabatic wall yet g'(0) != 0.")
            return False

        if self.solve_type in (SolveType.LOCALLY_SIMILAR, SolveType.DIFFERENCE_DIFFERENTIAL):
            if self.ue == 0:
                print("ue = 0 singularity.")
                return False

        if self.he <= 0:
            print("h_{e} cannot be <=0 (CPG).")
            return False

        if self.g0 <= 0:
            print("g(0) = h/h_{e} cannot be <= 0.")
            return False

        if self.fpp0 < 0.0 or math.isnan(self.fpp0):
            print(f"f''(0) = {self.fpp0:.2e} (negative or nan).")
            return False

        return self.nb_steps > 1 and self.max_step > 0

    def set_initial_values(self, initial_vals: Sequence[float]) -> None:
        """Set f''(0) and, depending on the wall, g'(0) or g(0)."""
        self.fpp0 = initial_vals[0]
        if self.wall_type is WallType.WALL:
            self.gp0 = initial_vals[1]
        else:
            self.g0 = initial_vals[1]

    def parse_cmd_inputs(self, argv: Sequence[str]) -> None:
        """Update the parameters from command-line flags.

        ``-n``, ``-fpp0``, ``-gp0``, ``-g0``, ``-eta``, ``-eta_scheme``,
        ``-solve_type`` and ``-wall`` are recognised.
        """
        groups = (
            (int, {"-n": "nb_steps"}),
            (float, {"-fpp0": "fpp0", "-gp0": "gp0", "-g0": "g0", "-eta": "max_step"}),
            (scheme_from_string, {"-eta_scheme": "scheme"}),
            (solve_type_from_string, {"-solve_type": "solve_type"}),
            (wall_type_from_string, {"-wall": "wall_type"}),
        )
        for convertor, attributes in groups:
            for flag, value in parse_values(argv, attributes, convertor).items():
                setattr(self, attributes[flag], value)


class BoundaryData:
    """Edge fields (``EDGE_FIELD_RANK`` values per station) and wall values."""

    def __init__(self, edge_field: Sequence[float], wall_field: Sequence[float]) -> None:
        self.edge_field = list(edge_field)
        self.wall_field = list(wall_field)
        if not self.wall_field:
            raise ValueError("wall field must not be empty")
        if len(self.wall_field) * EDGE_FIELD_RANK != len(self.edge_field):
            raise ValueError(
                f"edge field holds {len(self.edge_field)} values, expected "
                f"{len(self.wall_field) * EDGE_FIELD_RANK}"
            )
        self.xi_dim = len(self.wall_field)

    def __repr__(self) -> str:
        return f"BoundaryData(xi_dim={self.xi_dim})"