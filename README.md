# hyperlayer

Building blocks for laminar compressible boundary layers along a body, in
the similarity (f, g) formulation. The package needs Python 3.10 or newer and
depends only on the standard library.

## Modules

- `hyperlayer.linalg`: dense LU factorisation without pivoting, working on
  packed lower and upper storage. It provides forward and backward
  substitution (`lower_solve`, `upper_solve`), the column-by-column forms
  `lower_matrix_solve` and `upper_matrix_solve`, the full solvers `lu_solve`
  and `lu_matrix_solve`, `upper_determinant` and `vector_norm`. Matrices are
  flat row-major lists. Right-hand-side matrices are flat column-major lists.
  `factorize_lu` issues a `RuntimeWarning` when the determinant comes out
  zero.
- `hyperlayer.matrix`: contains `DenseMatrix`, which has `data`, `solve`,
  `matrix_solve` and `determinant`, along with `matrix_multiply` and
  `matrix_matrix_multiply`.
- `hyperlayer.newton`: `newton_solve_direct` is a damped Newton solver that
  uses a backtracking line search and a step-limit callback. You configure it
  with `NewtonParams` (`rtol`, `max_iter`, `max_ls_iter`, `verbose`). It
  returns a `NewtonResult` with the fields `state`, `residual_norm`,
  `converged` and `iterations`.
- `hyperlayer.gas`: calorically perfect air. It covers `air_cpg_ro`,
  `air_cpg_dro_dh` and `air_cpg_cp`, the Sutherland laws `air_visc` and
  `air_cond`, and their gradients `air_visc_grad` and `air_cond_grad`.
- `hyperlayer.flow_relations`: `compute_shock_ratios_cpg` gives the shock
  jump ratios. The shock is normal by default, or oblique when you pass an
  angle `beta`. `compute_stagnation_ratios` gives the isentropic stagnation
  ratios. The results come back as the frozen dataclasses `ShockRatios` and
  `StagnationRatios`.
- `hyperlayer.atmosphere`:
  - `earth_pt(altitude_km)` returns `(temperature, pressure)`.
  - `set_entry_conditions` fills `pe`, `ue` and `he` of a `ProfileParams`.
  - `parse_entry_params` reads `-altitude` and `-mach` from an argument list.
- `hyperlayer.edge_solvers`: march edge density and velocity from a wall
  pressure distribution. Three schemes are available:
  - `compute_from_pressure_be` (backward Euler);
  - `compute_from_pressure_cn` (Crank–Nicolson);
  - `compute_from_pressure_constant_density`.

  Each returns an `EdgeSolution` with `density`, `velocity`, `solve_size` and
  `complete`. When a station fails, the march stops there and `solve_size`
  marks how far it got.
- `hyperlayer.profile`: this module defines the following.
  - The index layouts of the state, field, output and edge variables
    (`BL_RANK`, `FPP_ID`, …, `EDGE_FIELD_RANK`, `EDGE_DATA_LABELS`).
  - The enums `WallType`, `TimeScheme`, `SolveType`, `DevelMode` and
    `Scoring`, and the string lookups for them.
  - `ProfileParams`, which reads edge and wall conditions, checks validity
    and parses the flags `-n`, `-fpp0`, `-gp0`, `-g0`, `-eta`,
    `-eta_scheme`, `-solve_type` and `-wall`.
  - `BoundaryData`, which holds the edge and wall fields of all stations.
- `hyperlayer.model`: the default constant-property model. It provides:
  - the wall initialisation and the sensitivity initialisation;
  - step limiting;
  - right-hand sides and their Jacobians for the self-similar,
    locally-similar and difference-differential forms;
  - output fields.

  These are bundled in the `BLModel` dataclass as `DEFAULT_MODEL`.
- `hyperlayer.scores`: the outer boundary-condition scores (default, square,
  square-steady, exp, exp-scaled) and their Jacobians with respect to the
  two shooting parameters. `compute_score` and `compute_score_jacobian` pick
  the form given by `ProfileParams.scoring`.
- `hyperlayer.cases`: edge and wall data for reference cases.
  - `gen_flat_plate_constant` and `gen_chapmann_rubesin_flat_plate`
    generate flat plates.
  - `gen_flat_nosed_cylinder` builds a flat-nosed body behind a normal shock
    from scaled columns.
  - `gen_flat_nosed_cylinder_from_csv` reads those columns from a CSV file.
- `hyperlayer.csv_io`: `get_dims_csv` and `read_csv` (which returns
  columns), `write_csv_columns`, and `write_csv_records`, which writes
  interleaved records and can select fields.
- `hyperlayer.parsing`: `parse_values`, `parse_options` and `parse_usage`
  for flag-style argument lists. Malformed flags raise `ParseError`.

## Example

```python
from hyperlayer.linalg import lu_solve
from hyperlayer.flow_relations import compute_shock_ratios_cpg
from hyperlayer.cases import gen_flat_plate_constant
from hyperlayer.profile import ProfileParams, EDGE_FIELD_RANK
from hyperlayer.model import compute_rhs_default, initialize_default

x = lu_solve([4.0, 1.0, 2.0, 3.0], [1.0, 2.0], 2)   # [0.1, 0.6]

ratios = compute_shock_ratios_cpg(2.0)
print(ratios.pressure, ratios.density, ratios.velocity)

data = gen_flat_plate_constant(1.0, 1.0, 1.0, 0.2, 10)
params = ProfileParams()
params.read_edge_conditions(data.edge_field, 3 * EDGE_FIELD_RANK)
params.read_wall_conditions(data.wall_field, 3)

wall_state = initialize_default(params)
rhs, step_limit = compute_rhs_default(wall_state, 0, [], 0, params)
```

## What the package does not do

- There is no profile integrator along eta.
- There is no shooting search that combines the model, the scores and the
  Newton solver into a developed profile or a full two-dimensional boundary
  layer. The pieces are provided, and assembling them is left to the caller.
- The package installs no commands.
- Boundary data lives in memory or in CSV files. Nothing is written to or
  read from HDF5.

## Tests

```
pip install -e .[test]
pytest
```