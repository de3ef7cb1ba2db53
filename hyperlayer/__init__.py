"""Laminar compressible boundary-layer tools: model equations, scores, edge solvers, gas physics and dense linear algebra."""

__version__ = "0.1.0"