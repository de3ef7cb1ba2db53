[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hyperlayer"
version = "0.1.0"
description = "Laminar compressible boundary-layer building blocks: similarity model equations, shooting scores, edge-flow solvers, gas physics and small dense linear algebra"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "boundary layer",
    "hypersonic",
    "compressible flow",
    "similarity solution",
    "shock relations",
    "newton solver",
    "lu factorization",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hyperlayer"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
