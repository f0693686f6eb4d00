"""Stochastic Schrödinger Equation Solver
=====================================

Euler–Maruyama integration of the stochastic Schrödinger equation for open
quantum systems coupled to a Markovian bath, with dense, banded and
rank-one factorized coupling operators.

Public API
----------
Engine
    Configuration-driven single-trajectory runner.
EulerSolver
    Euler–Maruyama solver (``step``, ``integrate``, ``solve``).
SSESystem
    Hamiltonian plus noise ensemble.
FullNoise
    Ordered noise ensemble with dense, banded and bra-ket factories.
ComplexNormalSource
    Seeded complex Gaussian random source.
"""

# Importing the solvers subpackage registers the built-in solvers.
from . import solvers as _qps_solvers  # noqa: F401
from .config import SolverConfig, load_config
from .distribution import ComplexNormalSource
from .engine import Engine
from .noise import EulerStep, FullNoise, NoiseSource
from .operators import (
    BandedOperator,
    DenseOperator,
    FactorizedOperator,
    TransposedBandedOperator,
)
from .result import SSEResult
from .solvers import EulerSolver, Solver
from .system import SSESystem

__version__ = "0.1.0"

__all__ = [
    "Engine",
    "EulerSolver",
    "Solver",
    "SSESystem",
    "FullNoise",
    "NoiseSource",
    "EulerStep",
    "DenseOperator",
    "BandedOperator",
    "TransposedBandedOperator",
    "FactorizedOperator",
    "ComplexNormalSource",
    "SolverConfig",
    "load_config",
    "SSEResult",
    "__version__",
]
