"""qphase_sse: Euler-Maruyama Solver
--------------------------------
Itô Euler–Maruyama scheme for the stochastic Schrödinger equation.

Behavior
--------
One micro-step computes ``psi' = coherent(psi) + stochastic(psi)``. The
stochastic term returned by the system already contains ``psi``; the
coherent term ``-i dt H psi`` is added on top of it.

References
----------
- Kloeden, P. E., & Platen, E. (1992). Numerical Solution of Stochastic
  Differential Equations. Springer. doi:10.1007/978-3-662-12616-5
- Gambetta, J., & Wiseman, H. M. (2002). Non-Markovian stochastic
  Schrödinger equations: Generalization to real-valued noise using quantum
  measurement theory. Phys. Rev. A 66, 012108.
"""

from __future__ import annotations

import numpy as np

from ..core.protocols import RandomSource, System
from ..core.registry import register, registry
from .base import Solver

__all__ = [
    "EulerSolver",
]


@register("solver", "euler")
class EulerSolver(Solver):
    """Euler–Maruyama solver.

    Examples
    --------
    >>> from qphase_sse import ComplexNormalSource, SSESystem
    >>> system = SSESystem(np.eye(2))
    >>> traj = EulerSolver().solve(np.array([1, 0]), system, 3, 10, 0.0,
    ...                            ComplexNormalSource(0))
    >>> traj.shape
    (3, 2)

    """

    name = "euler"

    def step(
        self,
        state: np.ndarray,
        system: System,
        t: float,
        dt: float,
        rng: RandomSource,
    ) -> np.ndarray:
        out = system.coherent(state, t, dt)
        out += system.stochastic_euler(state, t, dt, rng)
        return out


registry.register("solver", "em", EulerSolver)
registry.register("solver", "euler_maruyama", EulerSolver)
