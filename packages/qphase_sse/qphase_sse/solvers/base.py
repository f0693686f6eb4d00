"""qphase_sse: Solver Base
----------------------

Multi-scale time stepping shared by all stochastic solvers.

Time Scales
-----------
- step: one micro-step of size ``dt`` (implemented by subclasses)
- integrate: ``n_step`` micro-steps, returning only the final state
- solve: ``n`` samples recorded every ``step`` micro-steps, with the state
  renormalized after each sample interval

Solvers hold no state between calls; the random source is passed in
explicitly so seeded runs are reproducible and concurrent trajectories can
use independent streams.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import numpy as np

from ..core.errors import QPSModelError, QPSShapeError
from ..core.protocols import RandomSource, System

__all__ = [
    "Solver",
    "ProgressCallback",
]

ProgressCallback = Callable[[int, int], None]
"""Called as ``cb(n_recorded, n_total)`` after each recorded sample."""


class Solver(ABC):
    """Base class for fixed-step stochastic solvers.

    Parameters
    ----------
    renormalize : bool, default True
        Rescale the state to unit L2 norm after every sample interval in
        ``solve``.

    """

    name: str = "solver"

    def __init__(self, renormalize: bool = True) -> None:
        self.renormalize_samples = bool(renormalize)

    @abstractmethod
    def step(
        self,
        state: np.ndarray,
        system: System,
        t: float,
        dt: float,
        rng: RandomSource,
    ) -> np.ndarray:
        """Advance ``state`` by one micro-step and return the new state."""
        ...

    def integrate(
        self,
        state: Any,
        system: System,
        t_start: float,
        n_step: int,
        dt: float,
        rng: RandomSource,
    ) -> np.ndarray:
        """Apply ``step`` exactly ``n_step`` times and return the final state."""
        out = np.array(state, dtype=np.complex128)
        current_t = float(t_start)
        for _ in range(n_step):
            out = self.step(out, system, current_t, dt, rng)
            current_t += dt
        return out

    @staticmethod
    def renormalize(state: np.ndarray) -> np.ndarray:
        """Return ``state`` divided by its L2 norm.

        This is a provisional physical choice rather than part of the SDE.

        Raises
        ------
        QPSModelError
            - [670] The norm is zero or not finite.

        """
        norm = float(np.linalg.norm(state))
        if norm == 0.0 or not np.isfinite(norm):
            raise QPSModelError(f"[670] Cannot renormalize a state with norm {norm}")
        return state / complex(norm, 0.0)

    def solve(
        self,
        initial_state: Any,
        system: System,
        n: int,
        step: int,
        dt: float,
        rng: RandomSource,
        *,
        progress_cb: ProgressCallback | None = None,
    ) -> np.ndarray:
        """Sample a trajectory of ``n`` states, one every ``step`` micro-steps.

        Parameters
        ----------
        initial_state : array_like
            1-D complex state; recorded unmodified as row 0.
        system : System
            System providing coherent and stochastic terms.
        n : int
            Number of rows to return. ``n <= 0`` yields an empty
            ``(0, dim)`` trajectory.
        step : int
            Micro-steps per sample interval.
        dt : float
            Micro-step size.
        rng : RandomSource
            Source of complex-normal draws.
        progress_cb : ProgressCallback, optional
            Called after each recorded row.

        Returns
        -------
        np.ndarray
            Read-only array of shape ``(n, dim)``.

        Raises
        ------
        QPSShapeError
            - [701] ``initial_state`` is not 1-D.
        QPSModelError
            - [670] The state norm vanished while renormalizing.

        """
        psi0 = np.asarray(initial_state, dtype=np.complex128)
        if psi0.ndim != 1:
            raise QPSShapeError(
                f"[701] Initial state must be 1-D, got shape {psi0.shape}"
            )
        n = max(int(n), 0)
        out = np.empty((n, psi0.shape[0]), dtype=np.complex128)
        if n > 0:
            current = psi0.copy()
            current_t = 0.0
            for k in range(n - 1):
                out[k] = current
                if progress_cb is not None:
                    progress_cb(k + 1, n)
                current = self.integrate(current, system, current_t, step, dt, rng)
                current_t += dt * step
                if self.renormalize_samples:
                    current = self.renormalize(current)
            out[n - 1] = current
            if progress_cb is not None:
                progress_cb(n, n)
        out.setflags(write=False)
        return out
