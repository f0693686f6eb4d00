"""qphase_sse: SSE System
---------------------
Couples a Hamiltonian with a noise ensemble and splits one micro-step into
its coherent and stochastic contributions.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from .core.errors import QPSConstructionError
from .core.protocols import Noise, RandomSource, Tensor
from .noise import FullNoise
from .operators import as_operator

__all__ = [
    "SSESystem",
]


class SSESystem:
    """Stochastic Schrödinger equation system.

    Parameters
    ----------
    hamiltonian : Tensor or array_like
        Square Hamiltonian; raw 2-D arrays are wrapped in ``DenseOperator``.
    noise : Noise, optional
        Noise ensemble. Defaults to an empty ``FullNoise``.

    Raises
    ------
    QPSConstructionError
        - [660] Hamiltonian is not square.
        - [661] Hamiltonian and noise act on different dimensions.

    """

    def __init__(self, hamiltonian: Any, noise: Noise | None = None) -> None:
        h = as_operator(hamiltonian)
        rows, cols = h.shape
        if rows != cols:
            raise QPSConstructionError(
                f"[660] Hamiltonian must be square, got shape {h.shape}"
            )
        noise = FullNoise.empty() if noise is None else noise
        noise_dim = getattr(noise, "n_states", None)
        if noise_dim is not None and noise_dim != rows:
            raise QPSConstructionError(
                f"[661] Hamiltonian dimension {rows} does not match noise "
                f"dimension {noise_dim}"
            )
        self._hamiltonian: Tensor = h
        self._noise = noise

    @property
    def hamiltonian(self) -> Tensor:
        return self._hamiltonian

    @property
    def noise(self) -> Noise:
        return self._noise

    @property
    def n_states(self) -> int:
        return self._hamiltonian.shape[0]

    def coherent(self, state: Any, t: float, dt: float) -> np.ndarray:
        # H is time independent for now; t is kept for time-dependent systems.
        return self._hamiltonian.dot(state) * complex(0.0, -dt)

    def stochastic_euler(
        self, state: Any, t: float, dt: float, rng: RandomSource
    ) -> np.ndarray:
        return self._noise.euler_step(state, dt, rng)

    def __repr__(self) -> str:
        return f"SSESystem(n_states={self.n_states}, noise={self._noise!r})"
