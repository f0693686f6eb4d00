"""qphase_sse: Noise Sources and Ensembles
--------------------------------------
Itô-discretized stochastic contribution of Markovian coupling operators.

Conventions
-----------
Each coupling operator ``L`` follows Gambetta & Wiseman,
Phys. Rev. A 66, 012108 (2002), with ``L -> iL`` (no effect on the final
SSE) and the rate absorbed into ``L`` (gamma = 1). For one micro-step::

    d|psi> = (<L†> dt + dW) L|psi>
             - (dt / 2) L†L|psi>
             - (dt / 2 <L†><L> + <L> dW) |psi>

The first two terms accumulate into ``EulerStep.off_diagonal`` and the last
into ``EulerStep.diagonal_amplitude``.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .core.errors import QPSConstructionError
from .core.protocols import RandomSource, Tensor
from .operators import BandedOperator, DenseOperator, FactorizedOperator

__all__ = [
    "EulerStep",
    "NoiseSource",
    "FullNoise",
]


@dataclass
class EulerStep:
    """Per-micro-step accumulator shared by every source in an ensemble."""

    diagonal_amplitude: complex
    off_diagonal: np.ndarray

    @classmethod
    def zeros(cls, n_states: int) -> EulerStep:
        return cls(0j, np.zeros(n_states, dtype=np.complex128))

    def resolve(self, state: np.ndarray) -> np.ndarray:
        # Also adds the initial state back on.
        return self.off_diagonal + (self.diagonal_amplitude + 1.0) * state


@dataclass(frozen=True)
class NoiseSource:
    """A coupling operator paired with its conjugate transpose.

    Attributes
    ----------
    operator : Tensor
        Coupling operator ``L``.
    conjugate_operator : Tensor
        ``L†`` in whatever representation applies it cheaply.

    """

    operator: Tensor
    conjugate_operator: Tensor

    @property
    def n_states(self) -> int:
        return self.operator.shape[1]

    def accumulate_euler_step(
        self, step: EulerStep, state: np.ndarray, dt: float, rng: RandomSource
    ) -> None:
        """Add this source's Itô contribution for one micro-step to ``step``."""
        dw = rng.sample() * np.sqrt(dt)

        l_state = self.operator.dot(state)
        l_dagger_l_state = self.conjugate_operator.dot(l_state)

        expectation = np.vdot(state, l_state)

        step.off_diagonal += l_state * (dw + dt * expectation.conjugate()) - (
            l_dagger_l_state * (dt * 0.5)
        )
        step.diagonal_amplitude -= (
            0.5 * (expectation * expectation.conjugate()).real * dt + expectation * dw
        )


class FullNoise:
    """Ordered ensemble of noise sources.

    Sources are processed in construction order; with a seeded random source
    this order fixes which draw each source receives.

    Parameters
    ----------
    sources : Sequence[NoiseSource]
        Sources sharing a common state dimension. Each operator must be
        square and its conjugate operator must have the transposed shape.

    Raises
    ------
    QPSConstructionError
        - [650] Sources act on different dimensions.
        - [657] A source operator is not square.
        - [658] A conjugate operator shape is not the transposed operator shape.

    """

    def __init__(self, sources: Sequence[NoiseSource] = ()) -> None:
        sources = tuple(sources)
        for n, s in enumerate(sources):
            rows, cols = s.operator.shape
            if rows != cols:
                raise QPSConstructionError(
                    f"[657] Noise operator {n} is not square: {s.operator.shape}"
                )
            if tuple(s.conjugate_operator.shape) != (cols, rows):
                raise QPSConstructionError(
                    f"[658] Conjugate of noise operator {n} has shape "
                    f"{s.conjugate_operator.shape}, expected {(cols, rows)}"
                )
        dims = {s.n_states for s in sources}
        if len(dims) > 1:
            raise QPSConstructionError(
                f"[650] Noise sources act on different dimensions: {sorted(dims)}"
            )
        self._sources = sources

    @classmethod
    def empty(cls) -> FullNoise:
        return cls(())

    @classmethod
    def from_operators(cls, operators: Any) -> FullNoise:
        """Build from a dense stack of shape ``(n_operators, dim, dim)``.

        Each adjoint is the conjugate transpose of its matrix.
        """
        ops = np.asarray(operators, dtype=np.complex128)
        if ops.ndim != 3 or ops.shape[1] != ops.shape[2]:
            raise QPSConstructionError(
                f"[651] Dense noise operators must have shape (n, dim, dim), "
                f"got {ops.shape}"
            )
        return cls(
            [
                NoiseSource(DenseOperator(o), DenseOperator(o.conj().T))
                for o in ops
            ]
        )

    @classmethod
    def from_banded(cls, operators: Sequence[BandedOperator]) -> FullNoise:
        """Build from banded operators; each adjoint is ``transpose().conj()``."""
        sources = []
        for n, o in enumerate(operators):
            if not isinstance(o, BandedOperator):
                raise QPSConstructionError(
                    f"[652] Operator {n} is {type(o).__name__}, expected BandedOperator"
                )
            if o.shape[0] != o.shape[1]:
                raise QPSConstructionError(
                    f"[653] Banded noise operator {n} is not square: {o.shape}"
                )
            sources.append(NoiseSource(o, o.transpose().conj()))
        return cls(sources)

    @classmethod
    def from_bra_ket(cls, amplitudes: Any, bra: Any, ket: Any) -> FullNoise:
        """Build rank-one sources ``a_n |ket_n><bra_n|``.

        Parameters
        ----------
        amplitudes : array_like
            Shape ``(n_operators,)``.
        bra, ket : array_like
            Shape ``(n_operators, dim)`` each.

        Each adjoint is ``conj().transpose()``.
        """
        a = np.asarray(amplitudes, dtype=np.complex128)
        b = np.asarray(bra, dtype=np.complex128)
        k = np.asarray(ket, dtype=np.complex128)
        if a.ndim != 1 or b.ndim != 2 or k.ndim != 2:
            raise QPSConstructionError(
                f"[654] Expected amplitudes (n,), bra (n, dim), ket (n, dim); got "
                f"{a.shape}, {b.shape}, {k.shape}"
            )
        if not (a.shape[0] == b.shape[0] == k.shape[0]):
            raise QPSConstructionError(
                f"[655] Operator count mismatch: {a.shape[0]} amplitudes, "
                f"{b.shape[0]} bras, {k.shape[0]} kets"
            )
        if b.shape[1] != k.shape[1]:
            raise QPSConstructionError(
                f"[656] Bra dimension {b.shape[1]} differs from ket dimension "
                f"{k.shape[1]}"
            )
        sources = []
        for amplitude, b_row, k_row in zip(a, b, k):
            operator = FactorizedOperator.from_bra_ket(amplitude, b_row, k_row)
            sources.append(NoiseSource(operator, operator.conj().transpose()))
        return cls(sources)

    @property
    def sources(self) -> tuple[NoiseSource, ...]:
        return self._sources

    @property
    def n_states(self) -> int | None:
        """Common state dimension, or None for an empty ensemble."""
        return self._sources[0].n_states if self._sources else None

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[NoiseSource]:
        return iter(self._sources)

    def euler_step(self, state: Any, dt: float, rng: RandomSource) -> np.ndarray:
        """Return the resolved stochastic increment for one micro-step.

        The result already contains ``state``; callers must not add it again.
        """
        psi = np.asarray(state)
        step = EulerStep.zeros(psi.shape[0])
        for source in self._sources:
            source.accumulate_euler_step(step, psi, dt, rng)
        return step.resolve(psi)

    def __repr__(self) -> str:
        return f"FullNoise(n_sources={len(self)}, n_states={self.n_states})"
