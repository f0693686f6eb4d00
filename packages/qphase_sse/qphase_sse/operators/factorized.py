"""qphase_sse: Factorized Operator
------------------------------
Rank-one operator ``S = a |ket><bra|`` for couplings that are literally an
outer product, e.g. transition operators between number states.

The bra is stored as the row vector that multiplies the state directly
(no implicit conjugation), so ``S · psi = a * ket * (bra · psi)``.
Conjugation and transposition are O(dim).
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ..core.errors import QPSConstructionError
from .dense import check_state

__all__ = [
    "FactorizedOperator",
]


class FactorizedOperator:
    """Operator in factorized (bra-ket) form.

    Parameters
    ----------
    amplitude : complex
        Scalar prefactor ``a``.
    bra : array_like
        1-D row vector of length ``cols``.
    ket : array_like
        1-D column vector of length ``rows``.

    Examples
    --------
    >>> op = FactorizedOperator.from_bra_ket(2.0, [0, 1], [1, 0])
    >>> op.dot(np.array([0.0, 1.0])).tolist()
    [(2+0j), 0j]

    """

    def __init__(self, amplitude: complex, bra: Any, ket: Any) -> None:
        b = np.array(bra, dtype=np.complex128)
        k = np.array(ket, dtype=np.complex128)
        if b.ndim != 1 or k.ndim != 1:
            raise QPSConstructionError(
                f"[630] Bra and ket must be 1-D, got shapes {b.shape} and {k.shape}"
            )
        b.setflags(write=False)
        k.setflags(write=False)
        self._amplitude = complex(amplitude)
        self._bra = b
        self._ket = k

    @classmethod
    def from_bra_ket(cls, amplitude: complex, bra: Any, ket: Any) -> FactorizedOperator:
        return cls(amplitude, bra, ket)

    @property
    def amplitude(self) -> complex:
        return self._amplitude

    @property
    def bra(self) -> np.ndarray:
        return self._bra

    @property
    def ket(self) -> np.ndarray:
        return self._ket

    @property
    def shape(self) -> tuple[int, int]:
        return (self._ket.shape[0], self._bra.shape[0])

    def dot(self, state: Any) -> np.ndarray:
        psi = check_state(state, self._bra.shape[0], "FactorizedOperator")
        return self._ket * (self._bra @ psi) * self._amplitude

    def conj(self) -> FactorizedOperator:
        return FactorizedOperator(
            self._amplitude.conjugate(), self._bra.conj(), self._ket.conj()
        )

    def transpose(self) -> FactorizedOperator:
        return FactorizedOperator(self._amplitude, self._ket, self._bra)

    def to_dense(self) -> np.ndarray:
        return self._amplitude * np.outer(self._ket, self._bra)

    def __repr__(self) -> str:
        return f"FactorizedOperator(shape={self.shape}, amplitude={self._amplitude})"
