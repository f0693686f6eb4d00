"""qphase_sse: Number-Basis Ladder Operators
----------------------------------------
Helpers building common operators in a truncated number-state basis
``|0>, ..., |dim - 1>``.
"""

from __future__ import annotations

import numpy as np

from ..core.errors import QPSConstructionError
from .banded import BandedOperator
from .factorized import FactorizedOperator

__all__ = [
    "lowering_operator",
    "raising_operator",
    "number_operator",
    "basis_state",
    "transition_operator",
]


def basis_state(dim: int, n: int) -> np.ndarray:
    """Return the number state ``|n>`` as a complex vector."""
    if not 0 <= n < dim:
        raise QPSConstructionError(f"[640] Level {n} outside basis of size {dim}")
    out = np.zeros(dim, dtype=np.complex128)
    out[n] = 1.0
    return out


def lowering_operator(dim: int) -> BandedOperator:
    """Annihilation operator ``a|n> = sqrt(n)|n-1>`` on the first superdiagonal."""
    data = np.zeros((1, dim), dtype=np.complex128)
    data[0, : dim - 1] = np.sqrt(np.arange(1, dim))
    return BandedOperator(data, 1, (dim, dim))


def raising_operator(dim: int) -> BandedOperator:
    """Creation operator ``a†|n> = sqrt(n+1)|n+1>`` on the first subdiagonal."""
    data = np.zeros((1, dim), dtype=np.complex128)
    data[0, 1:] = np.sqrt(np.arange(1, dim))
    return BandedOperator(data, -1, (dim, dim))


def number_operator(dim: int) -> BandedOperator:
    """Diagonal number operator ``n|n> = n|n>``."""
    return BandedOperator(np.arange(dim, dtype=np.complex128)[None, :], 0, (dim, dim))


def transition_operator(
    dim: int, source: int, target: int, amplitude: complex = 1.0
) -> FactorizedOperator:
    """Jump ``amplitude |target><source|`` between two number states."""
    return FactorizedOperator(
        amplitude, basis_state(dim, source), basis_state(dim, target)
    )
