"""qphase_sse: Dense Operator
-------------------------
Full ``(rows, cols)`` complex matrix satisfying the Tensor contract.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ..core.errors import QPSConstructionError, QPSShapeError

__all__ = [
    "DenseOperator",
    "check_state",
]


def check_state(state: Any, cols: int, kind: str) -> np.ndarray:
    """Return ``state`` as an array, failing unless it is 1-D of length ``cols``.

    Raises
    ------
    QPSShapeError
        - [700] State is not a vector of the operator's column dimension.

    """
    psi = np.asarray(state)
    if psi.ndim != 1 or psi.shape[0] != cols:
        raise QPSShapeError(
            f"[700] {kind} with {cols} columns cannot be applied to a state of "
            f"shape {psi.shape}"
        )
    return psi


class DenseOperator:
    """Dense complex matrix operator.

    The matrix is copied on construction and stored read-only.

    Parameters
    ----------
    matrix : array_like
        2-D complex matrix.

    Examples
    --------
    >>> op = DenseOperator([[0, 1], [1, 0]])
    >>> op.dot(np.array([1.0, 0.0])).tolist()
    [0j, (1+0j)]

    """

    def __init__(self, matrix: Any) -> None:
        m = np.array(matrix, dtype=np.complex128)
        if m.ndim != 2:
            raise QPSConstructionError(
                f"[610] Dense operator requires a 2-D matrix, got shape {m.shape}"
            )
        m.setflags(write=False)
        self._matrix = m

    @property
    def shape(self) -> tuple[int, int]:
        return self._matrix.shape  # type: ignore[return-value]

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    def dot(self, state: Any) -> np.ndarray:
        psi = check_state(state, self.shape[1], "DenseOperator")
        return self._matrix @ psi

    def conj(self) -> DenseOperator:
        return DenseOperator(self._matrix.conj())

    def transpose(self) -> DenseOperator:
        return DenseOperator(self._matrix.T)

    def adjoint(self) -> DenseOperator:
        """Conjugate transpose."""
        return DenseOperator(self._matrix.conj().T)

    def to_dense(self) -> np.ndarray:
        return self._matrix.copy()

    def __repr__(self) -> str:
        return f"DenseOperator(shape={self.shape})"
