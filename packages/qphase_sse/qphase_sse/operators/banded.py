"""qphase_sse: Banded Operators
---------------------------
Sparse matrices that store only a contiguous range of diagonals.

Storage
-------
A ``(rows, cols)`` matrix ``M`` with diagonal offsets ``lower..upper``
(``offset = col - row``) is held as ``data`` of shape
``(upper - lower + 1, rows)`` where ``data[k, i] = M[i, i + lower + k]``.
Slots whose column falls outside ``[0, cols)`` are padding and are never
read.

``BandedOperator.transpose()`` returns a ``TransposedBandedOperator`` that
shares the same ``data`` array and applies ``Mᵗ``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import numpy as np

from ..core.errors import QPSConstructionError
from .dense import check_state

__all__ = [
    "BandedOperator",
    "TransposedBandedOperator",
]


class BandedOperator:
    """Banded sparse operator.

    Parameters
    ----------
    data : array_like
        Band storage of shape ``(n_diagonals, rows)``.
    lower : int
        Offset (``col - row``) of the first stored diagonal.
    shape : tuple[int, int]
        ``(rows, cols)`` of the represented matrix.

    Examples
    --------
    >>> m = np.array([[1, 2, 0], [0, 3, 4], [0, 0, 5]])
    >>> op = BandedOperator.from_dense(m)
    >>> (op.lower, op.upper)
    (0, 1)
    >>> np.allclose(op.dot(np.ones(3)), m @ np.ones(3))
    True

    """

    def __init__(self, data: Any, lower: int, shape: tuple[int, int]) -> None:
        d = np.array(data, dtype=np.complex128)
        rows, cols = (int(s) for s in shape)
        if d.ndim != 2 or d.shape[1] != rows or d.shape[0] == 0:
            raise QPSConstructionError(
                f"[620] Band storage must have shape (n_diagonals >= 1, {rows}), "
                f"got {d.shape}"
            )
        d.setflags(write=False)
        self._data = d
        self._lower = int(lower)
        self._shape = (rows, cols)

    @classmethod
    def from_dense(cls, matrix: Any, tol: float = 0.0) -> BandedOperator:
        """Build from a dense matrix.

        The band is the smallest contiguous range of diagonals containing
        every entry with ``|m| > tol``; entries inside the band are copied
        exactly.
        """
        m = np.asarray(matrix, dtype=np.complex128)
        if m.ndim != 2:
            raise QPSConstructionError(
                f"[621] Banded operator requires a 2-D matrix, got shape {m.shape}"
            )
        rows, cols = m.shape
        r_idx, c_idx = np.nonzero(np.abs(m) > tol)
        if r_idx.size == 0:
            lower = upper = 0
        else:
            offsets = c_idx - r_idx
            lower, upper = int(offsets.min()), int(offsets.max())

        data = np.zeros((upper - lower + 1, rows), dtype=np.complex128)
        i = np.arange(rows)
        for k, offset in enumerate(range(lower, upper + 1)):
            j = i + offset
            valid = (j >= 0) & (j < cols)
            data[k, i[valid]] = m[i[valid], j[valid]]
        return cls(data, lower, (rows, cols))

    @property
    def shape(self) -> tuple[int, int]:
        return self._shape

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def lower(self) -> int:
        return self._lower

    @property
    def upper(self) -> int:
        return self._lower + self._data.shape[0] - 1

    def _diagonals(self) -> Iterator[tuple[np.ndarray, int, int, int]]:
        # (band row, offset, first row, end row) over the in-range part of each diagonal
        rows, cols = self._shape
        for k in range(self._data.shape[0]):
            offset = self._lower + k
            start = max(0, -offset)
            end = min(rows, cols - offset)
            if start < end:
                yield self._data[k], offset, start, end

    def dot(self, state: Any) -> np.ndarray:
        psi = check_state(state, self._shape[1], "BandedOperator")
        out = np.zeros(self._shape[0], dtype=np.complex128)
        for band, offset, start, end in self._diagonals():
            out[start:end] += band[start:end] * psi[start + offset : end + offset]
        return out

    def transpose(self) -> TransposedBandedOperator:
        return TransposedBandedOperator(self)

    def conj(self) -> BandedOperator:
        return BandedOperator(self._data.conj(), self._lower, self._shape)

    def to_dense(self) -> np.ndarray:
        out = np.zeros(self._shape, dtype=np.complex128)
        for band, offset, start, end in self._diagonals():
            i = np.arange(start, end)
            out[i, i + offset] = band[start:end]
        return out

    def __repr__(self) -> str:
        return (
            f"BandedOperator(shape={self._shape}, lower={self.lower}, "
            f"upper={self.upper})"
        )


class TransposedBandedOperator:
    """Transposed view of a ``BandedOperator``.

    Shares the parent's band storage; ``dot`` computes ``Mᵗ · v``.
    """

    def __init__(self, base: BandedOperator) -> None:
        self._base = base

    @property
    def base(self) -> BandedOperator:
        return self._base

    @property
    def shape(self) -> tuple[int, int]:
        rows, cols = self._base.shape
        return (cols, rows)

    def dot(self, state: Any) -> np.ndarray:
        rows, cols = self._base.shape
        psi = check_state(state, rows, "TransposedBandedOperator")
        out = np.zeros(cols, dtype=np.complex128)
        for band, offset, start, end in self._base._diagonals():
            out[start + offset : end + offset] += band[start:end] * psi[start:end]
        return out

    def transpose(self) -> BandedOperator:
        return self._base

    def conj(self) -> TransposedBandedOperator:
        return TransposedBandedOperator(self._base.conj())

    def to_dense(self) -> np.ndarray:
        return self._base.to_dense().T

    def __repr__(self) -> str:
        return f"TransposedBandedOperator(shape={self.shape})"
