"""qphase_sse: Operators Subpackage
-------------------------------
Interchangeable representations of linear operators, all satisfying the
``Tensor`` apply contract:

- ``DenseOperator``: full complex matrix
- ``BandedOperator`` / ``TransposedBandedOperator``: band-limited sparse
  storage and its zero-copy transposed view
- ``FactorizedOperator``: rank-one ``a |ket><bra|`` form
"""

from typing import Any

import numpy as np

from ..core.errors import QPSConstructionError
from ..core.protocols import Tensor
from .banded import BandedOperator, TransposedBandedOperator
from .dense import DenseOperator, check_state
from .factorized import FactorizedOperator
from .ladder import (
    basis_state,
    lowering_operator,
    number_operator,
    raising_operator,
    transition_operator,
)

__all__ = [
    "DenseOperator",
    "BandedOperator",
    "TransposedBandedOperator",
    "FactorizedOperator",
    "as_operator",
    "check_state",
    "basis_state",
    "lowering_operator",
    "raising_operator",
    "number_operator",
    "transition_operator",
]


def as_operator(obj: Any) -> Tensor:
    """Wrap a raw 2-D array into a ``DenseOperator``; pass operators through."""
    if isinstance(obj, Tensor) and not isinstance(obj, np.ndarray):
        return obj
    if isinstance(obj, (np.ndarray, list, tuple)):
        return DenseOperator(obj)
    raise QPSConstructionError(
        f"[611] Cannot interpret {type(obj).__name__} as an operator"
    )
