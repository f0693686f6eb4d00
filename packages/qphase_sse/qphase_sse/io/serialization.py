"""qphase_sse: System Serialization
-------------------------------
Persist an ``SSESystem`` (Hamiltonian and every noise source) to a single
``.npz`` archive and load it back losslessly.

Layout
------
Each operator is stored under a key prefix with a ``kind`` tag and the
arrays that construct it:

- ``dense``: ``matrix``
- ``banded``: ``data``, ``lower``, ``shape``
- ``transposed_banded``: the base operator's ``data``, ``lower``, ``shape``
- ``factorized``: ``amplitude``, ``bra``, ``ket``

Noise sources are stored as ``noise.<i>.operator`` and
``noise.<i>.conjugate`` so the adjoint representation survives the
round-trip unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np

from ..core.errors import QPSIOError, get_logger
from ..core.protocols import Tensor
from ..noise import FullNoise, NoiseSource
from ..operators import (
    BandedOperator,
    DenseOperator,
    FactorizedOperator,
    TransposedBandedOperator,
)
from ..system import SSESystem

__all__ = [
    "FORMAT_TAG",
    "save_system",
    "load_system",
]

FORMAT_TAG = "qphase_sse.system/1"

logger = get_logger()


def _encode_banded(prefix: str, op: BandedOperator, out: dict[str, Any]) -> None:
    out[f"{prefix}.data"] = op.data
    out[f"{prefix}.lower"] = np.int64(op.lower)
    out[f"{prefix}.shape"] = np.asarray(op.shape, dtype=np.int64)


def _encode_operator(prefix: str, op: Tensor, out: dict[str, Any]) -> None:
    if isinstance(op, DenseOperator):
        out[f"{prefix}.kind"] = np.array("dense")
        out[f"{prefix}.matrix"] = op.matrix
    elif isinstance(op, BandedOperator):
        out[f"{prefix}.kind"] = np.array("banded")
        _encode_banded(prefix, op, out)
    elif isinstance(op, TransposedBandedOperator):
        out[f"{prefix}.kind"] = np.array("transposed_banded")
        _encode_banded(prefix, op.base, out)
    elif isinstance(op, FactorizedOperator):
        out[f"{prefix}.kind"] = np.array("factorized")
        out[f"{prefix}.amplitude"] = np.complex128(op.amplitude)
        out[f"{prefix}.bra"] = op.bra
        out[f"{prefix}.ket"] = op.ket
    else:
        raise QPSIOError(
            f"[105] Cannot serialize operator of type {type(op).__name__}"
        )


def _decode_operator(prefix: str, npz: Any) -> Tensor:
    kind = str(npz[f"{prefix}.kind"])
    if kind == "dense":
        return DenseOperator(npz[f"{prefix}.matrix"])
    if kind in ("banded", "transposed_banded"):
        shape = tuple(int(s) for s in npz[f"{prefix}.shape"])
        base = BandedOperator(
            npz[f"{prefix}.data"], int(npz[f"{prefix}.lower"]), shape  # type: ignore[arg-type]
        )
        return base if kind == "banded" else base.transpose()
    if kind == "factorized":
        return FactorizedOperator(
            complex(npz[f"{prefix}.amplitude"]),
            npz[f"{prefix}.bra"],
            npz[f"{prefix}.ket"],
        )
    raise QPSIOError(f"[106] Unknown operator kind '{kind}' at {prefix}")


def save_system(path: str | Path, system: SSESystem) -> Path:
    """Write ``system`` to ``path`` (``.npz`` appended when missing).

    Raises
    ------
    QPSIOError
        - [105] An operator type has no serialized form.
        - [107] The noise ensemble is not a ``FullNoise``.
        - [103] The archive could not be written.

    """
    path = Path(path)
    if path.suffix != ".npz":
        path = path.with_suffix(".npz")
    if not isinstance(system.noise, FullNoise):
        raise QPSIOError(
            f"[107] Cannot serialize noise of type {type(system.noise).__name__}"
        )
    payload: dict[str, Any] = {"format": np.array(FORMAT_TAG)}
    _encode_operator("hamiltonian", system.hamiltonian, payload)
    payload["noise.count"] = np.int64(len(system.noise))
    for i, source in enumerate(system.noise):
        _encode_operator(f"noise.{i}.operator", source.operator, payload)
        _encode_operator(f"noise.{i}.conjugate", source.conjugate_operator, payload)

    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        np.savez_compressed(path, **payload)
    except OSError as e:
        raise QPSIOError(f"[103] Failed to save system to {path}: {e}") from e
    logger.debug(f"Saved system with {len(system.noise)} noise sources to {path}")
    return path


def load_system(path: str | Path) -> SSESystem:
    """Read a system written by ``save_system``.

    The same ``.npz`` suffix rule as ``save_system`` applies to ``path``.

    Raises
    ------
    QPSIOError
        - [102] File not found.
        - [104] The archive is unreadable or incomplete.
        - [106] Unknown operator kind.
        - [108] Unsupported format tag.

    """
    path = Path(path)
    if path.suffix != ".npz":
        path = path.with_suffix(".npz")
    if not path.exists():
        raise QPSIOError(f"[102] File not found: {path}")
    try:
        with np.load(path) as npz:
            tag = str(npz["format"])
            if tag != FORMAT_TAG:
                raise QPSIOError(f"[108] Unsupported system format '{tag}'")
            hamiltonian = _decode_operator("hamiltonian", npz)
            sources = [
                NoiseSource(
                    _decode_operator(f"noise.{i}.operator", npz),
                    _decode_operator(f"noise.{i}.conjugate", npz),
                )
                for i in range(int(npz["noise.count"]))
            ]
    except (OSError, KeyError, ValueError) as e:
        raise QPSIOError(f"[104] Failed to load system from {path}: {e}") from e
    return SSESystem(hamiltonian, FullNoise(sources))
