"""qphase_sse: Simulation Result
-----------------------------
Container for one sampled SSE trajectory, with ``.npz`` persistence.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from .core.errors import QPSIOError

__all__ = [
    "SSEResult",
]


@dataclass
class SSEResult:
    """Container for a sampled trajectory.

    Attributes
    ----------
    trajectory : np.ndarray
        Complex array of shape ``(n_samples, n_states)``.
    dt : float
        Micro-step size used by the solver.
    step : int
        Micro-steps between consecutive rows.
    meta : dict[str, Any]
        JSON-serializable metadata (config, solver name, ...).

    """

    trajectory: np.ndarray
    dt: float
    step: int
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def n_samples(self) -> int:
        return self.trajectory.shape[0]

    @property
    def n_states(self) -> int:
        return self.trajectory.shape[1]

    @property
    def times(self) -> np.ndarray:
        """Sample times ``k * step * dt``."""
        return np.arange(self.n_samples) * (self.step * self.dt)

    def norms(self) -> np.ndarray:
        """L2 norm of each recorded state."""
        return np.linalg.norm(self.trajectory, axis=1)

    def save(self, path: str | Path) -> Path:
        """Save to ``path`` (``.npz`` appended when missing) and return the path."""
        path = Path(path)
        if path.suffix != ".npz":
            path = path.with_suffix(".npz")
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            np.savez_compressed(
                path,
                trajectory=np.asarray(self.trajectory),
                dt=np.float64(self.dt),
                step=np.int64(self.step),
                meta=np.array(json.dumps(self.meta)),
            )
        except (OSError, TypeError) as e:
            raise QPSIOError(f"[103] Failed to save SSEResult to {path}: {e}") from e
        return path

    @classmethod
    def load(cls, path: str | Path) -> "SSEResult":
        path = Path(path)
        if path.suffix != ".npz":
            path = path.with_suffix(".npz")
        if not path.exists():
            raise QPSIOError(f"[102] File not found: {path}")
        try:
            with np.load(path) as npz:
                return cls(
                    trajectory=npz["trajectory"],
                    dt=float(npz["dt"]),
                    step=int(npz["step"]),
                    meta=json.loads(str(npz["meta"])),
                )
        except (OSError, KeyError, ValueError) as e:
            raise QPSIOError(f"[104] Failed to load SSEResult from {path}: {e}") from e
