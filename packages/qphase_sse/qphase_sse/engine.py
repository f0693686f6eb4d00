"""qphase_sse: Engine
-----------------

Configuration-driven front end: resolves the solver from the registry,
seeds a random source, runs ``solve`` for one trajectory and packages the
output as an ``SSEResult``.
"""

import time as _time
from typing import Any, ClassVar

import numpy as np

from .config import SolverConfig
from .core.errors import get_logger
from .core.protocols import RandomSource, System
from .core.registry import registry
from .distribution import ComplexNormalSource
from .result import SSEResult
from .solvers.base import Solver

__all__ = ["Engine"]

logger = get_logger()


class Engine:
    """Single-trajectory SSE engine.

    Parameters
    ----------
    config : SolverConfig | dict | None
        Run configuration; dicts are validated, None uses defaults.
    solver : Solver, optional
        Solver instance overriding the one named in ``config.solver``.

    Examples
    --------
    >>> from qphase_sse import SSESystem
    >>> engine = Engine({"dt": 0.0, "n_samples": 3, "step": 1})
    >>> result = engine.run(SSESystem(np.eye(2)), np.array([1, 0]))
    >>> result.trajectory.shape
    (3, 2)

    """

    name: ClassVar[str] = "sse"
    description: ClassVar[str] = "Stochastic Schrödinger Equation Engine"
    config_schema: ClassVar[type[SolverConfig]] = SolverConfig

    def __init__(
        self,
        config: SolverConfig | dict[str, Any] | None = None,
        solver: Solver | None = None,
    ) -> None:
        self.config: SolverConfig = SolverConfig.from_raw(config)  # type: ignore[assignment]
        if solver is None:
            solver = registry.create(
                f"solver:{self.config.solver}", renormalize=self.config.renormalize
            )
        self.solver = solver

    def make_rng(self) -> ComplexNormalSource:
        return ComplexNormalSource(self.config.seed)

    def run(
        self,
        system: System,
        initial_state: Any,
        rng: RandomSource | None = None,
    ) -> SSEResult:
        """Solve one trajectory and return it with run metadata."""
        cfg = self.config
        if rng is None:
            rng = self.make_rng()
        logger.info(
            f"Solving {cfg.n_samples} samples x {cfg.step} steps (dt={cfg.dt}) "
            f"with '{cfg.solver}' on a state of shape {np.shape(initial_state)}"
        )

        def _progress(k: int, n: int) -> None:
            logger.debug(f"Recorded sample {k}/{n}")

        start = _time.monotonic()
        trajectory = self.solver.solve(
            initial_state,
            system,
            cfg.n_samples,
            cfg.step,
            cfg.dt,
            rng,
            progress_cb=_progress,
        )
        elapsed = _time.monotonic() - start
        logger.info(f"Finished {trajectory.shape[0]} samples in {elapsed:.3f}s")

        return SSEResult(
            trajectory=trajectory,
            dt=cfg.dt,
            step=cfg.step,
            meta={
                "config": cfg.model_dump(),
                "solver": type(self.solver).__name__,
                "elapsed_seconds": elapsed,
            },
        )
