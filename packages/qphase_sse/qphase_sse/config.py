"""qphase_sse: Configuration
-------------------------
Pydantic models for run configuration and a YAML loader.

Public API
----------
``PluginConfigBase`` : Base model with ``from_raw`` normalization
``SolverConfig`` : Time grid, seed and solver selection for one trajectory
``load_yaml_file`` : Read a YAML mapping with ruamel.yaml
``load_config`` : Read and validate a ``SolverConfig`` from YAML
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .core.errors import QPSConfigError, QPSIOError

__all__ = [
    "PluginConfigBase",
    "SolverConfig",
    "load_yaml_file",
    "load_config",
]


class PluginConfigBase(BaseModel):
    """Base configuration class.

    Extra fields are rejected so typos in YAML files fail loudly.
    """

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_raw(cls, raw: Any | None = None) -> PluginConfigBase:
        """Normalize ``raw`` into an instance of this config class.

        Accepts None (defaults), an existing instance (returned as-is) or a
        mapping (validated).

        Raises
        ------
        QPSConfigError
            - [500] Validation failed.

        """
        if raw is None:
            raw = {}
        if isinstance(raw, cls):
            return raw
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise QPSConfigError(f"[500] Invalid {cls.__name__}: {e}") from e


class SolverConfig(PluginConfigBase):
    """Configuration of a single-trajectory solve."""

    dt: float = Field(1e-3, ge=0.0, description="Micro-step size")
    n_samples: int = Field(100, ge=0, description="Number of recorded rows")
    step: int = Field(10, ge=0, description="Micro-steps per recorded row")
    seed: int | None = Field(None, description="Random seed")
    renormalize: bool = Field(
        True, description="Renormalize the state after every sample interval"
    )
    solver: str = Field("euler", description="Registered solver name")


def load_yaml_file(path: str | Path) -> dict[str, Any]:
    """Load a YAML mapping.

    Raises
    ------
    QPSIOError
        - [102] File not found.
    QPSConfigError
        - [501] Malformed YAML or a non-mapping top level.

    """
    path = Path(path)
    if not path.exists():
        raise QPSIOError(f"[102] File not found: {path}")
    yaml = YAML(typ="safe")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.load(f)
    except YAMLError as e:
        raise QPSConfigError(f"[501] Failed to parse YAML file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise QPSConfigError(f"[501] Expected a mapping at the top of {path}")
    return dict(data)


def load_config(path: str | Path) -> SolverConfig:
    """Read a ``SolverConfig`` from a YAML file."""
    return SolverConfig.from_raw(load_yaml_file(path))  # type: ignore[return-value]
