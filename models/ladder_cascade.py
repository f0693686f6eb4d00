"""Driven Oscillator with Level-Resolved Decay (SSE).

This module defines a model plugin for a truncated, coherently driven
harmonic oscillator whose decay is monitored level by level: every
transition ``|n> -> |n-1>`` is its own coupling channel
``sqrt(gamma n) |n-1><n|``. The channels can be expressed densely, as banded
matrices, or in rank-one bra-ket form, all describing the same physics.
"""

from __future__ import annotations

from typing import Any, ClassVar, Literal

import numpy as np
from pydantic import BaseModel, Field
from qphase_sse.noise import FullNoise
from qphase_sse.operators import (
    BandedOperator,
    basis_state,
    lowering_operator,
    number_operator,
    raising_operator,
)
from qphase_sse.system import SSESystem


class LadderCascadeConfig(BaseModel):
    """Configuration schema for the ladder cascade model."""

    n_levels: int = Field(8, ge=2, description="Truncated basis size")
    omega: float = Field(1.0, description="Oscillator frequency")
    drive: float = Field(0.0, description="Coherent drive amplitude")
    gamma: float = Field(0.1, ge=0.0, description="Decay rate")
    representation: Literal["dense", "banded", "bra_ket"] = Field(
        "banded", description="Noise operator representation"
    )


class LadderCascadeModel:
    """Driven oscillator with per-level decay channels.

    This class implements the Plugin protocol and builds an ``SSESystem``.
    """

    name: ClassVar[str] = "ladder_cascade"
    description: ClassVar[str] = "Driven oscillator with level-resolved decay"
    config_schema: ClassVar[type[LadderCascadeConfig]] = LadderCascadeConfig

    def __init__(self, config: LadderCascadeConfig | None = None, **kwargs: Any) -> None:
        if config is None:
            config = LadderCascadeConfig(**kwargs)
        self.config = config

    @property
    def n_states(self) -> int:
        return self.config.n_levels

    def hamiltonian(self) -> BandedOperator:
        """``H = omega n + drive (a + a†)`` as a tridiagonal banded operator."""
        dim = self.n_states
        dense = self.config.omega * number_operator(dim).to_dense()
        dense += self.config.drive * (
            lowering_operator(dim).to_dense() + raising_operator(dim).to_dense()
        )
        return BandedOperator.from_dense(dense)

    def channel_amplitudes(self) -> np.ndarray:
        """``sqrt(gamma n)`` for the transitions ``n = 1 .. n_levels - 1``."""
        levels = np.arange(1, self.n_states)
        return np.sqrt(self.config.gamma * levels).astype(np.complex128)

    def bra_ket(self) -> tuple[np.ndarray, np.ndarray]:
        """Rows ``<n|`` and ``|n-1>`` for every decay channel."""
        dim = self.n_states
        bra = np.stack([basis_state(dim, n) for n in range(1, dim)])
        ket = np.stack([basis_state(dim, n - 1) for n in range(1, dim)])
        return bra, ket

    def dense_channels(self) -> np.ndarray:
        """Stack ``(n_levels - 1, dim, dim)`` of the decay channels."""
        bra, ket = self.bra_ket()
        return np.stack(
            [
                a * np.outer(k, b)
                for a, b, k in zip(self.channel_amplitudes(), bra, ket)
            ]
        )

    def noise(self) -> FullNoise:
        rep = self.config.representation
        if rep == "dense":
            return FullNoise.from_operators(self.dense_channels())
        if rep == "banded":
            return FullNoise.from_banded(
                [BandedOperator.from_dense(m) for m in self.dense_channels()]
            )
        bra, ket = self.bra_ket()
        return FullNoise.from_bra_ket(self.channel_amplitudes(), bra, ket)

    def build_system(self) -> SSESystem:
        return SSESystem(self.hamiltonian(), self.noise())

    def default_ic(self) -> np.ndarray:
        """Highest number state of the truncated basis."""
        return basis_state(self.n_states, self.n_states - 1)
