"""qphase_sse: Core Protocols
----------------------------

Structural contracts shared by operators, noise ensembles, systems and
random sources. Any object implementing the required methods satisfies a
protocol; no inheritance is needed.

Protocol Hierarchy
------------------
- Tensor: linear operator that can be applied to a state vector
- RandomSource: generator of standard complex-normal draws
- Noise: stochastic Euler increment for one micro-step
- System: coherent and stochastic contributions for one micro-step
"""

from typing import Any, Protocol, runtime_checkable

__all__ = [
    "Tensor",
    "RandomSource",
    "Noise",
    "System",
]


@runtime_checkable
class Tensor(Protocol):
    """Operator-apply contract.

    ``dot(state)`` returns a new complex vector equal to the mathematical
    application of the operator. Implementations raise ``QPSShapeError`` when
    ``state`` does not match ``shape[1]``.

    Attributes
    ----------
    shape : tuple[int, int]
        ``(rows, cols)`` of the represented matrix.

    """

    @property
    def shape(self) -> tuple[int, int]: ...

    def dot(self, state: Any) -> Any: ...


@runtime_checkable
class RandomSource(Protocol):
    """Source of i.i.d. complex draws.

    Each call to ``sample()`` returns one complex number whose real and
    imaginary parts are independent standard normals. Callers scale the draw
    by ``sqrt(variance)``.
    """

    def sample(self) -> complex: ...


@runtime_checkable
class Noise(Protocol):
    """Stochastic part of one Euler–Maruyama micro-step.

    ``euler_step`` returns the resolved increment, which already includes the
    input state.
    """

    def euler_step(self, state: Any, dt: float, rng: RandomSource) -> Any: ...


@runtime_checkable
class System(Protocol):
    """Split of one micro-step into coherent and stochastic contributions."""

    def coherent(self, state: Any, t: float, dt: float) -> Any:
        """Return the deterministic Schrödinger term ``-i dt H psi``."""
        ...

    def stochastic_euler(
        self, state: Any, t: float, dt: float, rng: RandomSource
    ) -> Any:
        """Return the noise ensemble's resolved increment (includes ``psi``)."""
        ...
