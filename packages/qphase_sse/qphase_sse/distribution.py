"""qphase_sse: Complex Gaussian Random Source
-----------------------------------------
Seedable source of standard complex-normal draws backed by a NumPy
``Generator``. Real and imaginary parts are independent standard normals
(mean 0, variance 1 each); callers scale draws by ``sqrt(variance)``.

Notes
-----
A source is not safe for concurrent use. Use ``spawn`` to derive
independent streams for parallel trajectories.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    "ComplexNormalSource",
]


class ComplexNormalSource:
    """Seeded generator of i.i.d. standard complex-normal draws.

    Parameters
    ----------
    seed : int | np.random.SeedSequence | None
        Seed for the underlying PCG64 stream; ``None`` draws fresh entropy.

    Examples
    --------
    >>> src = ComplexNormalSource(0)
    >>> isinstance(src.sample(), complex)
    True
    >>> src.sample_array((2, 3)).shape
    (2, 3)

    """

    def __init__(self, seed: int | np.random.SeedSequence | None = None) -> None:
        if isinstance(seed, np.random.SeedSequence):
            self._seed_seq = seed
        else:
            self._seed_seq = np.random.SeedSequence(seed)
        self._gen = np.random.Generator(np.random.PCG64(self._seed_seq))

    def generator(self) -> np.random.Generator:
        return self._gen

    def sample(self) -> complex:
        """Draw one complex value."""
        re, im = self._gen.standard_normal(2)
        return complex(re, im)

    def sample_array(self, shape: int | tuple[int, ...]) -> np.ndarray:
        """Draw an array of complex values with the given shape."""
        re = self._gen.standard_normal(shape)
        im = self._gen.standard_normal(shape)
        return (re + 1j * im).astype(np.complex128, copy=False)

    def spawn(self, n: int) -> list[ComplexNormalSource]:
        """Derive ``n`` statistically independent child sources."""
        return [ComplexNormalSource(child) for child in self._seed_seq.spawn(n)]
