"""Pytest configuration for qphase_sse tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add qphase_sse and the repository root (for models/) to path
root = Path(__file__).parents[2]
sys.path.insert(0, str(root / "packages" / "qphase_sse"))
sys.path.insert(0, str(root))

from qphase_sse.distribution import ComplexNormalSource  # noqa: E402
from qphase_sse.noise import FullNoise  # noqa: E402
from qphase_sse.system import SSESystem  # noqa: E402


class FixedSource:
    """Random source replaying a fixed list of draws."""

    def __init__(self, values):
        self.values = [complex(v) for v in values]
        self.calls = 0

    def sample(self) -> complex:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def source():
    return ComplexNormalSource(1234)


@pytest.fixture
def fixed_source():
    return FixedSource


def _random_bra_ket(source, n_operators, n_states, scale=0.3):
    amplitudes = source.sample_array(n_operators) * scale
    bra = source.sample_array((n_operators, n_states))
    ket = source.sample_array((n_operators, n_states))
    return amplitudes, bra, ket


def _dense_from_bra_ket(amplitudes, bra, ket):
    return np.stack([a * np.outer(k, b) for a, b, k in zip(amplitudes, bra, ket)])


@pytest.fixture
def random_bra_ket():
    return _random_bra_ket


@pytest.fixture
def dense_from_bra_ket():
    return _dense_from_bra_ket


@pytest.fixture
def initial_state():
    return _initial_state


def _initial_state(n_states):
    state = np.zeros(n_states, dtype=np.complex128)
    state[0] = 1.0
    return state


@pytest.fixture
def random_system(source):
    def _build(n_operators, n_states, diagonal=False):
        if diagonal:
            hamiltonian = np.diag(source.sample_array(n_states))
        else:
            hamiltonian = source.sample_array((n_states, n_states))
        noise = FullNoise.from_bra_ket(*_random_bra_ket(source, n_operators, n_states))
        return SSESystem(hamiltonian, noise)

    return _build
