"""Tests for the ladder cascade model plugin."""

import numpy as np
import pytest
from models.ladder_cascade import LadderCascadeConfig, LadderCascadeModel
from pydantic import ValidationError
from qphase_sse import Engine
from qphase_sse.distribution import ComplexNormalSource
from qphase_sse.solvers import EulerSolver


def test_hamiltonian_is_tridiagonal():
    model = LadderCascadeModel(n_levels=5, omega=2.0, drive=0.5)
    h = model.hamiltonian()
    assert (h.lower, h.upper) == (-1, 1)
    dense = h.to_dense()
    np.testing.assert_allclose(np.diag(dense), 2.0 * np.arange(5))
    np.testing.assert_allclose(dense, dense.conj().T)


def test_channels_match_ladder_decay():
    model = LadderCascadeModel(n_levels=4, gamma=0.2)
    channels = model.dense_channels()
    assert channels.shape == (3, 4, 4)
    total = sum(c.conj().T @ c for c in channels)
    np.testing.assert_allclose(np.diag(total), 0.2 * np.arange(4), atol=1e-12)


@pytest.mark.parametrize("representation", ["dense", "banded", "bra_ket"])
def test_representations_share_dimension(representation):
    model = LadderCascadeModel(n_levels=6, representation=representation)
    system = model.build_system()
    assert system.n_states == 6
    assert len(system.noise) == 5


def test_representations_give_same_trajectory():
    trajectories = []
    for rep in ("dense", "banded", "bra_ket"):
        model = LadderCascadeModel(n_levels=6, drive=0.3, gamma=0.5, representation=rep)
        trajectories.append(
            EulerSolver().solve(
                model.default_ic(), model.build_system(), 15, 10, 1e-3,
                ComplexNormalSource(21),
            )
        )
    np.testing.assert_allclose(trajectories[0], trajectories[1], atol=1e-10)
    np.testing.assert_allclose(trajectories[0], trajectories[2], atol=1e-10)


def test_undriven_decay_lowers_mean_level():
    model = LadderCascadeModel(n_levels=5, gamma=1.0, representation="bra_ket")
    result = Engine({"dt": 1e-3, "n_samples": 40, "step": 50, "seed": 2}).run(
        model.build_system(), model.default_ic()
    )
    populations = np.abs(result.trajectory) ** 2
    mean_level = populations @ np.arange(5)
    assert mean_level[0] == pytest.approx(4.0)
    assert mean_level[-1] < mean_level[0]


def test_config_validation():
    with pytest.raises(ValidationError):
        LadderCascadeConfig(n_levels=1)
    with pytest.raises(ValidationError):
        LadderCascadeConfig(representation="sparse")
