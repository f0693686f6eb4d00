"""Tests for system persistence."""

import numpy as np
import pytest
from qphase_sse.core.errors import QPSIOError
from qphase_sse.io import FORMAT_TAG, load_system, save_system
from qphase_sse.noise import FullNoise
from qphase_sse.operators import BandedOperator
from qphase_sse.system import SSESystem


def _assert_same_action(a, b, state):
    np.testing.assert_array_equal(a.hamiltonian.dot(state), b.hamiltonian.dot(state))
    assert len(a.noise) == len(b.noise)
    for x, y in zip(a.noise, b.noise):
        assert type(x.operator) is type(y.operator)
        assert type(x.conjugate_operator) is type(y.conjugate_operator)
        np.testing.assert_array_equal(x.operator.dot(state), y.operator.dot(state))
        np.testing.assert_array_equal(
            x.conjugate_operator.dot(state), y.conjugate_operator.dot(state)
        )


def test_round_trip_dense(tmp_path, source):
    system = SSESystem(
        source.sample_array((4, 4)),
        FullNoise.from_operators(source.sample_array((2, 4, 4))),
    )
    loaded = load_system(save_system(tmp_path / "dense", system))
    _assert_same_action(system, loaded, source.sample_array(4))


def test_round_trip_banded(tmp_path, source):
    ops = [
        BandedOperator.from_dense(np.diag(source.sample_array(4), k=1)),
        BandedOperator.from_dense(np.diag(source.sample_array(4), k=-1)),
    ]
    system = SSESystem(
        BandedOperator.from_dense(np.diag(source.sample_array(5))),
        FullNoise.from_banded(ops),
    )
    loaded = load_system(save_system(tmp_path / "banded.npz", system))
    _assert_same_action(system, loaded, source.sample_array(5))


def test_round_trip_bra_ket(tmp_path, source, random_bra_ket):
    system = SSESystem(
        source.sample_array((6, 6)),
        FullNoise.from_bra_ket(*random_bra_ket(source, 3, 6)),
    )
    loaded = load_system(save_system(tmp_path / "bra_ket.npz", system))
    _assert_same_action(system, loaded, source.sample_array(6))


def test_round_trip_without_noise(tmp_path):
    system = SSESystem(np.eye(3))
    loaded = load_system(save_system(tmp_path / "bare.npz", system))
    assert len(loaded.noise) == 0
    assert loaded.n_states == 3


def test_load_missing_file(tmp_path):
    with pytest.raises(QPSIOError):
        load_system(tmp_path / "missing.npz")


def test_load_rejects_foreign_archives(tmp_path):
    unrelated = tmp_path / "unrelated.npz"
    np.savez(unrelated, x=np.zeros(3))
    with pytest.raises(QPSIOError):
        load_system(unrelated)

    wrong_tag = tmp_path / "wrong_tag.npz"
    np.savez(wrong_tag, format=np.array("something/2"))
    with pytest.raises(QPSIOError, match="108"):
        load_system(wrong_tag)


def test_load_rejects_unknown_kind(tmp_path):
    path = tmp_path / "unknown.npz"
    np.savez(
        path,
        format=np.array(FORMAT_TAG),
        **{"hamiltonian.kind": np.array("sparse"), "noise.count": np.int64(0)},
    )
    with pytest.raises(QPSIOError, match="106"):
        load_system(path)


def test_save_and_load_accept_the_same_suffixless_path(tmp_path):
    path = tmp_path / "system"
    saved = save_system(path, SSESystem(np.eye(2)))
    loaded = load_system(path)
    assert saved.name == "system.npz"
    np.testing.assert_array_equal(loaded.hamiltonian.dot(np.ones(2)), np.ones(2))
