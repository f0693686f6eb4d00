"""Tests for noise sources and ensembles."""

import numpy as np
import pytest
from qphase_sse.core.errors import QPSConstructionError
from qphase_sse.distribution import ComplexNormalSource
from qphase_sse.noise import EulerStep, FullNoise, NoiseSource
from qphase_sse.operators import (
    BandedOperator,
    DenseOperator,
    FactorizedOperator,
    TransposedBandedOperator,
)


def _expected_increment(operators, state, dt, draws):
    """Direct transcription of the Itô update for dense operators."""
    off_diagonal = np.zeros_like(state)
    diagonal = 0j
    for L, z in zip(operators, draws):
        dw = z * np.sqrt(dt)
        l_state = L @ state
        ldl_state = L.conj().T @ l_state
        e = np.vdot(state, l_state)
        off_diagonal += l_state * (dw + dt * np.conj(e)) - ldl_state * (dt / 2)
        diagonal -= e * np.conj(e) * (dt / 2) + e * dw
    return off_diagonal + (diagonal + 1) * state


def test_euler_step_matches_formula(source, fixed_source):
    ops = source.sample_array((2, 4, 4)) * 0.5
    state = source.sample_array(4)
    state /= np.linalg.norm(state)
    draws = [0.3 - 0.1j, -0.7 + 0.4j]
    dt = 0.01

    noise = FullNoise.from_operators(ops)
    actual = noise.euler_step(state, dt, fixed_source(draws))

    expected = _expected_increment(ops, state, dt, draws)
    np.testing.assert_allclose(actual, expected, atol=1e-12)


def test_one_draw_per_source_in_order(fixed_source):
    noise = FullNoise.from_operators(np.stack([np.eye(3)] * 4))
    rng = fixed_source([1.0])
    noise.euler_step(np.ones(3) / np.sqrt(3), 0.1, rng)
    assert rng.calls == 4


def test_empty_ensemble_returns_state(fixed_source):
    state = np.array([0.6, 0.8j])
    out = FullNoise.empty().euler_step(state, 0.5, fixed_source([1.0]))
    np.testing.assert_array_equal(out, state)
    assert out is not state


def test_zero_dt_returns_state(source, random_bra_ket):
    noise = FullNoise.from_bra_ket(*random_bra_ket(source, 3, 5))
    state = source.sample_array(5)
    out = noise.euler_step(state, 0.0, source)
    np.testing.assert_array_equal(out, state)


def test_euler_step_resolve_adds_state():
    step = EulerStep.zeros(2)
    step.off_diagonal += np.array([1.0, 2.0])
    step.diagonal_amplitude = 0.5
    np.testing.assert_allclose(step.resolve(np.array([2.0, 4.0])), [4.0, 8.0])


def test_bra_ket_and_dense_increments_agree(source, random_bra_ket, dense_from_bra_ket):
    amplitudes, bra, ket = random_bra_ket(source, 4, 6)
    factorized = FullNoise.from_bra_ket(amplitudes, bra, ket)
    dense = FullNoise.from_operators(dense_from_bra_ket(amplitudes, bra, ket))
    state = source.sample_array(6)
    state /= np.linalg.norm(state)

    a = factorized.euler_step(state, 0.01, ComplexNormalSource(7))
    b = dense.euler_step(state, 0.01, ComplexNormalSource(7))
    np.testing.assert_allclose(a, b, atol=1e-12)


def test_banded_and_dense_increments_agree(source):
    ops = source.sample_array((3, 5, 5)) * 0.3
    banded = FullNoise.from_banded([BandedOperator.from_dense(o) for o in ops])
    dense = FullNoise.from_operators(ops)
    state = source.sample_array(5)

    a = banded.euler_step(state, 0.02, ComplexNormalSource(3))
    b = dense.euler_step(state, 0.02, ComplexNormalSource(3))
    np.testing.assert_allclose(a, b, atol=1e-12)


def test_factory_adjoints(source, random_bra_ket):
    ops = source.sample_array((2, 3, 3))
    for src in FullNoise.from_operators(ops):
        assert isinstance(src.conjugate_operator, DenseOperator)
        np.testing.assert_allclose(
            src.conjugate_operator.to_dense(), src.operator.to_dense().conj().T
        )

    banded = FullNoise.from_banded([BandedOperator.from_dense(o) for o in ops])
    for src in banded:
        assert isinstance(src.conjugate_operator, TransposedBandedOperator)
        np.testing.assert_allclose(
            src.conjugate_operator.to_dense(), src.operator.to_dense().conj().T
        )

    for src in FullNoise.from_bra_ket(*random_bra_ket(source, 2, 3)):
        assert isinstance(src.conjugate_operator, FactorizedOperator)
        np.testing.assert_allclose(
            src.conjugate_operator.to_dense(), src.operator.to_dense().conj().T
        )


def test_ensemble_introspection(source, random_bra_ket):
    noise = FullNoise.from_bra_ket(*random_bra_ket(source, 3, 4))
    assert len(noise) == 3
    assert noise.n_states == 4
    assert FullNoise.empty().n_states is None


def test_from_operators_rejects_bad_shapes():
    with pytest.raises(QPSConstructionError):
        FullNoise.from_operators(np.ones((3, 3)))
    with pytest.raises(QPSConstructionError):
        FullNoise.from_operators(np.ones((2, 3, 4)))


def test_from_banded_rejects_bad_input():
    with pytest.raises(QPSConstructionError):
        FullNoise.from_banded([np.eye(3)])
    with pytest.raises(QPSConstructionError):
        FullNoise.from_banded([BandedOperator.from_dense(np.ones((3, 4)))])


def test_from_bra_ket_rejects_mismatched_counts():
    with pytest.raises(QPSConstructionError):
        FullNoise.from_bra_ket(np.ones(2), np.ones((3, 4)), np.ones((3, 4)))
    with pytest.raises(QPSConstructionError):
        FullNoise.from_bra_ket(np.ones(3), np.ones((3, 4)), np.ones((3, 5)))
    with pytest.raises(QPSConstructionError):
        FullNoise.from_bra_ket(np.ones((3, 1)), np.ones((3, 4)), np.ones((3, 4)))


def test_sources_must_share_dimension():
    a = NoiseSource(DenseOperator(np.eye(2)), DenseOperator(np.eye(2)))
    b = NoiseSource(DenseOperator(np.eye(3)), DenseOperator(np.eye(3)))
    with pytest.raises(QPSConstructionError):
        FullNoise([a, b])


def test_sources_must_be_square_with_transposed_conjugate():
    rectangular = NoiseSource(DenseOperator(np.ones((3, 2))), DenseOperator(np.ones((2, 3))))
    with pytest.raises(QPSConstructionError, match="657"):
        FullNoise([rectangular])

    mismatched = NoiseSource(DenseOperator(np.eye(2)), DenseOperator(np.eye(3)))
    with pytest.raises(QPSConstructionError, match="658"):
        FullNoise([mismatched])
