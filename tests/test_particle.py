import numpy as np
import pytest

from particle import ParticleEnsemble, FIELDS


def test_new_ensemble_has_equal_length_arrays():
    ensemble = ParticleEnsemble(12)
    assert ensemble.count == 12
    for name in FIELDS:
        assert getattr(ensemble, name).shape == (12,)
        assert getattr(ensemble, name).dtype == np.float64


def test_negative_count_gives_empty_ensemble():
    assert ParticleEnsemble(-4).count == 0


def test_load_copies_input():
    xs = [1.0, 2.0]
    ensemble = ParticleEnsemble()
    ensemble.load(xs, [0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [0.5, 0.5])
    xs[0] = 99.0
    assert ensemble.count == 2
    assert ensemble.position_x[0] == 1.0


def test_load_rejects_mismatched_lengths():
    ensemble = ParticleEnsemble(3)
    with pytest.raises(ValueError):
        ensemble.load([1.0, 2.0], [0.0], [0.0, 1.0], [1.0, 0.0], [0.5, 0.5])
    assert ensemble.count == 3


def test_commit_swaps_back_buffers_to_front():
    ensemble = ParticleEnsemble(4)
    back = ensemble.back_buffers()
    for array in back:
        array[:] = 7.0
    ensemble.commit()
    assert np.all(ensemble.brightness == 7.0)
    assert ensemble.back_buffers()[0] is not ensemble.position_x


def test_snapshot_is_read_only_and_detached():
    ensemble = ParticleEnsemble()
    ensemble.load([1.0], [2.0], [3.0], [4.0], [0.5])
    snap = ensemble.snapshot()
    assert snap.count == 1
    with pytest.raises(ValueError):
        snap.brightness[0] = 1.0
    ensemble.brightness[0] = 1.5
    assert snap.brightness[0] == 0.5


def test_resize_reinitializes_in_place():
    ensemble = ParticleEnsemble(3)
    ensemble.resize(8)
    assert ensemble.count == 8
    assert all(a.shape == (8,) for a in ensemble.back_buffers())
