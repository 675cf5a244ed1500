import numpy as np

from sampler import RandomSampler


def test_same_seed_gives_same_stream():
    a = RandomSampler(seed=99)
    b = RandomSampler(seed=99)
    assert np.array_equal(a.uniform(0.0, 1.0, 100), b.uniform(0.0, 1.0, 100))
    assert a.uniform(-2.0, 3.0) == b.uniform(-2.0, 3.0)


def test_draws_stay_in_half_open_interval():
    values = RandomSampler(seed=5).uniform(-0.05, 0.05, 10000)
    assert values.shape == (10000,)
    assert values.min() >= -0.05
    assert values.max() < 0.05


def test_scalar_draw_is_a_float():
    assert isinstance(RandomSampler(seed=1).uniform(0.0, 1.0), float)


def test_different_seeds_give_different_streams():
    a = RandomSampler(seed=3).uniform(0.0, 1.0, 10)
    b = RandomSampler(seed=4).uniform(0.0, 1.0, 10)
    assert not np.array_equal(a, b)
