import numpy as np
import pytest

from sierpinski.canvas import Canvas
from sierpinski.errors import InvalidConfiguration
from sierpinski.geometry import inscribed_triangle, to_pixel
from sierpinski.sampler import ChaosGameSampler, _chaos_kernel


@pytest.mark.parametrize('size', [1, 2, 7, 64])
@pytest.mark.parametrize('quality', [0, 1, 19, 20, 21, 500])
def test_emits_exactly_quality_points_in_bounds(size, quality, rng):
    sampler = ChaosGameSampler(size, quality, rng=rng)
    points = list(sampler.iter_points())
    assert len(points) == quality
    for x, y in points:
        assert 0 <= x < size
        assert 0 <= y < size


def test_zero_warmup(rng):
    sampler = ChaosGameSampler(16, 50, rng=rng, warmup=0)
    assert len(list(sampler.iter_points())) == 50


def test_iter_points_is_lazy(rng):
    sampler = ChaosGameSampler(32, 10 ** 9, rng=rng)
    it = sampler.iter_points()
    first = [next(it) for _ in range(5)]
    assert len(first) == 5


def test_sample_points_shape(rng):
    pts = ChaosGameSampler(32, 123, rng=rng).sample_points()
    assert pts.shape == (123, 2)
    assert pts.dtype == np.int64
    empty = ChaosGameSampler(32, 0, rng=rng).sample_points()
    assert empty.shape == (0, 2)


def test_same_seed_same_points():
    a = ChaosGameSampler(50, 2000, seed=11).sample_points()
    b = ChaosGameSampler(50, 2000, seed=11).sample_points()
    c = ChaosGameSampler(50, 2000, seed=12).sample_points()
    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)


@pytest.mark.parametrize('shape', ['isosceles', 'equilateral'])
def test_kernel_matches_lazy_path(shape, small_chunks):
    size, quality = 40, 3000
    lazy = Canvas(size)
    lazy.add_points(ChaosGameSampler(size, quality, seed=5, shape=shape).sample_points())
    fast = ChaosGameSampler(size, quality, seed=5, shape=shape).accumulate(Canvas(size))
    assert fast == lazy
    assert fast.hits == quality


def test_accumulate_counts_quality(rng):
    canvas = ChaosGameSampler(64, 10000, rng=rng).accumulate(Canvas(64))
    assert canvas.hits == 10000


def test_accumulate_zero_quality(rng):
    canvas = ChaosGameSampler(8, 0, rng=rng).accumulate(Canvas(8))
    assert canvas.hits == 0


def test_accumulate_rejects_wrong_canvas(rng):
    with pytest.raises(InvalidConfiguration):
        ChaosGameSampler(8, 10, rng=rng).accumulate(Canvas(9))


def test_points_stay_off_the_central_gap(rng):
    # the middle of the big inverted triangle is never visited after warm-up
    size = 64
    pts = ChaosGameSampler(size, 20000, rng=rng).sample_points()
    hole = (pts[:, 1] >= 36) & (pts[:, 1] < 44) & (pts[:, 0] >= 28) & (pts[:, 0] < 36)
    assert not np.any(hole)


@pytest.mark.parametrize('kwargs', [
    {'size': 0, 'quality': 10},
    {'size': -4, 'quality': 10},
    {'size': 2.5, 'quality': 10},
    {'size': True, 'quality': 10},
    {'size': 10, 'quality': -1},
    {'size': 10, 'quality': 10, 'warmup': -1},
    {'size': 10, 'quality': 10, 'shape': 'hexagon'},
])
def test_invalid_configuration(kwargs):
    with pytest.raises(InvalidConfiguration):
        ChaosGameSampler(**kwargs)


def test_invalid_configuration_is_value_error():
    with pytest.raises(ValueError):
        ChaosGameSampler(0, 10)


def test_kernel_clamps_trajectory_on_far_edge():
    # a point sitting on the base vertex stays on y == size and x == 0
    size = 6
    tri = inscribed_triangle(size)
    counts = np.zeros((size, size), dtype=np.int64)
    choices = np.ones(5, dtype=np.int8)
    x, y, skip = _chaos_kernel(tri.vertices, choices, 0.0, float(size), 0, size, counts)
    assert (x, y) == (0.0, float(size))
    assert skip == 0
    assert counts[size - 1, 0] == 5
    assert counts.sum() == 5
    assert to_pixel(x, y, size) == (0, size - 1)


def test_kernel_honours_warmup_skip():
    size = 6
    tri = inscribed_triangle(size)
    counts = np.zeros((size, size), dtype=np.int64)
    _, _, skip = _chaos_kernel(tri.vertices, np.zeros(3, dtype=np.int8), 3.0, 3.0, 5, size, counts)
    assert skip == 2
    assert counts.sum() == 0
