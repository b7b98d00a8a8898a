"""Chaos-game sampler.

Generates the Sierpinski attractor by repeatedly jumping halfway toward a
randomly chosen triangle vertex. Two paths share one definition of the
iteration:

- `ChaosGameSampler.iter_points()` yields pixel coordinates lazily and is
  the reference implementation.
- `ChaosGameSampler.accumulate(canvas)` runs the same loop in a Numba
  kernel and increments the canvas in place. It is the path used for
  real renders (millions of points).

Vertex choices are drawn in batches of `config.CHUNK_SIZE`, so for equal
generator states both paths consume the same random numbers and produce
the same canvas.
"""
import logging
from typing import Iterator, Optional, Tuple

import numpy as np
from numba import njit

from sierpinski import config
from sierpinski.errors import InvalidConfiguration
from sierpinski.geometry import inscribed_triangle, pixel_index, random_point_in_triangle, to_pixel

logger = logging.getLogger(__name__)


@njit(cache=True, nogil=True)
def _chaos_kernel(vertices, choices, x, y, skip, size, counts):
    for i in range(choices.shape[0]):
        k = choices[i]
        x = (x + vertices[k, 0]) / 2.0
        y = (y + vertices[k, 1]) / 2.0
        if skip > 0:
            skip -= 1
            continue
        counts[pixel_index(y, size), pixel_index(x, size)] += 1
    return x, y, skip


class ChaosGameSampler:
    """Three-vertex chaos game over a `size` x `size` canvas.

    Parameters
    - size: canvas width/height in pixels (>= 1)
    - quality: number of recorded samples (>= 0)
    - rng: a `numpy.random.Generator` owned by this sampler; built from
      `seed` when omitted
    - warmup: iterations run and discarded before recording; they come on
      top of `quality`, so exactly `quality` points are emitted
    - shape: triangle layout, see `geometry.SHAPES`
    """

    def __init__(self, size: int, quality: int, rng: Optional[np.random.Generator] = None,
                 seed=None, warmup: int = config.RENDER_DEFAULTS['warmup'],
                 shape: str = config.RENDER_DEFAULTS['shape']):
        self.size = config.validate_size(size)
        self.quality = config.validate_quality(quality)
        self.warmup = config.validate_warmup(warmup)
        self.triangle = inscribed_triangle(self.size, shape)
        self.shape = shape
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def __repr__(self):
        return (f"ChaosGameSampler(size={self.size}, quality={self.quality}, "
                f"warmup={self.warmup}, shape={self.shape!r})")

    def _choice_chunks(self) -> Iterator[np.ndarray]:
        remaining = self.warmup + self.quality
        while remaining > 0:
            n = min(config.CHUNK_SIZE, remaining)
            yield self.rng.integers(0, 3, size=n, dtype=np.int8)
            remaining -= n

    def iter_points(self) -> Iterator[Tuple[int, int]]:
        """Yield `quality` (x, y) pixel coordinates, lazily.

        Each call starts a fresh trajectory and draws new randomness from
        the sampler's generator.
        """
        vertices = [tuple(v) for v in self.triangle.vertices.tolist()]
        size = self.size
        x, y = random_point_in_triangle(self.triangle, self.rng)
        skip = self.warmup
        for chunk in self._choice_chunks():
            for k in chunk.tolist():
                vx, vy = vertices[k]
                x = (x + vx) / 2.0
                y = (y + vy) / 2.0
                if skip > 0:
                    skip -= 1
                    continue
                yield to_pixel(x, y, size)

    def sample_points(self) -> np.ndarray:
        """Return all samples as an (quality, 2) int64 array of (x, y)."""
        flat = np.fromiter((v for point in self.iter_points() for v in point),
                           dtype=np.int64, count=2 * self.quality)
        return flat.reshape(-1, 2)

    def accumulate(self, canvas):
        """Run the chaos game and add every sample to `canvas` in place.

        Returns the canvas for chaining.
        """
        if canvas.size != self.size:
            raise InvalidConfiguration(
                f"canvas is {canvas.size}x{canvas.size}, sampler expects {self.size}x{self.size}")
        vertices = self.triangle.vertices
        x, y = random_point_in_triangle(self.triangle, self.rng)
        skip = self.warmup
        done = 0
        for chunk in self._choice_chunks():
            x, y, skip = _chaos_kernel(vertices, chunk, x, y, skip, self.size, canvas.counts)
            done += chunk.shape[0]
            logger.debug('chaos game: %d/%d iterations', done, self.warmup + self.quality)
        return canvas
