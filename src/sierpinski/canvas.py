"""Hit-count canvas and its finalisation into an RGB pixel buffer.

The canvas is a `size` x `size` int64 array indexed (row, col), i.e.
(y, x). Samplers increment it; `finalize` turns the counts into a
(size, size, 3) uint8 image for the image sink.
"""
import logging
from typing import Iterable, Optional

import numpy as np

from sierpinski import config
from sierpinski.errors import InvalidConfiguration, OutOfBounds

logger = logging.getLogger(__name__)

POLICIES = ('binary', 'scaled')


class Canvas:
    """Per-pixel hit counter."""

    def __init__(self, size: int):
        self.size = config.validate_size(size)
        self.counts = np.zeros((self.size, self.size), dtype=np.int64)

    def __repr__(self):
        return f"Canvas(size={self.size}, hits={self.hits})"

    def __eq__(self, other):
        if not isinstance(other, Canvas):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.counts, other.counts)

    @property
    def hits(self) -> int:
        """Total number of recorded samples."""
        return int(self.counts.sum())

    @property
    def coverage(self) -> int:
        """Number of pixels hit at least once."""
        return int(np.count_nonzero(self.counts))

    def increment(self, x: int, y: int) -> None:
        """Add one hit at column `x`, row `y`."""
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise OutOfBounds(x, y, self.size)
        self.counts[y, x] += 1

    def add_points(self, points) -> None:
        """Add one hit per row of an (N, 2) array of (x, y) pixel coordinates."""
        pts = np.asarray(points)
        if pts.size == 0:
            return
        if not np.issubdtype(pts.dtype, np.integer):
            raise TypeError(f"points must be integer pixel coordinates, got dtype {pts.dtype}")
        pts = pts.astype(np.int64, copy=False)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError('points must be shape (N, 2)')
        xs = pts[:, 0]
        ys = pts[:, 1]
        bad = (xs < 0) | (xs >= self.size) | (ys < 0) | (ys >= self.size)
        if np.any(bad):
            i = int(np.argmax(bad))
            raise OutOfBounds(int(xs[i]), int(ys[i]), self.size)
        np.add.at(self.counts, (ys, xs), 1)

    def merge(self, other: 'Canvas') -> 'Canvas':
        """Return a new canvas holding the element-wise sum of both counts."""
        if not isinstance(other, Canvas):
            raise TypeError(f"cannot merge {type(other).__name__} into Canvas")
        if other.size != self.size:
            raise InvalidConfiguration(f"cannot merge {other.size}x{other.size} canvas into {self.size}x{self.size}")
        out = Canvas(self.size)
        np.add(self.counts, other.counts, out=out.counts)
        return out

    def __add__(self, other):
        if not isinstance(other, Canvas):
            return NotImplemented
        return self.merge(other)

    @classmethod
    def merged(cls, canvases: Iterable['Canvas']) -> 'Canvas':
        """Sum any number of same-sized canvases; needs at least one."""
        canvases = list(canvases)
        if not canvases:
            raise InvalidConfiguration('merged() needs at least one canvas')
        out = cls(canvases[0].size)
        for c in canvases:
            if c.size != out.size:
                raise InvalidConfiguration(f"cannot merge {c.size}x{c.size} canvas into {out.size}x{out.size}")
            out.counts += c.counts
        return out

    def finalize(self, policy: str = config.RENDER_DEFAULTS['policy'],
                 foreground=config.COLORS['foreground'],
                 background=config.COLORS['background'],
                 scale: Optional[float] = None) -> np.ndarray:
        """Convert hit counts to a (size, size, 3) uint8 RGB buffer.

        Policies:
        - 'binary': any hit -> foreground, otherwise background.
        - 'scaled': intensity = min(count * scale, 255) blends background
          toward foreground. `scale` defaults to 255 / max(count), so the
          densest pixel is pure foreground.

        Counts are left untouched; calling this twice gives equal buffers.
        """
        if policy not in POLICIES:
            raise InvalidConfiguration(f"unknown policy {policy!r}; expected one of {POLICIES}")
        fg = np.array(config.validate_color(foreground, 'foreground'), dtype=np.float64)
        bg = np.array(config.validate_color(background, 'background'), dtype=np.float64)

        if policy == 'binary':
            pixels = np.empty((self.size, self.size, 3), dtype=np.uint8)
            pixels[...] = bg.astype(np.uint8)
            pixels[self.counts > 0] = fg.astype(np.uint8)
            return pixels

        peak = int(self.counts.max())
        if scale is None:
            scale = 255.0 / peak if peak > 0 else 0.0
        elif scale < 0:
            raise InvalidConfiguration(f"scale must be non-negative, got {scale}")
        intensity = np.minimum(self.counts * float(scale), 255.0) / 255.0
        blended = bg + intensity[..., None] * (fg - bg)
        logger.debug('scaled finalize: peak=%d scale=%.4g', peak, scale)
        return np.rint(blended).astype(np.uint8)
