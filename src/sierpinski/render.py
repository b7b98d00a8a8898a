"""Run orchestration: sample, accumulate, finalise, write.

`render_canvas` is the compute step; `render` adds finalisation and
`render_to_file` adds the image sink. With `workers > 1` the point budget
is split across independent samplers, each with its own generator spawned
from a single `numpy.random.SeedSequence`, run on joblib's thread backend
(the Numba kernel releases the GIL) and summed into one canvas.
"""
import logging
from typing import List, Optional

import numpy as np
from joblib import Parallel, delayed

from sierpinski import config
from sierpinski.canvas import POLICIES, Canvas
from sierpinski.geometry import SHAPES
from sierpinski.errors import InvalidConfiguration
from sierpinski.io.image_sink import output_path, write_image
from sierpinski.sampler import ChaosGameSampler

logger = logging.getLogger(__name__)

_DEFAULTS = config.RENDER_DEFAULTS


def split_quality(quality: int, workers: int) -> List[int]:
    """Split `quality` into `workers` shares differing by at most one."""
    base, extra = divmod(quality, workers)
    return [base + (1 if i < extra else 0) for i in range(workers)]


def _render_share(size, quality, seed_seq, warmup, shape):
    rng = np.random.default_rng(seed_seq)
    sampler = ChaosGameSampler(size, quality, rng=rng, warmup=warmup, shape=shape)
    return sampler.accumulate(Canvas(size))


def render_canvas(size: int, quality: int, seed=None, rng: Optional[np.random.Generator] = None,
                  warmup: int = _DEFAULTS['warmup'], shape: str = _DEFAULTS['shape'],
                  workers: int = _DEFAULTS['workers']) -> Canvas:
    """Run the chaos game and return the accumulated canvas.

    All options are validated before any sampling starts. Output is
    reproducible for a fixed (seed, workers) pair.
    """
    size = config.validate_size(size)
    quality = config.validate_quality(quality)
    warmup = config.validate_warmup(warmup)
    workers = config.validate_workers(workers)
    if shape not in SHAPES:
        raise InvalidConfiguration(f"unknown triangle shape {shape!r}; expected one of {SHAPES}")

    if workers == 1:
        if rng is None:
            rng = np.random.default_rng(seed)
        sampler = ChaosGameSampler(size, quality, rng=rng, warmup=warmup, shape=shape)
        logger.info('sampling %d points on %dx%d canvas', quality, size, size)
        return sampler.accumulate(Canvas(size))

    if rng is not None:
        seed = int(rng.integers(2 ** 63))
    children = np.random.SeedSequence(seed).spawn(workers)
    shares = split_quality(quality, workers)
    logger.info('sampling %d points on %dx%d canvas across %d workers', quality, size, size, workers)
    canvases = Parallel(n_jobs=workers, prefer='threads')(
        delayed(_render_share)(size, share, child, warmup, shape)
        for share, child in zip(shares, children))
    return Canvas.merged(canvases)


def render(size: int, quality: int, seed=None, rng: Optional[np.random.Generator] = None,
           warmup: int = _DEFAULTS['warmup'], shape: str = _DEFAULTS['shape'],
           workers: int = _DEFAULTS['workers'], policy: str = _DEFAULTS['policy'],
           foreground=config.COLORS['foreground'],
           background=config.COLORS['background']) -> np.ndarray:
    """Render the fractal and return a (size, size, 3) uint8 RGB buffer.

    Colour options are checked before sampling, like the rest.
    """
    if policy not in POLICIES:
        raise InvalidConfiguration(f"unknown policy {policy!r}; expected one of {POLICIES}")
    foreground = config.validate_color(foreground, 'foreground')
    background = config.validate_color(background, 'background')
    canvas = render_canvas(size, quality, seed=seed, rng=rng, warmup=warmup,
                           shape=shape, workers=workers)
    return canvas.finalize(policy=policy, foreground=foreground, background=background)


def render_to_file(size: int, quality: int, output_directory=_DEFAULTS['output_directory'],
                   now=None, **kwargs) -> str:
    """Render and write a PNG into `output_directory`; return its path.

    The directory is checked before sampling so a bad path fails fast.
    Extra keyword arguments go to `render`.
    """
    size = config.validate_size(size)
    quality = config.validate_quality(quality)
    path = output_path(output_directory, size, quality, now=now)
    pixels = render(size, quality, **kwargs)
    return write_image(pixels, path)
