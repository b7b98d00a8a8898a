# -*- coding: utf-8 -*-
"""
sierpinski/config.py

Central defaults for the chaos-game renderer, plus the small validators
used by every entry point. Keeping the numbers here means the sampler,
the canvas and the CLI agree on one set of values.

Contents:
---------
1. RENDER_DEFAULTS:
   - Default point count, warm-up length, triangle shape, colour policy
     and worker count used when the caller does not supply one.

2. COLORS:
   - Foreground/background RGB triples used by `Canvas.finalize`.
     The defaults give white points on a black background.

3. CHUNK_SIZE:
   - Number of vertex choices drawn from the generator per batch. Both
     the lazy sampler and the compiled kernel draw in batches of this size
     so a given generator state yields the same points on either path.

Usage:
------
    from sierpinski.config import RENDER_DEFAULTS, validate_size

    size = validate_size(512)
"""
import numbers
import os

from sierpinski.errors import InvalidConfiguration

# ───────────────────────────────────────────────────────────────────────────────
# 1) RUN DEFAULTS
# ───────────────────────────────────────────────────────────────────────────────
RENDER_DEFAULTS = {
    'quality': 4_000_000,       # recorded samples per run
    'warmup': 20,               # discarded iterations before recording
    'shape': 'isosceles',       # triangle layout, see geometry.SHAPES
    'policy': 'binary',         # count -> colour rule, see canvas.POLICIES
    'workers': 1,               # independent sampler partitions
    'output_directory': './',
}

# ───────────────────────────────────────────────────────────────────────────────
# 2) COLOURS (8-bit RGB)
# ───────────────────────────────────────────────────────────────────────────────
COLORS = {
    'foreground': (255, 255, 255),
    'background': (0, 0, 0),
}

# ───────────────────────────────────────────────────────────────────────────────
# 3) RANDOMNESS BATCHING
# ───────────────────────────────────────────────────────────────────────────────
CHUNK_SIZE = 65_536


def _validate_int(name, value, minimum):
    # bool is an Integral; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidConfiguration(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def validate_size(size) -> int:
    """Return `size` as int; canvas width/height must be at least one pixel."""
    return _validate_int('size', size, 1)


def validate_quality(quality) -> int:
    """Return `quality` as int; zero is allowed and renders a blank canvas."""
    return _validate_int('quality', quality, 0)


def validate_warmup(warmup) -> int:
    return _validate_int('warmup', warmup, 0)


def validate_workers(workers) -> int:
    return _validate_int('workers', workers, 1)


def validate_color(color, name='color'):
    """Return an (r, g, b) tuple of ints in 0..255."""
    try:
        rgb = tuple(int(c) for c in color)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"{name} must be an RGB triple, got {color!r}") from None
    if len(rgb) != 3 or any(c < 0 or c > 255 for c in rgb):
        raise InvalidConfiguration(f"{name} must be an RGB triple in 0..255, got {color!r}")
    return rgb


def validate_output_directory(path) -> str:
    """Check the output directory exists before any sampling work is done."""
    path = os.fspath(path)
    if not os.path.isdir(path):
        raise InvalidConfiguration(f"Directory {path!r} does not exist")
    return path
