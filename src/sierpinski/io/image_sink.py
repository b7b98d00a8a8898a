"""Image sink: output naming and PNG writing.

Files are named `{UTC %d%H%M%S}_{size}x{size}_{quality}.png` so repeated
runs with the same settings do not overwrite each other.
"""
import logging
import os
from datetime import datetime, timezone

import numpy as np
from PIL import Image

from sierpinski import config
from sierpinski.errors import ImageWriteError

logger = logging.getLogger(__name__)


def output_filename(size: int, quality: int, now=None) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
    return f"{now:%d%H%M%S}_{size}x{size}_{quality}.png"


def output_path(directory, size: int, quality: int, now=None) -> str:
    """Join the output file name onto `directory` after checking it exists."""
    directory = config.validate_output_directory(directory)
    return os.path.join(directory, output_filename(size, quality, now=now))


def write_image(pixels: np.ndarray, path) -> str:
    """Write an (H, W, 3) uint8 RGB buffer to `path`; return the path.

    Raises ImageWriteError, chained to the underlying OSError, when the
    file cannot be written.
    """
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.uint8:
        raise ValueError(f"pixels must be an (H, W, 3) uint8 array, got {pixels.dtype} {pixels.shape}")
    path = os.fspath(path)
    try:
        Image.fromarray(pixels).save(path)
    except OSError as exc:
        raise ImageWriteError(f"could not write image to {path!r}: {exc}") from exc
    logger.debug('wrote %dx%d image to %s', pixels.shape[1], pixels.shape[0], path)
    return path
