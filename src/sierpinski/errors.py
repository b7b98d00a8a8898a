"""Exception types raised by the sierpinski package.

Every error derives from `SierpinskiError` so callers (the CLI in
particular) can catch the whole family in one place. Each type also
derives from the closest builtin so generic handlers keep working.
"""


class SierpinskiError(Exception):
    """Base class for all renderer errors."""


class InvalidConfiguration(SierpinskiError, ValueError):
    """A size, quality or other run option is out of range."""


class OutOfBounds(SierpinskiError, IndexError):
    """A pixel coordinate falls outside the canvas."""

    def __init__(self, x, y, size):
        self.x = x
        self.y = y
        self.size = size
        super().__init__(f"pixel ({x}, {y}) outside {size}x{size} canvas")


class ImageWriteError(SierpinskiError, OSError):
    """The image sink could not write the output file."""
