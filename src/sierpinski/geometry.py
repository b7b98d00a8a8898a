"""
geometry.py

Triangle layout and the continuous-to-pixel mapping for the chaos game.
Coordinates are image coordinates: x grows to the right, y grows
downward, and the canvas covers the square [0, size] x [0, size].

Public functions:
- `inscribed_triangle(size, shape)` -> Triangle
- `random_point_in_triangle(triangle, rng)` -> (x, y)
- `pixel_index(v, size)` -> int (the floor-then-clamp rule, one axis)
- `to_pixel(x, y, size)` -> (cols, rows)

"""
from typing import NamedTuple, Tuple
import math

import numpy as np
from numba import njit

from sierpinski.errors import InvalidConfiguration

SHAPES = ('isosceles', 'equilateral')


class Triangle(NamedTuple):
    """Three fixed vertices as (x, y) float pairs."""
    a: Tuple[float, float]
    b: Tuple[float, float]
    c: Tuple[float, float]

    @property
    def vertices(self) -> np.ndarray:
        """Vertices as a (3, 2) float64 array in (a, b, c) order."""
        return np.array([self.a, self.b, self.c], dtype=np.float64)

    @property
    def area(self) -> float:
        """Unsigned area (shoelace formula); zero means collinear."""
        (ax, ay), (bx, by), (cx, cy) = self.a, self.b, self.c
        return abs((bx - ax) * (cy - ay) - (cx - ax) * (by - ay)) / 2.0


def inscribed_triangle(size: int, shape: str = 'isosceles') -> Triangle:
    """Return the triangle inscribed in a `size` x `size` canvas.

    - 'isosceles': apex at top-centre, base on the two bottom corners,
      so the fractal fills the whole square.
    - 'equilateral': side `size`, base along the bottom edge, apex at
      height size*sqrt(3)/2 above it.

    The base sits on y == size; `to_pixel` clamps it onto the last row.
    """
    if shape not in SHAPES:
        raise InvalidConfiguration(f"unknown triangle shape {shape!r}; expected one of {SHAPES}")
    length = float(size)
    if shape == 'isosceles':
        apex = (length / 2.0, 0.0)
    else:
        apex = (length / 2.0, length - length * math.sqrt(3.0) / 2.0)
    return Triangle(apex, (0.0, length), (length, length))


def random_point_in_triangle(triangle: Triangle, rng: np.random.Generator) -> Tuple[float, float]:
    """Draw a starting point inside `triangle` from barycentric coordinates.

    u is uniform on [0, 1] and v uniform on [0, 1 - u], then
    P = A + u * (B - A) + v * (C - A). The result is not area-uniform,
    which is fine for a chaos-game seed point.
    """
    u = rng.uniform(0.0, 1.0)
    v = rng.uniform(0.0, 1.0 - u)
    (ax, ay), (bx, by), (cx, cy) = triangle
    x = ax + (bx - ax) * u + (cx - ax) * v
    y = ay + (by - ay) * u + (cy - ay) * v
    return x, y


@njit(cache=True)
def pixel_index(v, size):
    """Map one continuous coordinate to a pixel index: floor, then clamp
    to [0, size - 1].

    This is the only rounding rule in the package. It is compiled so the
    chaos-game kernel calls it directly; from Python it returns an int.
    """
    i = math.floor(v)
    if i < 0:
        return 0
    if i > size - 1:
        return size - 1
    return i


@njit(cache=True)
def _pixel_indices(values, size):
    out = np.empty(values.shape[0], dtype=np.int64)
    for i in range(values.shape[0]):
        out[i] = pixel_index(values[i], size)
    return out


def to_pixel(x, y, size: int):
    """Map continuous coordinates to pixel indices (col, row).

    Applies `pixel_index` to each axis. Accepts scalars or arrays of the
    same shape; scalars give Python ints.
    """
    x_a = np.asarray(x, dtype=np.float64)
    y_a = np.asarray(y, dtype=np.float64)
    if x_a.shape == () and y_a.shape == ():
        return int(pixel_index(float(x_a), size)), int(pixel_index(float(y_a), size))
    x_a, y_a = np.broadcast_arrays(x_a, y_a)
    cols = _pixel_indices(np.ascontiguousarray(x_a).ravel(), size).reshape(x_a.shape)
    rows = _pixel_indices(np.ascontiguousarray(y_a).ravel(), size).reshape(y_a.shape)
    return cols, rows
