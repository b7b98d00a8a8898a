"""Sierpinski triangle renderer built on the chaos game."""

__version__ = "0.1.0"
