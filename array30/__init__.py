"""Array30 (行列 30) input method core and front-ends."""

__version__ = "0.3.0"
