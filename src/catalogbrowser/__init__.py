"""Course catalog browser."""

__version__ = "0.1.0"
