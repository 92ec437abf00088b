"""iron-five: a 5/3/1 strength program engine."""

__version__ = "0.1.0"
