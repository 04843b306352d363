"""Mode-shift simulation for parking and transit pricing policy."""

__version__ = "0.1.0"
