"""RNG meter drop-rate simulator."""

__version__ = "0.1.0"
