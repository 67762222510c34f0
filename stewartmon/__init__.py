"""Serial monitor and visualiser for a Stewart platform."""

__version__ = "0.1.0"