"""Version information for reslock."""

__version__ = "1.0.0"
