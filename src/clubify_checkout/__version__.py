"""Version information for clubify-checkout."""

__version__ = "1.0.0"
