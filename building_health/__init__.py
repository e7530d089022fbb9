"""Building Health X: NYC building lookup and health scoring."""

__version__ = "1.0.0"
