"""World clock page scraper with a time-limited snapshot cache."""

__version__ = "0.1.0"
