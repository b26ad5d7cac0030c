"""Estate and tree storage in SQLite, drone flight-distance planning, and a Flask HTTP API."""

__version__ = "0.1.0"

__all__ = ["__version__"]