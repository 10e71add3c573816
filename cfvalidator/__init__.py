"""Italian codice fiscale validator."""

__version__ = "0.1.0"
