"""Delete aged-out entries from a single directory."""

__version__ = "1.0.0"
