"""Legal Value Score - lead-generation assessment scoring service."""

__version__ = "2.1.0"
