"""Presolve: dispute-resolution case intake with AI case summaries."""

__version__ = "0.1.0"
