"""A rule-based bot for a two-player route-building train card game."""

__version__ = "0.1.0"

__all__ = ["bot", "display", "graph", "manual", "match", "model"]