"""Carreaux: a two-player 2x2 squares game played through chat commands."""

__version__ = "1.0.0"
