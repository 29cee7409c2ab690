"""Light Duel - a turn-based light duel against the CPU."""

__version__ = "0.1.0"
