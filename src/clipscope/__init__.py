"""clipscope: a cliphist history browser with fuzzy search."""

__version__ = "0.1.0"
