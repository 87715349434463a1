"""Adapters binding the core ports to real processes, clipboards, and callers."""
