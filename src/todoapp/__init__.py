"""todoapp - a small local task tracker backed by a JSON file."""

__version__ = "0.1.0"
