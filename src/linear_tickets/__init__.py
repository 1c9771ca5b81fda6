"""Linear ticket tools for agent hosts."""

__version__ = "0.1.0"
