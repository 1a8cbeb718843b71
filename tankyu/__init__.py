"""Research intelligence graph: record types, store interfaces and command-line helpers."""

__version__ = "0.1.0"

__all__ = ["__version__"]