"""Filter collections of records and mappings with a small SQL-like query language."""

__version__ = "0.1.0"

__all__ = ["__version__"]