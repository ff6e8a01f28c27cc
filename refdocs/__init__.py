"""refdocs: static HTML API reference generator."""

__version__ = "0.1.0"
