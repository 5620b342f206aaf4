"""Dependency graphs and modularization reports for PHP code bases."""

__version__ = "0.1.0"
