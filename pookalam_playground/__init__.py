"""Pookalam Playground: radial-symmetry floral design core and PySide6 editor."""

__version__ = "0.1.0"
