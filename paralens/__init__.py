"""ParaLens: analytics over a PARA-organized note vault."""

__version__ = "0.1.0"
