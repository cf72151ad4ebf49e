# fitclub/__init__.py
"""FitClub scheduling constraint engine."""

__version__ = "0.1.0"
