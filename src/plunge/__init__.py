"""Plunge - REST command bridge for ScreenLogic pool controllers"""

__version__ = "1.0.0"
