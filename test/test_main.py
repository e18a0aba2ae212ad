"""
Test application: the production app, so tests exercise the same wiring and lifespan.
"""

from src.main import app

__all__ = ['app']
