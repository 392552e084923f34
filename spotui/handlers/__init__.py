"""
Spotui Handlers - Input handling.
"""
from .keys import KeyHandler

__all__ = ['KeyHandler']
