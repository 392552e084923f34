"""
Spotui - Keyboard-driven Spotify controller.
"""
__version__ = '0.1.0'
