"""
Spotui API modules - External service integrations.
"""
from .spotify import SpotifyAPI

__all__ = ['SpotifyAPI']
