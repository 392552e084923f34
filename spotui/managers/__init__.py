"""
Spotui Managers - Background state maintenance.
"""
from .refresh import PlaybackRefresher

__all__ = ['PlaybackRefresher']
