"""
Spotui UI - Rendering.
"""
from .renderer import Renderer

__all__ = ['Renderer']
