"""
Renderer - Draws a state snapshot: now playing, search query and the track list.
"""
import logging
from typing import List, Optional

import pygame

from ..config import COLORS, ROW_HEIGHT
from ..models import PlaybackContext, PlaylistTrack, get_track_description
from ..state import State

logger = logging.getLogger(__name__)

HEADER_HEIGHT = 90
PADDING = 16


class Renderer:
    """Draws the UI from a `State` snapshot."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.font_large = pygame.font.Font(None, 32)
        self.font_small = pygame.font.Font(None, 24)

    def draw(self, state: State, typing_query: Optional[str] = None):
        self.screen.fill(COLORS['bg_primary'])
        self._draw_now_playing(state.current_playback_context)
        self._draw_header_line(state, typing_query)
        self._draw_tracks(state.displayed_tracks, state.ui_selection_index)
        pygame.display.flip()

    def _draw_now_playing(self, playback: Optional[PlaybackContext]):
        if playback is None or playback.item is None:
            text = 'Nothing playing'
        else:
            icon = '>' if playback.is_playing else '||'
            flags = f'shuffle={"on" if playback.shuffle_state else "off"} repeat={playback.repeat_state.value}'
            text = f'{icon} {playback.item.name} - {", ".join(playback.item.artists)}   [{flags}]'
        surface = self.font_large.render(text, True, COLORS['text_primary'])
        self.screen.blit(surface, (PADDING, PADDING))

    def _draw_header_line(self, state: State, typing_query: Optional[str]):
        if typing_query:
            text = f'Search: {typing_query}'
            color = COLORS['accent']
        elif state.current_playlist is not None:
            text = f'{state.current_playlist.name} ({len(state.current_playlist_tracks)} tracks)'
            color = COLORS['text_secondary']
        else:
            text = 'No playlist loaded'
            color = COLORS['text_muted']
        surface = self.font_small.render(text, True, color)
        self.screen.blit(surface, (PADDING, PADDING + 40))

    def _draw_tracks(self, tracks: List[PlaylistTrack], selected: Optional[int]):
        visible = max(1, (self.screen.get_height() - HEADER_HEIGHT) // ROW_HEIGHT)
        # Scroll so the selection stays on screen
        first = 0
        if selected is not None and selected >= visible:
            first = selected - visible + 1

        for row, index in enumerate(range(first, min(len(tracks), first + visible))):
            y = HEADER_HEIGHT + row * ROW_HEIGHT
            if index == selected:
                pygame.draw.rect(self.screen, COLORS['bg_selected'],
                                 (0, y, self.screen.get_width(), ROW_HEIGHT))
                color = COLORS['accent']
            else:
                color = COLORS['text_primary']
            surface = self.font_small.render(get_track_description(tracks[index]), True, color)
            self.screen.blit(surface, (PADDING, y + 4))
