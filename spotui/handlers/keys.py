"""
Key Handler - Maps keyboard input to intents.

Typing the search trigger starts search mode: every following character updates
the query and re-runs the search. Return keeps the filter and leaves typing
mode, Escape drops the filter.
"""
import logging
from typing import List

import pygame

from ..config import SEARCH_TRIGGER
from ..events import (
    Intent, NextTrack, PreviousTrack, ResumePause, Shuffle, Repeat, Quit,
    SelectNext, SelectPrevious, PlaySelectedTrack, SearchInContext, EndSearch,
    SortPlaylistTracks,
)
from ..models import TrackOrder

logger = logging.getLogger(__name__)

KEY_BINDINGS = {
    pygame.K_q: Quit,
    pygame.K_n: NextTrack,
    pygame.K_p: PreviousTrack,
    pygame.K_SPACE: ResumePause,
    pygame.K_s: Shuffle,
    pygame.K_r: Repeat,
    pygame.K_DOWN: SelectNext,
    pygame.K_j: SelectNext,
    pygame.K_UP: SelectPrevious,
    pygame.K_k: SelectPrevious,
    pygame.K_RETURN: PlaySelectedTrack,
}

SORT_BINDINGS = {
    pygame.K_1: TrackOrder.ADDED_AT,
    pygame.K_2: TrackOrder.TRACK_NAME,
    pygame.K_3: TrackOrder.ARTISTS,
    pygame.K_4: TrackOrder.ALBUM,
    pygame.K_5: TrackOrder.DURATION,
}


class KeyHandler:
    """Turns key presses into intents, tracking the search input."""

    def __init__(self):
        self.typing = False  # Currently typing a search query
        self.filtered = False  # A search filter is applied
        self.query = ''

    def on_key(self, key: int, char: str = '') -> List[Intent]:
        """Handle a key press. Returns the intents to queue."""
        if self.typing:
            return self._on_search_key(key, char)

        if key == pygame.K_ESCAPE:
            if self.filtered:
                return self._end_search()
            return [Quit()]
        if char == SEARCH_TRIGGER:
            self.typing = True
            self.filtered = True
            self.query = SEARCH_TRIGGER
            return [SearchInContext(self.query)]
        if key in SORT_BINDINGS:
            return [SortPlaylistTracks(SORT_BINDINGS[key])]
        if key in KEY_BINDINGS:
            return [KEY_BINDINGS[key]()]
        return []

    def _on_search_key(self, key: int, char: str) -> List[Intent]:
        if key == pygame.K_ESCAPE:
            return self._end_search()
        if key == pygame.K_RETURN:
            self.typing = False
            return []
        if key == pygame.K_DOWN:
            return [SelectNext()]
        if key == pygame.K_UP:
            return [SelectPrevious()]
        if key == pygame.K_BACKSPACE:
            self.query = self.query[:-1]
            if not self.query:
                return self._end_search()
            return [SearchInContext(self.query)]
        if char and char.isprintable():
            self.query += char
            return [SearchInContext(self.query)]
        return []

    def _end_search(self) -> List[Intent]:
        self.typing = False
        self.filtered = False
        self.query = ''
        return [EndSearch()]
