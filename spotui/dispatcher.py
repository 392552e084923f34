"""
Event Dispatcher - Turns intents into gateway calls and state changes.

Intents are handled one at a time. No lock on the shared state is held while a
gateway call is in flight: handlers take a snapshot, call the gateway, then
commit with a single `mutate`.
"""
import logging
from typing import Callable, Dict, Type

from .events import (
    Intent, RefreshToken, NextTrack, PreviousTrack, ResumePause, Shuffle, Repeat, Quit,
    LoadPlaylist, SelectNext, SelectPrevious, PlaySelectedTrack, SearchInContext,
    EndSearch, SortPlaylistTracks,
)
from .exceptions import NoActiveContext, UnknownIntent
from .models import PlaybackContext
from .state import SharedState, State

logger = logging.getLogger(__name__)


class Dispatcher:
    """Handles intents against a gateway and the shared state."""

    def __init__(self, api):
        """
        Args:
            api: SpotifyAPI (or anything with the same methods)
        """
        self.api = api
        self._handlers: Dict[Type[Intent], Callable[[SharedState, Intent], None]] = {
            RefreshToken: self._refresh_token,
            NextTrack: self._next_track,
            PreviousTrack: self._previous_track,
            ResumePause: self._resume_pause,
            Shuffle: self._shuffle,
            Repeat: self._repeat,
            Quit: self._quit,
            LoadPlaylist: self._load_playlist,
            SelectNext: self._select_next,
            SelectPrevious: self._select_previous,
            PlaySelectedTrack: self._play_selected_track,
            SearchInContext: self._search_in_context,
            EndSearch: self._end_search,
            SortPlaylistTracks: self._sort_playlist_tracks,
        }

    def dispatch(self, state: SharedState, intent: Intent):
        """Handle one intent. Raises a PlayerError subclass on failure."""
        logger.info(f'handle event: {intent!r}')
        handler = self._handlers.get(type(intent))
        if handler is None:
            raise UnknownIntent(f'unknown intent: {intent!r}')
        handler(state, intent)

    # ============================================
    # AUTH & PLAYBACK
    # ============================================

    def _refresh_token(self, state: SharedState, intent: RefreshToken):
        expires_at = self.api.refresh_credential()
        state.mutate(lambda s: setattr(s, 'auth_token_expiry', expires_at))

    def _next_track(self, state: SharedState, intent: NextTrack):
        self.api.next()

    def _previous_track(self, state: SharedState, intent: PreviousTrack):
        self.api.previous()

    def _resume_pause(self, state: SharedState, intent: ResumePause):
        playback = _current_playback(state)
        if playback.is_playing:
            self.api.pause()
        else:
            self.api.resume()

    def _shuffle(self, state: SharedState, intent: Shuffle):
        playback = _current_playback(state)
        self.api.set_shuffle(not playback.shuffle_state)

    def _repeat(self, state: SharedState, intent: Repeat):
        playback = _current_playback(state)
        self.api.set_repeat(playback.repeat_state.next())

    def _quit(self, state: SharedState, intent: Quit):
        state.mutate(lambda s: setattr(s, 'is_running', False))

    # ============================================
    # PLAYLIST
    # ============================================

    def _load_playlist(self, state: SharedState, intent: LoadPlaylist):
        with state.read() as s:
            if s.current_playlist is not None and s.current_playlist.id == intent.playlist_id:
                logger.debug(f'Playlist {intent.playlist_id} already loaded')
                return

        playlist = self.api.fetch_playlist(intent.playlist_id)
        tracks = list(playlist.tracks.items)
        cursor = playlist.tracks.next
        while cursor:
            page, cursor = self.api.fetch_playlist_tracks_page(cursor)
            tracks.extend(page)

        # Drop tracks that are unavailable or deleted
        tracks = [t for t in tracks if t.track is not None]
        logger.info(f'Loaded playlist {playlist.name!r}: {len(tracks)} tracks')

        def commit(s: State):
            s.current_playlist = playlist
            s.current_playlist_tracks = tracks
            s.end_search()

        state.mutate(commit)

    def _sort_playlist_tracks(self, state: SharedState, intent: SortPlaylistTracks):
        state.mutate(lambda s: s.sort_playlist_tracks(intent.order))

    # ============================================
    # SELECTION & SEARCH
    # ============================================

    def _select_next(self, state: SharedState, intent: SelectNext):
        def move(s: State):
            index = s.ui_selection_index
            if index is not None and index + 1 < len(s.displayed_tracks):
                s.ui_selection_index = index + 1

        state.mutate(move)

    def _select_previous(self, state: SharedState, intent: SelectPrevious):
        def move(s: State):
            index = s.ui_selection_index
            if index is not None and index > 0:
                s.ui_selection_index = index - 1

        state.mutate(move)

    def _play_selected_track(self, state: SharedState, intent: PlaySelectedTrack):
        with state.read() as s:
            selected = s.selected_track
            playback = s.current_playback_context
        if selected is None or playback is None or playback.context is None:
            return
        if not playback.context.uri or selected.track is None:
            return
        self.api.start_playback(playback.context.uri, selected.track.uri)

    def _search_in_context(self, state: SharedState, intent: SearchInContext):
        state.mutate(lambda s: s.search(intent.query))

    def _end_search(self, state: SharedState, intent: EndSearch):
        state.mutate(lambda s: s.end_search())


def _current_playback(state: SharedState) -> PlaybackContext:
    """Read the current playback context or raise NoActiveContext."""
    with state.read() as s:
        playback = s.current_playback_context
    if playback is None:
        raise NoActiveContext()
    return playback
