"""
Shared Application State - Single in-memory state read by the UI and written by the dispatcher.

The state is owned by a `SharedState` which guards it with a reader/writer lock:
many threads may read at once, writes are exclusive and short. Mutations must
never perform network I/O while holding the lock.
"""
import copy
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, TypeVar

from .config import SEARCH_TRIGGER
from .models import PlaybackContext, Playlist, PlaylistTrack, TrackOrder, get_track_description

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RWLock:
    """Reader/writer lock. Waiting writers block new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


@dataclass
class SearchState:
    """Search in the current playlist."""
    query: Optional[str] = None
    filtered_tracks: List[PlaylistTrack] = field(default_factory=list)
    active: bool = False


@dataclass
class State:
    """Application state. Only touch it through `SharedState`."""
    is_running: bool = True
    current_playback_context: Optional[PlaybackContext] = None
    current_playlist: Optional[Playlist] = None
    current_playlist_tracks: List[PlaylistTrack] = field(default_factory=list)
    ui_selection_index: Optional[int] = None
    search_state: SearchState = field(default_factory=SearchState)
    auth_token_expiry: float = 0.0

    @property
    def displayed_tracks(self) -> List[PlaylistTrack]:
        """Tracks the UI renders and the selection index points into."""
        if self.search_state.active:
            return self.search_state.filtered_tracks
        return self.current_playlist_tracks

    @property
    def selected_track(self) -> Optional[PlaylistTrack]:
        tracks = self.displayed_tracks
        if self.ui_selection_index is None or not 0 <= self.ui_selection_index < len(tracks):
            return None
        return tracks[self.ui_selection_index]

    def reset_selection(self):
        """Select the first displayed track, or clear selection if there is none."""
        self.ui_selection_index = 0 if self.displayed_tracks else None

    def search(self, query: Optional[str]):
        """Recompute the filtered tracks for `query` from scratch."""
        self.search_state.query = query
        if not query or not query.startswith(SEARCH_TRIGGER):
            if self.search_state.active:
                # Without the trigger there is nothing to filter on
                self.search_state = SearchState(query=query)
                self.reset_selection()
            return

        needle = query[len(SEARCH_TRIGGER):].lower()
        logger.info(f'search tracks in context with query {needle!r}')
        self.search_state.filtered_tracks = [
            t for t in self.current_playlist_tracks
            if needle in get_track_description(t).lower()
        ]
        self.search_state.active = True
        self.reset_selection()
        logger.debug(f'after search, {len(self.search_state.filtered_tracks)} tracks match')

    def end_search(self):
        """Leave search mode and show the full playlist again."""
        self.search_state = SearchState()
        self.reset_selection()

    def sort_playlist_tracks(self, order: TrackOrder):
        """Reorder the playlist tracks. A running search is re-filtered to keep the same order."""
        if self.current_playlist is None:
            return
        self.current_playlist_tracks = sorted(self.current_playlist_tracks, key=_SORT_KEYS[order])
        if self.search_state.active:
            self.search(self.search_state.query)
        else:
            self.reset_selection()


def _text_key(value: Optional[str]) -> str:
    return (value or '').lower()


_SORT_KEYS = {
    TrackOrder.ADDED_AT: lambda t: t.added_at or '',
    TrackOrder.TRACK_NAME: lambda t: _text_key(t.track.name),
    TrackOrder.ARTISTS: lambda t: _text_key(', '.join(t.track.artists)),
    TrackOrder.ALBUM: lambda t: _text_key(t.track.album),
    TrackOrder.DURATION: lambda t: t.track.duration_ms,
}


class SharedState:
    """Owner of the `State`, the single source of truth for the process."""

    def __init__(self, state: Optional[State] = None):
        self._state = state or State()
        self._lock = RWLock()

    @contextmanager
    def read(self) -> Iterator[State]:
        """Hold the read lock while looking at the live state."""
        with self._lock.read_locked():
            yield self._state

    def snapshot(self) -> State:
        """Copy of the state as of the last committed write."""
        with self._lock.read_locked():
            snap = copy.copy(self._state)
            snap.current_playlist_tracks = list(self._state.current_playlist_tracks)
            snap.search_state = SearchState(
                query=self._state.search_state.query,
                filtered_tracks=list(self._state.search_state.filtered_tracks),
                active=self._state.search_state.active,
            )
            return snap

    def mutate(self, fn: Callable[[State], T]) -> T:
        """Run `fn` with exclusive access. `fn` must not do network I/O."""
        with self._lock.write_locked():
            return fn(self._state)

    @property
    def is_running(self) -> bool:
        with self._lock.read_locked():
            return self._state.is_running
