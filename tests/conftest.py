"""
Pytest configuration and shared fixtures for Spotui tests.
"""
import queue
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from spotui.models import (
    Track, PlaylistTrack, Page, Playlist, PlaybackContext, Context, Device, RepeatState,
)
from spotui.state import SharedState


def make_track(name: str, artists=None, album=None, duration_ms=1000, added_at=None) -> PlaylistTrack:
    """Build a playlist entry for `name`."""
    slug = name.lower().replace(' ', '-')
    return PlaylistTrack(
        added_at=added_at,
        track=Track(
            id=slug,
            uri=f'spotify:track:{slug}',
            name=name,
            artists=list(artists or []),
            album=album,
            duration_ms=duration_ms,
        ),
    )


def make_playback(is_playing=False, shuffle=False, repeat=RepeatState.OFF,
                  context_uri='spotify:playlist:ctx') -> PlaybackContext:
    return PlaybackContext(
        device=Device(id='dev1', name='Kitchen'),
        context=Context(uri=context_uri, type='playlist') if context_uri is not None else None,
        item=make_track('Now Playing').track,
        is_playing=is_playing,
        shuffle_state=shuffle,
        repeat_state=repeat,
    )


class FakeSpotifyAPI:
    """Records gateway calls and serves canned data."""

    def __init__(self):
        self.calls = []
        self.playback = None
        self.playlists = {}
        self.pages = {}  # cursor -> (items, next) or an exception to raise
        self.expires_at = 5000.0
        self.refresh_error = None
        self.playback_error = None

    def refresh_credential(self):
        self.calls.append(('refresh_credential',))
        if self.refresh_error:
            raise self.refresh_error
        return self.expires_at

    def fetch_current_playback(self):
        self.calls.append(('fetch_current_playback',))
        if self.playback_error:
            raise self.playback_error
        return self.playback

    def fetch_playlist(self, playlist_id):
        self.calls.append(('fetch_playlist', playlist_id))
        return self.playlists[playlist_id]

    def fetch_playlist_tracks_page(self, cursor):
        self.calls.append(('fetch_playlist_tracks_page', cursor))
        page = self.pages[cursor]
        if isinstance(page, Exception):
            raise page
        return page

    def start_playback(self, context_uri, track_uri):
        self.calls.append(('start_playback', context_uri, track_uri))

    def resume(self):
        self.calls.append(('resume',))

    def pause(self):
        self.calls.append(('pause',))

    def next(self):
        self.calls.append(('next',))

    def previous(self):
        self.calls.append(('previous',))

    def set_shuffle(self, state):
        self.calls.append(('set_shuffle', state))

    def set_repeat(self, mode):
        self.calls.append(('set_repeat', mode))


@pytest.fixture
def api():
    """Provide a fresh fake gateway."""
    return FakeSpotifyAPI()


@pytest.fixture
def shared_state():
    """Provide an empty shared state."""
    return SharedState()


@pytest.fixture
def intents():
    """Provide an empty intent queue."""
    return queue.Queue()


@pytest.fixture
def paged_playlist(api):
    """Register a playlist split over three pages, with one deleted track."""
    api.playlists['pl1'] = Playlist(
        id='pl1',
        uri='spotify:playlist:pl1',
        name='Road Trip',
        tracks=Page(items=[make_track('One'), PlaylistTrack(added_at=None, track=None)], next='page2'),
    )
    api.pages['page2'] = ([make_track('Two'), make_track('Three')], 'page3')
    api.pages['page3'] = ([make_track('Four')], None)
    return api.playlists['pl1']
