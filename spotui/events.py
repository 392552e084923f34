"""
Spotui Events - Intents pushed by the UI and consumed by the dispatcher.
"""
from dataclasses import dataclass

from .models import TrackOrder


class Intent:
    """Base class for all user-triggered requests."""


@dataclass(frozen=True)
class RefreshToken(Intent):
    pass


@dataclass(frozen=True)
class NextTrack(Intent):
    pass


@dataclass(frozen=True)
class PreviousTrack(Intent):
    pass


@dataclass(frozen=True)
class ResumePause(Intent):
    pass


@dataclass(frozen=True)
class Shuffle(Intent):
    pass


@dataclass(frozen=True)
class Repeat(Intent):
    pass


@dataclass(frozen=True)
class Quit(Intent):
    pass


@dataclass(frozen=True)
class LoadPlaylist(Intent):
    playlist_id: str


@dataclass(frozen=True)
class SelectNext(Intent):
    pass


@dataclass(frozen=True)
class SelectPrevious(Intent):
    pass


@dataclass(frozen=True)
class PlaySelectedTrack(Intent):
    pass


@dataclass(frozen=True)
class SearchInContext(Intent):
    query: str


@dataclass(frozen=True)
class EndSearch(Intent):
    pass


@dataclass(frozen=True)
class SortPlaylistTracks(Intent):
    order: TrackOrder
