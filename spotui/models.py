"""
Spotui Data Models - Snapshots of remote service data.

All models are value-like: a newer fetch replaces an older one as a whole.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List


class RepeatState(Enum):
    """Repeat mode of the current playback."""
    OFF = 'off'
    TRACK = 'track'
    CONTEXT = 'context'

    def next(self) -> 'RepeatState':
        """Next mode in the Off -> Track -> Context -> Off cycle."""
        return _REPEAT_CYCLE[self]


_REPEAT_CYCLE = {
    RepeatState.OFF: RepeatState.TRACK,
    RepeatState.TRACK: RepeatState.CONTEXT,
    RepeatState.CONTEXT: RepeatState.OFF,
}


class TrackOrder(Enum):
    """Orders a playlist's tracks can be sorted by."""
    ADDED_AT = 'added_at'
    TRACK_NAME = 'track_name'
    ARTISTS = 'artists'
    ALBUM = 'album'
    DURATION = 'duration'


@dataclass(frozen=True)
class Track:
    """A playable track."""
    id: Optional[str]
    uri: str
    name: str
    artists: List[str] = field(default_factory=list)
    album: Optional[str] = None
    duration_ms: int = 0

    @classmethod
    def from_json(cls, data: dict) -> 'Track':
        album = data.get('album') or {}
        return cls(
            id=data.get('id'),
            uri=data.get('uri', ''),
            name=data.get('name', ''),
            artists=[a.get('name', '') for a in data.get('artists') or [] if isinstance(a, dict)],
            album=album.get('name') if isinstance(album, dict) else None,
            duration_ms=data.get('duration_ms') or 0,
        )


@dataclass(frozen=True)
class PlaylistTrack:
    """An entry in a playlist. `track` is None for unavailable or deleted tracks."""
    added_at: Optional[str]
    track: Optional[Track]

    @classmethod
    def from_json(cls, data: dict) -> 'PlaylistTrack':
        track = data.get('track')
        return cls(
            added_at=data.get('added_at'),
            track=Track.from_json(track) if isinstance(track, dict) else None,
        )


@dataclass(frozen=True)
class Page:
    """One page of playlist tracks plus the URL of the next page."""
    items: List[PlaylistTrack] = field(default_factory=list)
    next: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> 'Page':
        return cls(
            items=[PlaylistTrack.from_json(item) for item in data.get('items') or [] if isinstance(item, dict)],
            next=data.get('next'),
        )


@dataclass(frozen=True)
class Playlist:
    """A playlist with the first page of its tracks embedded."""
    id: str
    uri: str
    name: str
    owner: Optional[str] = None
    tracks: Page = field(default_factory=Page)

    @classmethod
    def from_json(cls, data: dict) -> 'Playlist':
        owner = data.get('owner') or {}
        return cls(
            id=data.get('id', ''),
            uri=data.get('uri', ''),
            name=data.get('name', ''),
            owner=owner.get('display_name') or owner.get('id'),
            tracks=Page.from_json(data.get('tracks') or {}),
        )


@dataclass(frozen=True)
class Device:
    """The device playback is happening on."""
    id: Optional[str]
    name: str
    volume_percent: Optional[int] = None

    @classmethod
    def from_json(cls, data: dict) -> 'Device':
        return cls(
            id=data.get('id'),
            name=data.get('name', ''),
            volume_percent=data.get('volume_percent'),
        )


@dataclass(frozen=True)
class Context:
    """The album/playlist/artist that playback was started from."""
    uri: str
    type: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> 'Context':
        return cls(uri=data.get('uri', ''), type=data.get('type'))


@dataclass(frozen=True)
class PlaybackContext:
    """Live playback snapshot from the remote service."""
    device: Optional[Device] = None
    context: Optional[Context] = None
    item: Optional[Track] = None
    is_playing: bool = False
    shuffle_state: bool = False
    repeat_state: RepeatState = RepeatState.OFF
    progress_ms: int = 0

    @classmethod
    def from_json(cls, data: dict) -> 'PlaybackContext':
        device = data.get('device')
        context = data.get('context')
        item = data.get('item')
        try:
            repeat_state = RepeatState(data.get('repeat_state', 'off'))
        except ValueError:
            repeat_state = RepeatState.OFF
        return cls(
            device=Device.from_json(device) if isinstance(device, dict) else None,
            context=Context.from_json(context) if isinstance(context, dict) else None,
            item=Track.from_json(item) if isinstance(item, dict) else None,
            is_playing=bool(data.get('is_playing', False)),
            shuffle_state=bool(data.get('shuffle_state', False)),
            repeat_state=repeat_state,
            progress_ms=data.get('progress_ms') or 0,
        )


def get_track_description(track: PlaylistTrack) -> str:
    """Text used to search for a track: name, artists and album."""
    if track.track is None:
        return ''
    t = track.track
    return f"{t.name} {', '.join(t.artists)} {t.album or ''}".strip()
