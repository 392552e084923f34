"""
Spotify API Client - Authenticated REST calls to the Spotify Web API.

Stateless apart from the bearer token: nothing fetched is cached between calls.
No call retries and no timeout is set.
"""
import time
import logging
from typing import Optional, List, Tuple

import requests

from ..config import TOKEN_EXPIRY_MARGIN
from ..exceptions import AuthFailure, NetworkFailure, RemoteCallFailure
from ..models import PlaybackContext, Playlist, PlaylistTrack, Page, RepeatState

logger = logging.getLogger(__name__)


class SpotifyAPI:
    """Gateway to the remote playback and catalog service."""

    def __init__(self, base_url: str, token_url: str,
                 client_id: str, client_secret: str, refresh_token: str):
        self.base_url = base_url.rstrip('/')
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_token = refresh_token
        self.session = requests.Session()
        self.session.headers['Content-Type'] = 'application/json'

    # ============================================
    # AUTH
    # ============================================

    def refresh_credential(self) -> float:
        """Get a new access token. Returns its expiry (epoch seconds) minus a safety margin."""
        try:
            resp = requests.post(
                self.token_url,
                data={'grant_type': 'refresh_token', 'refresh_token': self.refresh_token},
                auth=(self.client_id, self.client_secret),
            )
        except requests.RequestException as e:
            raise AuthFailure(f'auth failed: {e}') from e

        if not resp.ok:
            raise AuthFailure(f'auth failed: {resp.status_code} {resp.text}')
        try:
            data = resp.json()
        except ValueError as e:
            raise AuthFailure('auth failed: invalid token response') from e

        token = data.get('access_token')
        if not token:
            raise AuthFailure('auth failed: no access token in response')

        # Spotify may rotate the refresh token
        if data.get('refresh_token'):
            self.refresh_token = data['refresh_token']

        self.session.headers['Authorization'] = f'Bearer {token}'
        expires_in = data.get('expires_in', 3600)
        logger.info(f'Access token refreshed, valid for {expires_in}s')
        return time.time() + expires_in - TOKEN_EXPIRY_MARGIN

    # ============================================
    # CATALOG
    # ============================================

    def fetch_current_playback(self) -> Optional[PlaybackContext]:
        """Get the live playback context, or None if nothing is active."""
        resp = self._request('GET', '/me/player')
        if resp.status_code == 204 or not resp.content:
            return None
        return PlaybackContext.from_json(self._json(resp))

    def fetch_playlist(self, playlist_id: str) -> Playlist:
        """Get a playlist with the first page of its tracks."""
        resp = self._request('GET', f'/playlists/{playlist_id}')
        return Playlist.from_json(self._json(resp))

    def fetch_playlist_tracks_page(self, cursor: str) -> Tuple[List[PlaylistTrack], Optional[str]]:
        """Follow a `next` cursor. Returns the page's tracks and the following cursor."""
        resp = self._request('GET', cursor)
        page = Page.from_json(self._json(resp))
        return page.items, page.next

    # ============================================
    # PLAYBACK
    # ============================================

    def start_playback(self, context_uri: str, track_uri: str):
        """Play `track_uri` inside the context `context_uri`."""
        logger.info(f'API play: context={context_uri} track={track_uri}')
        self._request('PUT', '/me/player/play', json={
            'context_uri': context_uri,
            'offset': {'uri': track_uri},
        })

    def resume(self):
        """Resume playback."""
        self._request('PUT', '/me/player/play')

    def pause(self):
        """Pause playback."""
        self._request('PUT', '/me/player/pause')

    def next(self):
        """Skip to next track."""
        self._request('POST', '/me/player/next')

    def previous(self):
        """Skip to previous track."""
        self._request('POST', '/me/player/previous')

    def set_shuffle(self, state: bool):
        self._request('PUT', '/me/player/shuffle', params={'state': 'true' if state else 'false'})

    def set_repeat(self, mode: RepeatState):
        self._request('PUT', '/me/player/repeat', params={'state': mode.value})

    # ============================================
    # HELPERS
    # ============================================

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        """Issue a request. `path` may be relative to the API root or an absolute URL."""
        url = path if path.startswith('http') else f'{self.base_url}{path}'
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.debug(f'{method} {url} failed: {e}')
            raise NetworkFailure(str(e)) from e

        if not resp.ok:
            message = _error_message(resp)
            logger.debug(f'{method} {url}: {resp.status_code} {message}')
            raise RemoteCallFailure(message, status_code=resp.status_code)
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> dict:
        try:
            data = resp.json()
        except ValueError as e:
            raise RemoteCallFailure(f'invalid JSON response: {e}', status_code=resp.status_code) from e
        if not isinstance(data, dict):
            raise RemoteCallFailure('unexpected response body', status_code=resp.status_code)
        return data


def _error_message(resp: requests.Response) -> str:
    """Extract the service's error message, falling back to the raw body."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text or f'HTTP {resp.status_code}'
    error = data.get('error') if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get('message'):
        return error['message']
    if isinstance(error, str):
        return data.get('error_description') or error
    return resp.text or f'HTTP {resp.status_code}'
