"""
Playback Refresher - Periodically re-polls the live playback context.

Also watches the access token: once it is due, a RefreshToken intent is queued
for the dispatcher. The token itself is only ever refreshed through that intent.
"""
import time
import queue
import logging
from typing import Callable, Optional

from ..config import PLAYBACK_REFRESH_INTERVAL
from ..events import RefreshToken
from ..state import SharedState

logger = logging.getLogger(__name__)


class PlaybackRefresher:
    """Time-driven refresh of the shared state."""

    def __init__(self, api, state: SharedState, intents: queue.Queue,
                 interval: float = PLAYBACK_REFRESH_INTERVAL,
                 clock: Callable[[], float] = time.time):
        """
        Args:
            api: Gateway used to fetch the playback context
            state: Shared state to write into
            intents: Intent queue to request token refreshes on
            interval: Seconds between playback polls
            clock: Wall-clock source (epoch seconds)
        """
        self.api = api
        self.state = state
        self.intents = intents
        self.interval = interval
        self.clock = clock
        self.last_refresh = clock()
        self._token_requested_for: Optional[float] = None

    def is_due(self, now: float) -> bool:
        return now > self.last_refresh + self.interval

    def tick(self):
        """Run one scheduler step."""
        now = self.clock()
        self._check_token(now)
        if self.is_due(now):
            self.refresh_playback()

    def refresh_playback(self):
        """Fetch the live playback context and store it as a whole."""
        logger.debug('refresh the current playback context...')
        try:
            playback = self.api.fetch_current_playback()
            self.state.mutate(lambda s: setattr(s, 'current_playback_context', playback))
        finally:
            # A failed poll waits a full interval before trying again
            self.last_refresh = self.clock()

    def _check_token(self, now: float):
        """Queue one RefreshToken per expiry once the token is due."""
        with self.state.read() as s:
            expiry = s.auth_token_expiry
        if now >= expiry and self._token_requested_for != expiry:
            logger.info('Access token expiring, requesting refresh')
            self._token_requested_for = expiry
            self.intents.put(RefreshToken())
