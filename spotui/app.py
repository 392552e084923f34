"""
Spotui Application - Wires the UI, the intent queue and the control loop together.
"""
import queue
import signal
import logging
import threading
from typing import Optional

import pygame

from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, UI_FPS,
    SPOTIFY_API_URL, SPOTIFY_TOKEN_URL,
    SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET, SPOTIFY_REFRESH_TOKEN,
    DEFAULT_PLAYLIST_ID,
)
from .api import SpotifyAPI
from .dispatcher import Dispatcher
from .events import Intent, LoadPlaylist, Quit
from .handlers import KeyHandler
from .managers import PlaybackRefresher
from .state import SharedState
from .ui import Renderer
from .watcher import start_watcher

logger = logging.getLogger(__name__)


class Spotui:
    """Main Spotui application."""

    def __init__(self, fullscreen: bool = False, api: Optional[SpotifyAPI] = None):
        pygame.init()
        pygame.display.set_caption('Spotui')

        flags = pygame.FULLSCREEN if fullscreen else 0
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), flags)
        self.clock = pygame.time.Clock()

        self.api = api or SpotifyAPI(
            SPOTIFY_API_URL, SPOTIFY_TOKEN_URL,
            SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET, SPOTIFY_REFRESH_TOKEN,
        )
        self.state = SharedState()
        self.intents: 'queue.Queue[Intent]' = queue.Queue()
        self.dispatcher = Dispatcher(self.api)
        self.refresher = PlaybackRefresher(self.api, self.state, self.intents)

        self.keys = KeyHandler()
        self.renderer = Renderer(self.screen)

        # Set when the control loop dies
        self.error: Optional[BaseException] = None
        self._watcher_thread: Optional[threading.Thread] = None

        signal.signal(signal.SIGTERM, self._handle_signal)
        signal.signal(signal.SIGINT, self._handle_signal)

    def _handle_signal(self, signum, frame):
        """Handle SIGTERM/SIGINT for graceful shutdown."""
        sig_name = 'SIGTERM' if signum == signal.SIGTERM else 'SIGINT'
        logger.info(f'Received {sig_name}, shutting down...')
        self.push(Quit())

    def push(self, intent: Intent):
        """Queue an intent for the control loop."""
        self.intents.put(intent)

    def _run_watcher(self):
        try:
            start_watcher(self.state, self.dispatcher, self.refresher, self.intents)
        except Exception as e:
            logger.error(f'Control loop failed: {e}', exc_info=True)
            self.error = e

    def start(self) -> bool:
        """Run until quit. Returns False if the control loop failed."""
        logger.info('Starting Spotui...')

        if DEFAULT_PLAYLIST_ID:
            self.push(LoadPlaylist(DEFAULT_PLAYLIST_ID))

        self._watcher_thread = threading.Thread(target=self._run_watcher, daemon=True)
        self._watcher_thread.start()

        logger.info('Entering main loop...')
        while self._watcher_thread.is_alive():
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.push(Quit())
                elif event.type == pygame.KEYDOWN:
                    for intent in self.keys.on_key(event.key, event.unicode):
                        self.push(intent)

            snapshot = self.state.snapshot()
            self.renderer.draw(snapshot, self.keys.query if self.keys.typing else None)
            self.clock.tick(UI_FPS)

        logger.info('Shutting down...')
        pygame.quit()
        logger.info('Spotui stopped')
        return self.error is None
