"""
Watcher - The control loop interleaving intent dispatch and periodic refresh.
"""
import time
import queue
import logging

from .config import TICK_INTERVAL
from .dispatcher import Dispatcher
from .events import RefreshToken
from .exceptions import PlayerError
from .managers import PlaybackRefresher
from .state import SharedState

logger = logging.getLogger(__name__)


def startup(state: SharedState, dispatcher: Dispatcher, refresher: PlaybackRefresher):
    """Get the first token and playback context. Any failure here is fatal."""
    dispatcher.dispatch(state, RefreshToken())
    refresher.refresh_playback()


def tick(state: SharedState, dispatcher: Dispatcher, refresher: PlaybackRefresher,
         intents: queue.Queue):
    """One loop step: dispatch at most one pending intent, then maybe refresh."""
    if not state.is_running:
        return

    try:
        intent = intents.get_nowait()
    except queue.Empty:
        intent = None

    if intent is not None:
        try:
            dispatcher.dispatch(state, intent)
        except PlayerError as e:
            logger.error(f'Failed to handle {intent!r}: {e}')
            logger.debug('Intent failure details', exc_info=True)

    # Quit may have been handled above
    if not state.is_running:
        return

    try:
        refresher.tick()
    except PlayerError as e:
        logger.error(f'Playback refresh failed: {e}')


def start_watcher(state: SharedState, dispatcher: Dispatcher, refresher: PlaybackRefresher,
                  intents: queue.Queue, tick_interval: float = TICK_INTERVAL):
    """Run the control loop until a Quit intent is handled.

    Raises if the startup refresh fails.
    """
    startup(state, dispatcher, refresher)
    logger.info('Watcher started')

    while state.is_running:
        tick(state, dispatcher, refresher, intents)
        time.sleep(tick_interval)

    logger.info('Watcher stopped')
