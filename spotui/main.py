#!/usr/bin/env python3
"""
Spotui - Keyboard-driven Spotify controller

Usage:
    python -m spotui              # Windowed
    python -m spotui --fullscreen # Fullscreen

Credentials come from SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET and
SPOTIFY_REFRESH_TOKEN. Set SPOTUI_PLAYLIST_ID to load a playlist on startup.
"""
import os
import sys
import logging
import platform
from logging.handlers import RotatingFileHandler

from .app import Spotui
from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT,
    SPOTIFY_API_URL, FULLSCREEN, PLAYBACK_REFRESH_INTERVAL,
    LOG_DIR, LOG_FILE, LOG_MAX_BYTES, LOG_BACKUP_COUNT,
    has_spotify_credentials,
)


def setup_logging():
    """Configure logging with console and rotating file handler."""
    level_name = os.environ.get('SPOTUI_LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)

    console_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )
    file_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(console_formatter)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        root.addHandler(file_handler)
        root.info(f'Logging to: {LOG_FILE}')
    except (OSError, PermissionError) as e:
        root.warning(f'Could not create log file: {e}')

    # Quiet down noisy libraries
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)


def log_system_info(logger: logging.Logger):
    """Log system information at startup."""
    logger.info('=' * 50)
    logger.info('SPOTUI STARTUP')
    logger.info('=' * 50)
    logger.info(f'Python: {sys.version.split()[0]}')
    logger.info(f'Platform: {platform.system()} {platform.release()}')
    logger.info(f'Spotify API: {SPOTIFY_API_URL}')
    logger.info(f'Playback refresh: every {PLAYBACK_REFRESH_INTERVAL}s')
    logger.info(f'Screen: {SCREEN_WIDTH}x{SCREEN_HEIGHT} (fullscreen={FULLSCREEN})')
    logger.info('=' * 50)


def main() -> int:
    """Entry point. Returns the process exit code."""
    setup_logging()

    logger = logging.getLogger(__name__)
    log_system_info(logger)

    if not has_spotify_credentials():
        logger.error('Missing Spotify credentials: set SPOTIFY_CLIENT_ID, '
                     'SPOTIFY_CLIENT_SECRET and SPOTIFY_REFRESH_TOKEN')
        return 1

    print()
    print('Controls:')
    print('   Space     Play/Pause')
    print('   N / P     Next / previous track')
    print('   S / R     Toggle shuffle / cycle repeat')
    print('   ↑ ↓       Move selection')
    print('   Enter     Play selected track')
    print('   /         Search in playlist (Esc clears)')
    print('   1-5       Sort by added, name, artists, album, duration')
    print('   Q         Quit')
    print()

    app = Spotui(fullscreen=FULLSCREEN)
    return 0 if app.start() else 1


if __name__ == '__main__':
    sys.exit(main())
