"""
Spotui Configuration - All constants and settings.
"""
import os
import sys
from pathlib import Path

# ============================================
# SCREEN & DISPLAY
# ============================================

SCREEN_WIDTH = 720
SCREEN_HEIGHT = 480
ROW_HEIGHT = 28  # Height of one track row in the list

# ============================================
# NETWORK ENDPOINTS
# ============================================

SPOTIFY_API_URL = os.environ.get('SPOTIFY_API_URL', 'https://api.spotify.com/v1')
SPOTIFY_TOKEN_URL = os.environ.get('SPOTIFY_TOKEN_URL', 'https://accounts.spotify.com/api/token')

# ============================================
# CREDENTIALS
# ============================================

SPOTIFY_CLIENT_ID = os.environ.get('SPOTIFY_CLIENT_ID', '')
SPOTIFY_CLIENT_SECRET = os.environ.get('SPOTIFY_CLIENT_SECRET', '')
SPOTIFY_REFRESH_TOKEN = os.environ.get('SPOTIFY_REFRESH_TOKEN', '')

# Playlist to load on startup (optional)
DEFAULT_PLAYLIST_ID = os.environ.get('SPOTUI_PLAYLIST_ID')

# ============================================
# PATHS
# ============================================

LOG_DIR = Path.home() / '.spotui' / 'logs'
LOG_FILE = LOG_DIR / 'spotui.log'
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB per file
LOG_BACKUP_COUNT = 5

# ============================================
# COMMAND LINE FLAGS
# ============================================

FULLSCREEN = '--fullscreen' in sys.argv or '-f' in sys.argv

# ============================================
# COLORS
# ============================================

COLORS = {
    'bg_primary': (13, 13, 13),
    'bg_selected': (40, 40, 40),
    'accent': (29, 185, 84),
    'text_primary': (255, 255, 255),
    'text_secondary': (160, 160, 160),
    'text_muted': (96, 96, 96),
}

# ============================================
# TIMING
# ============================================

PLAYBACK_REFRESH_INTERVAL = float(os.environ.get('SPOTUI_REFRESH_INTERVAL', '1.0'))
TOKEN_EXPIRY_MARGIN = 10  # Refresh the token this many seconds before it expires
TICK_INTERVAL = 0.01  # Sleep between watcher loop ticks
UI_FPS = 30

# ============================================
# SEARCH
# ============================================

SEARCH_TRIGGER = '/'


def has_spotify_credentials() -> bool:
    """Check if all Spotify credentials are configured."""
    return bool(SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET and SPOTIFY_REFRESH_TOKEN)
