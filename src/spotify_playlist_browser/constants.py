"""Constants used throughout the application."""

# Spotify API configuration
SPOTIFY_SCOPES = (
    "user-follow-read user-library-read user-library-modify user-read-private "
    "playlist-read-private playlist-read-collaborative "
    "playlist-modify-private playlist-modify-public"
)
BATCH_SIZE = 50
CACHE_FILE = ".spotify_cache"
DEFAULT_MARKET = "US"
REQUEST_TIMEOUT = 10.0

# One character per playlist slot, in tree order. "q" quits the app, so it
# can never address a playlist.
PLAYLIST_INDEXES = "abcdefghijklmnoprstuvwxyz1234567890"

# Key pressed on a playlist track to remove it
REMOVE_KEY = "x"

LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
PACKAGE_LOGGER = "spotify_playlist_browser"
