"""
Spotify playlist browser.

Browse followed artists, their albums, popular tracks and related artists
in one tree and your library and playlists in another. Press a playlist's
index on a track to add it there; press "x" on a playlist track to remove
it.

Before running:
1. Create a Spotify app at https://developer.spotify.com/dashboard
2. Set SPOTIPY_CLIENT_ID, SPOTIPY_CLIENT_SECRET, SPOTIPY_REDIRECT_URI environment variables
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

import spotipy
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from .app import PlaylistBrowserApp
from .catalog import SpotifyCatalog
from .constants import (
    CACHE_FILE,
    DEFAULT_MARKET,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    PACKAGE_LOGGER,
    REQUEST_TIMEOUT,
    SPOTIFY_SCOPES,
)
from .errors import CatalogError
from .session import LibrarySnapshot, Session


@dataclass(frozen=True)
class Settings:
    """Runtime options collected from the command line."""

    cache_path: str = CACHE_FILE
    market: str = DEFAULT_MARKET
    timeout: float = REQUEST_TIMEOUT
    log_file: Optional[str] = None
    verbose: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Settings":
        return cls(
            cache_path=args.cache_path,
            market=args.market,
            timeout=args.timeout,
            log_file=args.log_file,
            verbose=args.verbose,
        )

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.verbose else logging.INFO


def check_environment_variables() -> bool:
    """Check if required Spotify API environment variables are set."""
    required_vars = [
        "SPOTIPY_CLIENT_ID",
        "SPOTIPY_CLIENT_SECRET",
        "SPOTIPY_REDIRECT_URI",
    ]
    missing_vars = [var for var in required_vars if not os.getenv(var)]

    if missing_vars:
        print("❌ Missing required environment variables:")
        for var in missing_vars:
            print(f"   {var}")
        print("\nPlease set these variables before running the script.")
        return False

    return True


def create_spotify_client(settings: Settings) -> spotipy.Spotify:
    """Create and return a Spotify client with required scopes and caching."""
    auth_manager = SpotifyOAuth(
        scope=SPOTIFY_SCOPES,
        cache_path=settings.cache_path,
        show_dialog=False,  # Don't force re-auth every time
    )
    return spotipy.Spotify(auth_manager=auth_manager, requests_timeout=settings.timeout)


def configure_logging(settings: Settings) -> None:
    """Set up the package logger. The UI adds its own log panel handler."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.log_level)
    # Keep records away from the terminal the UI is drawing on
    logger.addHandler(logging.NullHandler())
    logger.propagate = False

    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        logger.addHandler(file_handler)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Browse Spotify artists and manage playlists from the terminal",
        epilog="Keys:\n"
        "  right / left      expand / collapse the selected item\n"
        "  escape            collapse everything\n"
        "  a-z, 0-9          on a top-level item: jump to the first item with that initial\n"
        "                    on an artist track: add it to the playlist with that index\n"
        "  x                 on a playlist track: remove it from the playlist\n"
        "  tab               switch between the artist and playlist trees\n"
        "  q                 quit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--cache-path",
        default=CACHE_FILE,
        help=f"where the OAuth token is cached (default: {CACHE_FILE})",
    )
    parser.add_argument(
        "--market",
        default=DEFAULT_MARKET,
        help=f"country code used for popular tracks (default: {DEFAULT_MARKET})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=REQUEST_TIMEOUT,
        help=f"seconds to wait for each Spotify request (default: {REQUEST_TIMEOUT:g})",
    )
    parser.add_argument(
        "--log-file",
        help="also append log messages to this file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log debug messages",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    settings = Settings.from_args(parse_arguments(argv))
    configure_logging(settings)

    # Check environment and create client
    if not check_environment_variables():
        return 1

    try:
        catalog = SpotifyCatalog(create_spotify_client(settings), settings.market)
        library = LibrarySnapshot(catalog.list_saved_tracks())
    except (CatalogError, SpotifyOauthError) as e:
        print(f"❌ Error: {e}")
        return 1

    session = Session(catalog=catalog, library=library)
    app = PlaylistBrowserApp(session, log_level=settings.log_level)
    try:
        app.run()
    finally:
        session.channel.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
