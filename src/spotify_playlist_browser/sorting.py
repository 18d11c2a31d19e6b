"""
Sort keys and date parsing for catalog results.
"""

from datetime import datetime
from typing import Tuple

from dateutil import parser as date_parser

from .models import Album, Artist, Track

ARTICLE = "The "

# Missing month/day components of a release date fall back to these
_RELEASE_DATE_DEFAULT = datetime(1, 1, 1)


def strip_article(name: str) -> str:
    """Drop a leading "The " so "The Beatles" sorts and searches as "Beatles".

    Only the exact, case-sensitive prefix is removed.
    """
    if name.startswith(ARTICLE):
        return name[len(ARTICLE) :]
    return name


def parse_release_date(release_date: str) -> datetime:
    """Parse a release date of year, month or day precision.

    Spotify reports "1967", "1967-06" or "1967-06-01" depending on what the
    label supplied. Unparseable dates sort first.

    Args:
        release_date: Date string as reported by the catalog

    Returns:
        Datetime with missing components set to January / the 1st
    """
    if not release_date:
        return _RELEASE_DATE_DEFAULT
    try:
        return date_parser.parse(release_date, default=_RELEASE_DATE_DEFAULT)
    except (ValueError, OverflowError):
        return _RELEASE_DATE_DEFAULT


def artist_sort_key(artist: Artist) -> str:
    return strip_article(artist.name)


def album_sort_key(album: Album) -> datetime:
    return parse_release_date(album.release_date)


def track_sort_key(track: Track) -> Tuple[str, str]:
    """Sort tracks by first artist (ignoring "The "), then by title."""
    return strip_article(track.artist), track.name
