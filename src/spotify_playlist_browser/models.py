"""
Entity records returned by the catalog.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Artist:
    """Represents an artist."""

    id: str
    name: str


@dataclass(frozen=True)
class Album:
    """Represents an album, single or compilation."""

    id: str
    name: str
    release_date: str
    album_type: str = "album"


@dataclass(frozen=True)
class Track:
    """Represents a track with the metadata shown in the trees."""

    id: str
    name: str
    artists: Tuple[str, ...] = ()
    album: str = ""
    track_number: int = 0

    @property
    def artist(self) -> str:
        """First credited artist, or an empty string."""
        return self.artists[0] if self.artists else ""


@dataclass(frozen=True)
class Playlist:
    """Represents a playlist owned by the current user."""

    id: str
    name: str
