"""
State shared by both trees, created once at startup.
"""

import threading
from dataclasses import dataclass, field
from typing import Iterable, Set

from .catalog import Catalog
from .events import TrackChannel
from .models import Track


class LibrarySnapshot:
    """Ids of the user's saved tracks as last seen.

    Read from the UI thread and updated from the playlist listener thread.
    """

    def __init__(self, tracks: Iterable[Track] = ()) -> None:
        self._lock = threading.Lock()
        self._ids: Set[str] = set()
        self.replace(tracks)

    def replace(self, tracks: Iterable[Track]) -> None:
        ids = {track.id for track in tracks}
        with self._lock:
            self._ids = ids

    def contains(self, track_id: str) -> bool:
        with self._lock:
            return track_id in self._ids

    def add(self, track_id: str) -> None:
        with self._lock:
            self._ids.add(track_id)

    def discard(self, track_id: str) -> None:
        with self._lock:
            self._ids.discard(track_id)


@dataclass
class Session:
    """Everything the tree builders need, passed explicitly."""

    catalog: Catalog
    library: LibrarySnapshot = field(default_factory=LibrarySnapshot)
    channel: TrackChannel = field(default_factory=TrackChannel)
