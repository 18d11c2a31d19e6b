"""
Loaders and key actions for the "My Playlists" tree.

The first top-level node is the user's library (id ""), followed by every
playlist the user owns. Each gets a one-character index from
``PLAYLIST_INDEXES``; pressing that character on a track in the artist tree
adds the track there.
"""

import logging
from typing import List

from .catalog import ChildKind
from .constants import PLAYLIST_INDEXES, REMOVE_KEY
from .errors import MutationError
from .models import Track
from .node import Highlight, Node, NodeMeta
from .session import Session

logger = logging.getLogger(__name__)

TITLE = "PLAYLISTS"
ROOT_LABEL = "My Playlists"
LIBRARY_LABEL = "Library"
LIBRARY_ID = ""


def playlist_track_label(track: Track) -> str:
    return f"{track.artist} - {track.name}"


class PlaylistBrowser:
    """Builds the nodes of the playlist tree from the catalog."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.catalog = session.catalog

    def root(self) -> Node:
        return Node(
            label=ROOT_LABEL,
            meta=NodeMeta(highlight=Highlight.ROOT),
            loader=self.list_playlists,
        )

    def _track_node(self, track: Track, playlist_id: str) -> Node:
        return Node(
            name=track.name,
            label=playlist_track_label(track),
            id=track.id,
            meta=NodeMeta(playlist_id=playlist_id),
            key_action=self.remove_track,
        )

    def list_playlists(self, node: Node) -> List[Node]:
        playlists = self.catalog.list_playlists()

        library_index = PLAYLIST_INDEXES[0]
        result = [
            Node(
                name=library_index,
                label=f"{library_index}) {LIBRARY_LABEL}",
                id=LIBRARY_ID,
                loader=self.list_library,
            )
        ]

        indexes = PLAYLIST_INDEXES[1:]
        for i, playlist in enumerate(playlists):
            if i < len(indexes):
                index = indexes[i]
                label = f"{index}) {playlist.name}"
            else:
                # Out of indexes: still browsable, but tracks can't be sent here
                index = ""
                label = playlist.name
            result.append(
                Node(name=index, label=label, id=playlist.id, loader=self.list_playlist_tracks)
            )

        if len(playlists) > len(indexes):
            logger.warning(
                "%d playlists have no index and cannot receive tracks",
                len(playlists) - len(indexes),
            )
        return result

    def list_library(self, node: Node) -> List[Node]:
        tracks = self.catalog.list_saved_tracks()
        self.session.library.replace(tracks)
        return [self._track_node(track, node.id) for track in tracks]

    def list_playlist_tracks(self, node: Node) -> List[Node]:
        tracks = self.catalog.list_children(node.id, ChildKind.PLAYLIST_TRACKS)
        return [self._track_node(track, node.id) for track in tracks]

    def remove_track(self, node: Node, key: str) -> None:
        """Remove the track from the playlist it is listed under.

        The node stays in the tree; it is recolored to show the removal.
        """
        if key != REMOVE_KEY:
            return
        playlist_id = node.meta.playlist_id
        if playlist_id is None:
            return

        logger.info('removing track "%s" from playlist "%s"', node.label, playlist_id or LIBRARY_LABEL)
        try:
            self.catalog.remove_track(playlist_id, node.id)
        except MutationError as e:
            logger.error("%s", e)
            return

        node.meta.highlight = Highlight.REMOVED
        if playlist_id == LIBRARY_ID:
            self.session.library.discard(node.id)

    def track_added(self, track: Node, playlist: Node) -> Node:
        """Node shown for a track that was just added to ``playlist``."""
        if playlist.id == LIBRARY_ID:
            self.session.library.add(track.id)
        return Node(
            name=track.name,
            label=track.name,
            id=track.id,
            meta=NodeMeta(highlight=Highlight.ADDED, playlist_id=playlist.id),
            key_action=self.remove_track,
        )
