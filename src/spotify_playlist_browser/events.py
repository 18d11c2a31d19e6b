"""
Hand-off of "add track to playlist" requests from the artist tree to the
playlist tree.

The artist tree only ever sends on a ``TrackChannel``. A single
``PlaylistListener`` drains it in a worker thread, performs the catalog
call there and then hands all widget changes to the UI thread in one piece.
"""

import functools
import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from textual.widgets.tree import TreeNode

from .catalog import MutationSource
from .errors import MutationError
from .node import Node
from .tree import LazyTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddTrackToPlaylist:
    """Request to add ``track`` to the playlist whose index is ``destination``."""

    track: Node
    destination: str


class ChannelClosed(Exception):
    """Raised when sending on a channel that has been closed."""


class TrackChannel:
    """Unbounded, closeable queue of ``AddTrackToPlaylist`` requests.

    Iterating the channel blocks for the next request and ends once the
    channel is closed and every request sent before that has been yielded.
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[Optional[AddTrackToPlaylist]]" = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, intent: AddTrackToPlaylist) -> None:
        """Queue a request without waiting for it to be handled."""
        with self._lock:
            if self._closed:
                raise ChannelClosed("track channel is closed")
            self._queue.put(intent)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(None)

    def __iter__(self) -> Iterator[AddTrackToPlaylist]:
        while True:
            intent = self._queue.get()
            if intent is None:
                return
            yield intent


class PlaylistListener:
    """Applies track requests to the playlist tree.

    Args:
        tree: Playlist tree controller
        mutations: Catalog used to add the track
        make_node: Builds the node shown for an added track, given the
            requested track node and the destination playlist node
        run_on_ui: Runs a callable on the UI thread and waits for it
    """

    def __init__(
        self,
        tree: LazyTree,
        mutations: MutationSource,
        make_node: Callable[[Node, Node], Node],
        run_on_ui: Callable[[Callable[[], Any]], Any],
    ) -> None:
        self.tree = tree
        self.mutations = mutations
        self.make_node = make_node
        self.run_on_ui = run_on_ui

    def run(self, channel: TrackChannel) -> None:
        """Handle requests until the channel is closed."""
        for intent in channel:
            self.handle(intent)
        logger.debug("track channel closed")

    def handle(self, intent: AddTrackToPlaylist) -> bool:
        """Add one track. Returns True if the catalog accepted it."""
        # Top-level playlist nodes never change after the tree is built
        playlist_node = self.tree.find_top_level(intent.destination)
        if playlist_node is None:
            return False

        playlist: Node = playlist_node.data
        logger.info('adding track "%s" to playlist "%s"', intent.track.name, playlist.label)
        try:
            self.mutations.add_track(playlist.id, intent.track.id)
        except MutationError as e:
            logger.error("%s", e)
            return False

        added = self.make_node(intent.track, playlist)
        self.run_on_ui(functools.partial(self._show_added, playlist_node, added))
        return True

    def _show_added(self, playlist_node: TreeNode, added: Node) -> None:
        # Without the playlist's own tracks loaded, prepending would stop
        # them from ever loading
        if not self.tree.expand(playlist_node):
            return
        tree_node = self.tree.prepend(playlist_node, added)
        self.tree.focus(tree_node)
