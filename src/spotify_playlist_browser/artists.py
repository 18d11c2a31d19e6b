"""
Loaders and key actions for the "Followed Artists" tree.
"""

import logging
from typing import List

from .catalog import ChildKind
from .events import AddTrackToPlaylist, ChannelClosed
from .models import Album, Artist, Track
from .node import Highlight, Node, NodeMeta
from .session import Session
from .sorting import strip_article

logger = logging.getLogger(__name__)

TITLE = "ARTISTS"
ROOT_LABEL = "Followed Artists"


def album_label(album: Album) -> str:
    """Format an album as "Name - (release date)", noting singles etc."""
    label = f"{album.name} - ({album.release_date})"
    if album.album_type != "album":
        label = f"{label} ({album.album_type})"
    return label


def album_track_label(track: Track) -> str:
    return f"{track.track_number:2d} - {track.name}"


def popular_track_label(track: Track) -> str:
    return f"{track.name} - {track.album}"


class ArtistBrowser:
    """Builds the nodes of the artist tree from the catalog."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.catalog = session.catalog

    def root(self) -> Node:
        return Node(
            label=ROOT_LABEL,
            meta=NodeMeta(highlight=Highlight.ROOT),
            loader=self.list_artists,
        )

    def _artist_node(self, artist: Artist) -> Node:
        return Node(
            name=strip_article(artist.name),
            label=artist.name,
            id=artist.id,
            loader=self.list_categories,
        )

    def _track_node(self, track: Track, label: str) -> Node:
        node = Node(name=track.name, label=label, id=track.id, key_action=self.send_to_playlist)
        if self.session.library.contains(track.id):
            node.meta.highlight = Highlight.IN_LIBRARY
        return node

    def list_artists(self, node: Node) -> List[Node]:
        return [self._artist_node(artist) for artist in self.catalog.list_followed_artists()]

    def list_categories(self, node: Node) -> List[Node]:
        """Fixed sub-sections shown under every artist."""
        return [
            Node(name="Popular Tracks", label="Popular Tracks", id=node.id, loader=self.list_popular_tracks),
            Node(name="Albums", label="Albums", id=node.id, loader=self.list_albums),
            Node(name="Related Artists", label="Related Artists", id=node.id, loader=self.list_related_artists),
        ]

    def list_related_artists(self, node: Node) -> List[Node]:
        artists = self.catalog.list_children(node.id, ChildKind.RELATED_ARTISTS)
        return [self._artist_node(artist) for artist in artists]

    def list_albums(self, node: Node) -> List[Node]:
        albums = self.catalog.list_children(node.id, ChildKind.ALBUMS)
        return [
            Node(name=album.name, label=album_label(album), id=album.id, loader=self.list_album_tracks)
            for album in albums
        ]

    def list_album_tracks(self, node: Node) -> List[Node]:
        tracks = self.catalog.list_children(node.id, ChildKind.ALBUM_TRACKS)
        return [self._track_node(track, album_track_label(track)) for track in tracks]

    def list_popular_tracks(self, node: Node) -> List[Node]:
        tracks = self.catalog.list_children(node.id, ChildKind.TOP_TRACKS)
        return [self._track_node(track, popular_track_label(track)) for track in tracks]

    def send_to_playlist(self, node: Node, key: str) -> None:
        """Ask the playlist tree to add this track to the playlist indexed ``key``."""
        try:
            self.session.channel.send(AddTrackToPlaylist(track=node, destination=key))
        except ChannelClosed:
            logger.debug('dropped track "%s": shutting down', node.name)
