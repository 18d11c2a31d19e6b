from typing import Dict, List, Optional, Sequence, Set, Tuple

import pytest

from spotify_playlist_browser.catalog import ChildKind, Entity
from spotify_playlist_browser.errors import LoadError, MutationError
from spotify_playlist_browser.models import Artist, Playlist, Track
from spotify_playlist_browser.node import Node
from spotify_playlist_browser.session import LibrarySnapshot, Session
from spotify_playlist_browser.tree import LazyTree


class FakeTreeNode:
    """Stand-in for textual's TreeNode with the same surface LazyTree uses."""

    def __init__(self, label, data=None, parent=None, allow_expand=True):
        self.label = label
        self.data = data
        self.parent = parent
        self.allow_expand = allow_expand
        self.is_expanded = False
        self._children: List["FakeTreeNode"] = []

    @property
    def children(self) -> List["FakeTreeNode"]:
        return list(self._children)

    def add(self, label, data=None, *, before=None, allow_expand=True):
        node = FakeTreeNode(label, data, self, allow_expand)
        if before is None:
            self._children.append(node)
        else:
            # textual rejects an index that doesn't name an existing child
            assert 0 <= before < len(self._children)
            self._children.insert(before, node)
        return node

    def expand(self):
        self.is_expanded = True

    def collapse(self):
        self.is_expanded = False

    def collapse_all(self):
        self.is_expanded = False
        for child in self._children:
            child.collapse_all()

    def set_label(self, label):
        self.label = label


class FakeTree:
    """Stand-in for CatalogTree: a root, a cursor and focus_node."""

    def __init__(self, root: Node):
        self.root = FakeTreeNode(root.styled_label(), root)
        self.root.is_expanded = True
        self.cursor_node: Optional[FakeTreeNode] = None

    def focus_node(self, node: FakeTreeNode) -> None:
        self.cursor_node = node


class FakeCatalog:
    """In-memory catalog recording every call."""

    def __init__(self):
        self.artists: List[Artist] = []
        self.playlists: List[Playlist] = []
        self.saved_tracks: List[Track] = []
        self.children: Dict[Tuple[str, ChildKind], List[Entity]] = {}
        self.failing_parents: Set[str] = set()
        self.fail_mutations = False
        self.load_calls: List[Tuple[str, ChildKind]] = []
        self.added: List[Tuple[str, str]] = []
        self.removed: List[Tuple[str, str]] = []

    def list_followed_artists(self) -> List[Artist]:
        return list(self.artists)

    def list_playlists(self) -> List[Playlist]:
        return list(self.playlists)

    def list_saved_tracks(self) -> List[Track]:
        return list(self.saved_tracks)

    def list_children(self, parent_id: str, kind: ChildKind) -> Sequence[Entity]:
        self.load_calls.append((parent_id, kind))
        if parent_id in self.failing_parents:
            raise LoadError(f"cannot list {kind.value} of {parent_id}")
        return list(self.children.get((parent_id, kind), []))

    def add_track(self, destination_id: str, track_id: str) -> None:
        if self.fail_mutations:
            raise MutationError("add refused")
        self.added.append((destination_id, track_id))

    def remove_track(self, destination_id: str, track_id: str) -> None:
        if self.fail_mutations:
            raise MutationError("remove refused")
        self.removed.append((destination_id, track_id))


def static_loader(*labels: str, counter: Optional[List[int]] = None):
    """Loader returning fresh leaf nodes, counting its invocations."""

    def load(node: Node) -> List[Node]:
        if counter is not None:
            counter.append(1)
        return [Node(name=label, label=label, id=label.lower()) for label in labels]

    return load


def build_tree(*top_level: Node) -> LazyTree:
    """A populated LazyTree over a FakeTree with the given top-level nodes."""
    root = Node(label="root", loader=lambda node: list(top_level))
    tree = LazyTree(FakeTree(root))
    tree.populate()
    return tree


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def session(catalog: FakeCatalog) -> Session:
    return Session(catalog=catalog, library=LibrarySnapshot())
