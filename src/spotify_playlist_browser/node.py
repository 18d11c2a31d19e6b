"""
Navigable items shown in the trees.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from rich.text import Text


class Highlight(str, Enum):
    """Colors a node label can carry. Values are rich color names."""

    ROOT = "green_yellow"
    IN_LIBRARY = "light_sky_blue1"
    ADDED = "light_green"
    REMOVED = "red"


@dataclass
class NodeMeta:
    """Per-node extras read back by the tree and by key actions."""

    highlight: Optional[Highlight] = None
    # Playlist a track was listed under; "" is the library
    playlist_id: Optional[str] = None


Loader = Callable[["Node"], List["Node"]]
KeyAction = Callable[["Node", str], None]


@dataclass(eq=False)
class Node:
    """A single item in a tree.

    A node is expandable when it has a ``loader`` and intercepts keystrokes
    when it has a ``key_action``. The two are independent.
    """

    label: str
    name: str = ""
    id: str = ""
    level: int = 0
    meta: NodeMeta = field(default_factory=NodeMeta)
    loader: Optional[Loader] = None
    key_action: Optional[KeyAction] = None

    @property
    def expandable(self) -> bool:
        return self.loader is not None

    @property
    def handles_keys(self) -> bool:
        return self.key_action is not None

    def load_children(self) -> List["Node"]:
        """Produce this node's children. Raises LoadError on catalog failure."""
        if self.loader is None:
            return []
        return self.loader(self)

    def handle_key(self, key: str) -> None:
        if self.key_action is not None:
            self.key_action(self, key)

    def styled_label(self) -> Text:
        """Label as rendered in a tree, never parsed as markup."""
        if self.meta.highlight is None:
            return Text(self.label)
        return Text(self.label, style=self.meta.highlight.value)
