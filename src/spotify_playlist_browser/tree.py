import logging
from typing import Optional, Set

from textual.widgets.tree import TreeNode

from .errors import LoadError
from .node import Node

logger = logging.getLogger(__name__)


class LazyTree:
    """Expands nodes on demand and tracks the focused node of a tree widget.

    ``host`` is a textual ``Tree`` whose node payloads are ``Node`` objects.
    Besides the ``Tree`` API it must provide ``focus_node(tree_node)``, which
    moves the cursor once the widget has laid out any pending changes.
    """

    def __init__(self, host) -> None:
        self.host = host
        # Nodes whose loader has run successfully
        self._loaded: Set[Node] = set()

    @property
    def root(self) -> TreeNode:
        return self.host.root

    @property
    def current(self) -> Optional[TreeNode]:
        return self.host.cursor_node

    def populate(self) -> None:
        """Load the root's children as the top level of the tree.

        Safe to call again after a failed load.
        """
        root = self.root.data
        try:
            children = root.load_children()
        except LoadError as e:
            logger.error("could not load %s: %s", root.label, e)
            return

        self._loaded.add(root)
        for child in children:
            child.level = 1
            self._attach(self.root, child)
        self.root.expand()

        if self.root.children:
            self.host.focus_node(self.root.children[0])

    def _attach(self, parent: TreeNode, child: Node, before: Optional[int] = None) -> TreeNode:
        return parent.add(
            child.styled_label(),
            data=child,
            before=before,
            allow_expand=child.expandable,
        )

    def expand_current(self) -> bool:
        current = self.current
        if current is None:
            return False
        return self.expand(current)

    def expand(self, tree_node: TreeNode) -> bool:
        """Expand a node, running its loader only until it first succeeds.

        Returns:
            True if the node ends up expanded
        """
        if self.is_loaded(tree_node):
            tree_node.expand()
            return True

        node: Node = tree_node.data
        if node is None or not node.expandable:
            return False

        try:
            children = node.load_children()
        except LoadError as e:
            # Node stays collapsed; pressing right again retries
            logger.error("%s", e)
            return False

        self._loaded.add(node)
        for child in children:
            self._attach(tree_node, child)
        tree_node.expand()
        return True

    def is_loaded(self, tree_node: TreeNode) -> bool:
        return bool(tree_node.children) or tree_node.data in self._loaded

    def collapse_current(self) -> None:
        current = self.current
        if current is not None:
            current.collapse()

    def collapse_all(self) -> None:
        """Collapse every top-level subtree, keeping focus as close as possible."""
        selected = self.current
        for child in self.root.children:
            child.collapse_all()
        if selected is not None:
            self.host.focus_node(self.nearest_visible(selected))

    def nearest_visible(self, tree_node: TreeNode) -> TreeNode:
        """The node itself if shown, else its outermost collapsed ancestor."""
        visible = tree_node
        ancestor = tree_node.parent
        while ancestor is not None and ancestor is not self.root:
            if not ancestor.is_expanded:
                visible = ancestor
            ancestor = ancestor.parent
        return visible

    def jump_to_initial(self, letter: str) -> bool:
        """Focus the first top-level node whose name starts with ``letter``."""
        current = self.current
        if current is None or current.data.level != 1:
            return False

        initial = letter.upper()
        logger.debug("searching for items starting with %s", initial)
        for child in self.root.children:
            if child.data.name[:1].upper() == initial:
                logger.debug("found %s", child.data.label)
                self.host.focus_node(child)
                return True
        return False

    def find_top_level(self, name: str) -> Optional[TreeNode]:
        for child in self.root.children:
            if child.data.name == name:
                return child
        return None

    def prepend(self, parent: TreeNode, node: Node) -> TreeNode:
        """Insert ``node`` as the first child of ``parent``."""
        return self._attach(parent, node, before=0 if parent.children else None)

    def refresh_label(self, tree_node: TreeNode) -> None:
        tree_node.set_label(tree_node.data.styled_label())

    def focus(self, tree_node: TreeNode) -> None:
        self.host.focus_node(tree_node)
