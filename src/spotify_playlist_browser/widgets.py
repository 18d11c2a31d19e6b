import logging
import threading
from typing import Optional

from textual import events
from textual.app import App
from textual.widgets import Log, Tree
from textual.widgets.tree import TreeNode

from .keys import KeyDispatcher
from .node import Node
from .tree import LazyTree


class CatalogTree(Tree[Node]):
    """Tree widget whose nodes load their children on first expansion.

    The root line is hidden; ``title`` and the root label are shown on the
    border instead.
    """

    DEFAULT_CSS = """
    CatalogTree {
        border: round $secondary;
    }
    CatalogTree:focus {
        border: round $accent;
    }
    """

    def __init__(self, title: str, root: Node, *, id: Optional[str] = None) -> None:
        super().__init__(root.styled_label(), data=root, id=id)
        self.show_root = False
        self.auto_expand = False
        self.border_title = title
        self.border_subtitle = root.label
        self.controller = LazyTree(self)
        self.dispatcher = KeyDispatcher(self.controller)

    def focus_node(self, node: TreeNode[Node]) -> None:
        # Nodes added in this cycle have no line number until the tree is laid out
        self.call_after_refresh(self.move_cursor, node)

    def on_key(self, event: events.Key) -> None:
        character = event.character if event.is_printable else None
        if self.dispatcher.dispatch(event.key, character):
            event.stop()
            event.prevent_default()

    def on_tree_node_expanded(self, event: Tree.NodeExpanded) -> None:
        """Load children of a node expanded by a mouse click."""
        node = event.node
        if self.controller.is_loaded(node):
            return
        if not self.controller.expand(node):
            node.collapse()


class LogPanelHandler(logging.Handler):
    """Writes formatted log records as lines of a ``Log`` widget.

    Records emitted from worker threads are handed to the UI thread.
    """

    def __init__(self, app: App, panel: Log, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.app = app
        self.panel = panel
        # Created during mount, so this is the UI thread
        self._ui_thread_id = threading.get_ident()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
        except Exception:
            self.handleError(record)
            return

        if self.app.is_running and not self._on_ui_thread():
            self.app.call_from_thread(self.panel.write_line, line)
        else:
            self.panel.write_line(line)

    def _on_ui_thread(self) -> bool:
        return self._ui_thread_id == threading.get_ident()
