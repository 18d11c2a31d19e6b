"""
Key handling shared by both trees.

Every printable character is consumed by the tree: the focused node's key
action gets it first, then top-level nodes use it to jump by initial.
Arrow and escape keys drive expansion. Anything else is left to the tree
widget for normal cursor movement.
"""

from typing import Optional

from .tree import LazyTree

COLLAPSE_KEY = "left"
EXPAND_KEY = "right"
COLLAPSE_ALL_KEY = "escape"


class KeyDispatcher:
    """Routes one keypress at a time to a ``LazyTree``."""

    def __init__(self, tree: LazyTree) -> None:
        self.tree = tree

    def dispatch(self, key: str, character: Optional[str] = None) -> bool:
        """Handle a keypress.

        Args:
            key: Key name as reported by the terminal, e.g. "left" or "a"
            character: The printable character typed, or None

        Returns:
            True if the key was consumed, False to let the widget handle it
        """
        current = self.tree.current
        if current is None:
            # Top level failed to load; right retries it
            if key == EXPAND_KEY and not self.tree.is_loaded(self.tree.root):
                self.tree.populate()
                return True
            return False

        if character is not None:
            node = current.data
            if node.handles_keys:
                node.handle_key(character)
                self.tree.refresh_label(current)
            elif node.level == 1:
                self.tree.jump_to_initial(character)
            return True

        if key == COLLAPSE_KEY:
            self.tree.collapse_current()
        elif key == EXPAND_KEY:
            self.tree.expand_current()
        elif key == COLLAPSE_ALL_KEY:
            self.tree.collapse_all()
        else:
            return False
        return True
