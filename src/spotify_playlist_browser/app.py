"""
Terminal UI: artist tree and playlist tree side by side, log panel below.
"""

import logging
from typing import Optional

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Log

from . import artists, playlists
from .constants import LOG_DATE_FORMAT, LOG_FORMAT, PACKAGE_LOGGER
from .events import PlaylistListener
from .session import Session
from .widgets import CatalogTree, LogPanelHandler


class PlaylistBrowserApp(App):
    """Browse followed artists and send their tracks to playlists."""

    TITLE = "Spotify Playlist Browser"
    CSS = """
    #trees {
        height: 3fr;
    }
    #trees CatalogTree {
        width: 1fr;
    }
    #log {
        height: 1fr;
        border: round $secondary;
    }
    """
    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("tab", "switch_tree", "Switch tree", priority=True),
    ]

    def __init__(self, session: Session, log_level: int = logging.INFO) -> None:
        super().__init__()
        self.session = session
        self.artist_browser = artists.ArtistBrowser(session)
        self.playlist_browser = playlists.PlaylistBrowser(session)
        self.log_level = log_level
        self._log_handler: Optional[LogPanelHandler] = None

    @property
    def artist_tree(self) -> CatalogTree:
        return self.query_one("#artists", CatalogTree)

    @property
    def playlist_tree(self) -> CatalogTree:
        return self.query_one("#playlists", CatalogTree)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="trees"):
            yield CatalogTree(artists.TITLE, self.artist_browser.root(), id="artists")
            yield CatalogTree(playlists.TITLE, self.playlist_browser.root(), id="playlists")
        panel = Log(id="log")
        panel.border_title = "LOG"
        yield panel
        yield Footer()

    def on_mount(self) -> None:
        self._install_log_handler()

        self.artist_tree.controller.populate()
        self.playlist_tree.controller.populate()

        listener = PlaylistListener(
            self.playlist_tree.controller,
            self.session.catalog,
            self.playlist_browser.track_added,
            self.call_from_thread,
        )
        self.listen_for_tracks(listener)
        self.artist_tree.focus()

    def _install_log_handler(self) -> None:
        handler = LogPanelHandler(self, self.query_one("#log", Log), self.log_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        logging.getLogger(PACKAGE_LOGGER).addHandler(handler)
        self._log_handler = handler

    @work(thread=True, name="playlist-listener")
    def listen_for_tracks(self, listener: PlaylistListener) -> None:
        """Apply tracks sent from the artist tree until shutdown."""
        listener.run(self.session.channel)

    def action_switch_tree(self) -> None:
        if self.artist_tree.has_focus:
            self.playlist_tree.focus()
        else:
            self.artist_tree.focus()

    async def action_quit(self) -> None:
        self.session.channel.close()
        self.exit()

    def on_unmount(self) -> None:
        self.session.channel.close()
        if self._log_handler is not None:
            logging.getLogger(PACKAGE_LOGGER).removeHandler(self._log_handler)
            self._log_handler = None
