import asyncio
import logging

from conftest import FakeCatalog

from spotify_playlist_browser.app import PlaylistBrowserApp
from spotify_playlist_browser.catalog import ChildKind
from spotify_playlist_browser.models import Album, Artist, Playlist, Track
from spotify_playlist_browser.node import Highlight
from spotify_playlist_browser.session import Session


def fill(catalog: FakeCatalog) -> None:
    catalog.artists = [Artist(id="ar1", name="The Beatles"), Artist(id="ar2", name="ACDC")]
    catalog.playlists = [Playlist(id="PL1", name="Road Trip")]
    catalog.children[("ar1", ChildKind.TOP_TRACKS)] = [Track(id="t1", name="Help!", album="Help!")]


async def test_trees_are_populated_on_mount(session: Session, catalog: FakeCatalog) -> None:
    fill(catalog)
    app = PlaylistBrowserApp(session)

    async with app.run_test() as pilot:
        await pilot.pause()

        assert [node.data.label for node in app.artist_tree.root.children] == ["The Beatles", "ACDC"]
        assert [node.data.label for node in app.playlist_tree.root.children] == ["a) Library", "b) Road Trip"]
        assert app.artist_tree.has_focus

        await pilot.press("tab")
        await pilot.pause()
        assert app.playlist_tree.has_focus


async def test_keys_expand_and_jump(session: Session, catalog: FakeCatalog) -> None:
    fill(catalog)
    app = PlaylistBrowserApp(session)

    async with app.run_test() as pilot:
        await pilot.pause()
        tree = app.artist_tree

        await pilot.press("right")
        await pilot.pause()
        beatles = tree.root.children[0]
        assert beatles.is_expanded
        assert [node.data.label for node in beatles.children] == ["Popular Tracks", "Albums", "Related Artists"]

        await pilot.press("left", "a")
        await pilot.pause()
        assert not beatles.is_expanded
        assert tree.cursor_node.data.label == "ACDC"


async def test_track_keypress_adds_to_playlist(session: Session, catalog: FakeCatalog) -> None:
    fill(catalog)
    app = PlaylistBrowserApp(session)

    async with app.run_test() as pilot:
        await pilot.pause()

        await pilot.press("right", "down", "right", "down")
        await pilot.pause()
        assert app.artist_tree.cursor_node.data.label == "Help! - Help!"

        await pilot.press("b")
        road_trip = app.playlist_tree.root.children[1]
        for _ in range(50):
            await pilot.pause(0.05)
            if road_trip.children:
                break
        await pilot.pause()

        assert catalog.added == [("PL1", "t1")]
        (added,) = road_trip.children
        assert added.data.meta.highlight is Highlight.ADDED
        assert app.playlist_tree.cursor_node is added


async def test_clicked_node_loads_children(session: Session, catalog: FakeCatalog) -> None:
    fill(catalog)
    catalog.children[("ar1", ChildKind.ALBUMS)] = [Album(id="al1", name="Help!", release_date="1965-08-06")]
    catalog.failing_parents = {"ar1"}
    app = PlaylistBrowserApp(session)

    async with app.run_test() as pilot:
        await pilot.pause()
        beatles = app.artist_tree.root.children[0]

        # Toggling is what a click on the expand arrow does
        beatles.toggle()
        await pilot.pause()
        assert beatles.is_expanded
        assert [node.data.label for node in beatles.children] == ["Popular Tracks", "Albums", "Related Artists"]

        albums = beatles.children[1]
        albums.toggle()
        await pilot.pause()
        assert not albums.is_expanded
        assert albums.children == []

        catalog.failing_parents.clear()
        albums.toggle()
        await pilot.pause()
        assert albums.is_expanded
        assert [node.data.name for node in albums.children] == ["Help!"]
        assert catalog.load_calls == [("ar1", ChildKind.ALBUMS), ("ar1", ChildKind.ALBUMS)]


async def test_worker_thread_logs_reach_panel(session: Session, catalog: FakeCatalog) -> None:
    fill(catalog)
    app = PlaylistBrowserApp(session)
    logger = logging.getLogger("spotify_playlist_browser.worker")

    async with app.run_test() as pilot:
        await pilot.pause()
        await asyncio.to_thread(logger.warning, "sent from a worker")
        await pilot.pause()

        assert any(line.endswith("sent from a worker") for line in app.query_one("#log").lines)


async def test_quit_closes_channel(session: Session, catalog: FakeCatalog) -> None:
    fill(catalog)
    app = PlaylistBrowserApp(session)

    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("q")

    assert session.channel.closed
