import functools
import logging
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
    Union,
)

import requests
import spotipy

from .constants import BATCH_SIZE, DEFAULT_MARKET
from .errors import LoadError, MutationError
from .models import Album, Artist, Playlist, Track
from .sorting import album_sort_key, artist_sort_key, track_sort_key

T = TypeVar("T")

Entity = Union[Artist, Album, Track, Playlist]

logger = logging.getLogger(__name__)


class ChildKind(Enum):
    """What kind of children to list below a parent entity."""

    ALBUMS = "albums"
    ALBUM_TRACKS = "album_tracks"
    TOP_TRACKS = "top_tracks"
    RELATED_ARTISTS = "related_artists"
    PLAYLIST_TRACKS = "playlist_tracks"


class CatalogSource(Protocol):
    """Read side of the catalog. Results are fully paginated and sorted."""

    def list_followed_artists(self) -> List[Artist]: ...

    def list_playlists(self) -> List[Playlist]: ...

    def list_saved_tracks(self) -> List[Track]: ...

    def list_children(self, parent_id: str, kind: ChildKind) -> Sequence[Entity]: ...


class MutationSource(Protocol):
    """Write side of the catalog. An empty destination means the library."""

    def add_track(self, destination_id: str, track_id: str) -> None: ...

    def remove_track(self, destination_id: str, track_id: str) -> None: ...


_API_ERRORS = (spotipy.SpotifyException, requests.RequestException)


def _reads(func: Callable[..., T]) -> Callable[..., T]:
    """Translate client failures of a read call into LoadError."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return func(*args, **kwargs)
        except _API_ERRORS as e:
            raise LoadError(f"{func.__name__} failed: {e}") from e

    return wrapper


def _writes(func: Callable[..., None]) -> Callable[..., None]:
    """Translate client failures of a write call into MutationError."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        try:
            func(*args, **kwargs)
        except _API_ERRORS as e:
            raise MutationError(f"{func.__name__} failed: {e}") from e

    return wrapper


class SpotifyCatalog:
    """Catalog and mutation source backed by the Spotify Web API."""

    sp: spotipy.Spotify
    market: str
    _user: Optional[Dict[str, Any]]

    def __init__(self, spotify_client: spotipy.Spotify, market: str = DEFAULT_MARKET):
        self.sp = spotify_client
        self.market = market
        self._user = None

    @property
    def user(self) -> Dict[str, Any]:
        """Current user's profile, fetched once."""
        if self._user is None:
            user = self.sp.current_user()
            if user is None:
                raise LoadError("Failed to fetch current user info")
            self._user = user  # type: ignore # spotipy doesn't have proper typing
        return self._user

    def _create_track(self, track: Dict[str, Any]) -> Track:
        """Create Track object from Spotify track data."""
        return Track(
            id=track["id"],
            name=track["name"],
            artists=tuple(artist["name"] for artist in track.get("artists", [])),
            album=(track.get("album") or {}).get("name", ""),
            track_number=track.get("track_number", 0),
        )

    def _create_artist(self, artist: Dict[str, Any]) -> Artist:
        return Artist(id=artist["id"], name=artist["name"])

    def _paginate_spotify_results(
        self,
        initial_results: Dict[str, Any],
        process_item_func: Callable[[Dict[str, Any]], Optional[T]],
    ) -> List[T]:
        """Generic pagination handler for Spotify API results."""
        items = []
        results = initial_results

        while results:
            for item in results["items"]:
                processed = process_item_func(item)
                if processed:
                    items.append(processed)

            results = self.sp.next(results) if results["next"] else None  # type: ignore

        return items

    def _process_saved_item(self, item: Dict[str, Any]) -> Optional[Track]:
        # Removed tracks and podcast episodes come back without a usable track
        track = item.get("track")
        if track and track.get("id") and track.get("type", "track") == "track":
            return self._create_track(track)
        return None

    @_reads
    def list_followed_artists(self) -> List[Artist]:
        """Fetch every followed artist, sorted by name ignoring "The "."""
        artists = []
        after = None

        # Followed artists page by cursor rather than by offset
        while True:
            results = self.sp.current_user_followed_artists(limit=BATCH_SIZE, after=after)
            page = results["artists"]
            artists.extend(self._create_artist(item) for item in page["items"])

            after = (page.get("cursors") or {}).get("after")
            if not after:
                break

        return sorted(artists, key=artist_sort_key)

    @_reads
    def list_playlists(self) -> List[Playlist]:
        """Fetch all user-owned playlists."""
        user_id = self.user["id"]

        def process_playlist(playlist: Dict[str, Any]) -> Optional[Playlist]:
            if playlist["owner"]["id"] == user_id:
                return Playlist(
                    name=playlist["name"],
                    id=playlist["id"],
                )
            return None

        results = self.sp.current_user_playlists(limit=BATCH_SIZE)
        return self._paginate_spotify_results(results, process_playlist)

    @_reads
    def list_saved_tracks(self) -> List[Track]:
        """Fetch the user's library, sorted by artist then title."""
        results = self.sp.current_user_saved_tracks(limit=BATCH_SIZE)
        tracks = self._paginate_spotify_results(results, self._process_saved_item)
        return sorted(tracks, key=track_sort_key)

    def list_children(self, parent_id: str, kind: ChildKind) -> Sequence[Entity]:
        """List the children of kind ``kind`` below entity ``parent_id``."""
        listers: Dict[ChildKind, Callable[[str], Sequence[Entity]]] = {
            ChildKind.ALBUMS: self.get_artist_albums,
            ChildKind.ALBUM_TRACKS: self.get_album_tracks,
            ChildKind.TOP_TRACKS: self.get_top_tracks,
            ChildKind.RELATED_ARTISTS: self.get_related_artists,
            ChildKind.PLAYLIST_TRACKS: self.get_playlist_tracks,
        }
        logger.debug("listing %s of %s", kind.value, parent_id)
        return listers[kind](parent_id)

    @_reads
    def get_artist_albums(self, artist_id: str) -> List[Album]:
        """Fetch albums and singles of an artist, oldest release first."""

        def process_album(album: Dict[str, Any]) -> Album:
            return Album(
                id=album["id"],
                name=album["name"],
                release_date=album.get("release_date", ""),
                album_type=album.get("album_type", "album"),
            )

        results = self.sp.artist_albums(
            artist_id, include_groups="album,single", limit=BATCH_SIZE
        )
        albums = self._paginate_spotify_results(results, process_album)
        return sorted(albums, key=album_sort_key)

    @_reads
    def get_album_tracks(self, album_id: str) -> List[Track]:
        """Fetch the tracks of an album in album order."""
        results = self.sp.album_tracks(album_id, limit=BATCH_SIZE)
        return self._paginate_spotify_results(results, self._create_track)

    @_reads
    def get_top_tracks(self, artist_id: str) -> List[Track]:
        results = self.sp.artist_top_tracks(artist_id, country=self.market)
        return [self._create_track(track) for track in results["tracks"]]

    @_reads
    def get_related_artists(self, artist_id: str) -> List[Artist]:
        results = self.sp.artist_related_artists(artist_id)
        return [self._create_artist(artist) for artist in results["artists"]]

    @_reads
    def get_playlist_tracks(self, playlist_id: str) -> List[Track]:
        """Fetch all tracks from a specific playlist, sorted by artist then title."""
        results = self.sp.playlist_tracks(playlist_id, limit=BATCH_SIZE)
        tracks = self._paginate_spotify_results(results, self._process_saved_item)
        return sorted(tracks, key=track_sort_key)

    @_writes
    def add_track(self, destination_id: str, track_id: str) -> None:
        """Add a track to a playlist, or to the library when no playlist is given."""
        if destination_id == "":
            self.sp.current_user_saved_tracks_add([track_id])
        else:
            self.sp.playlist_add_items(destination_id, [track_id])

    @_writes
    def remove_track(self, destination_id: str, track_id: str) -> None:
        """Remove a track from a playlist, or from the library when no playlist is given."""
        if destination_id == "":
            self.sp.current_user_saved_tracks_delete([track_id])
        else:
            self.sp.playlist_remove_all_occurrences_of_items(destination_id, [track_id])


class Catalog(CatalogSource, MutationSource, Protocol):
    """Both sides of the catalog, as used by the browser."""
