"""Exceptions raised at the catalog boundary."""


class CatalogError(Exception):
    """Base class for failures talking to the music catalog."""


class LoadError(CatalogError):
    """Raised when children of a node could not be fetched."""


class MutationError(CatalogError):
    """Raised when a track could not be added to or removed from a playlist."""
