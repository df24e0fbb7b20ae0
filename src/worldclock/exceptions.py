"""Errors that abort a run."""


class CatalogError(Exception):
    """The page catalog could not be read; without it there is nothing to fetch."""


class CacheStoreError(Exception):
    """The snapshot store could not be read or replaced."""
