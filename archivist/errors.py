"""Exceptions that abort a run."""


class ArchivistError(Exception):
    """Base class for fatal archivist errors."""


class MissingCredentialsError(ArchivistError, ValueError):
    """Search credentials are not configured."""


class StoreError(ArchivistError):
    """The article store could not be read or written."""
