"""Exception hierarchy shared by the ingestion and voting services."""


class PicvoterError(RuntimeError):
    """Base exception for picvoter failures."""


class DecodeError(PicvoterError):
    """Raised when a raw file cannot be decoded as a supported raster image."""


class NotFoundError(PicvoterError):
    """Raised when an operation targets an image id that does not exist."""


class InvalidValueError(PicvoterError, ValueError):
    """Raised when a vote value is anything other than +1 or -1."""


class StoreError(PicvoterError):
    """Raised when the metadata store fails to read or write.

    Wraps the underlying SQLAlchemy error, available as ``__cause__``.
    """


class EmptyPoolError(PicvoterError):
    """Raised when no image is eligible for presentation."""
