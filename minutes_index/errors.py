"""Exception types raised by the minutes index generator."""


class MinutesIndexError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(MinutesIndexError):
    """The parameter file or a template slot is missing or invalid."""


class ListingFetchError(MinutesIndexError):
    """The listing endpoint answered with a non-success status."""

    def __init__(self, url: str, status_code: int, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{reason} ({status_code}) for \"{url}\"")


class MalformedDocumentError(MinutesIndexError):
    """A fragment's opening or closing marker could not be found."""


class RenderTargetError(MinutesIndexError):
    """Building one output target failed."""

    def __init__(self, target: str, cause: Exception):
        self.target = target
        self.cause = cause
        super().__init__(f"{target}: {type(cause).__name__}: {cause}")
