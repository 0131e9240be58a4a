"""Failure taxonomy for the feed pipeline."""


class FeedError(Exception):
    """Base class for every failure raised by the feed pipeline."""


class ConfigurationFailure(FeedError):
    """The feed source URL is missing from the configuration."""


class FetchFailure(FeedError):
    """The feed could not be retrieved (unreachable host or non-2xx status)."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class TimeoutFailure(FeedError):
    """The feed request did not complete within the configured timeout."""


class ParseFailure(FeedError):
    """The response body is not a well-formed XML document."""


class FieldExtractionFailure(FeedError):
    """A single item field has a shape that cannot be read as text.

    Never leaves the extractor: it is always replaced by the field's fallback.
    """
