"""Builds response envelopes and turns failures into user-facing messages."""

from feedreader.core.errors import ConfigurationFailure, TimeoutFailure
from feedreader.core.models import FeedResult

CONFIGURATION_MESSAGE = (
    "RSS URL is not configured. Set RSS_URL in the .env file "
    "or configure a default in the settings."
)
UNREACHABLE_MESSAGE = (
    "RSS source is unreachable, check the network connection "
    "or whether the RSS URL is correct."
)
TIMEOUT_MESSAGE = "RSS request timed out, please try again later."
GENERIC_MESSAGE_PREFIX = "Failed to fetch RSS"

FETCH_FAILED_INDICATORS = ['fetch failed']
TIMEOUT_INDICATORS = ['timeout', 'timed out']


def _describe(error):
    return str(error) or type(error).__name__


def is_timeout_error(error):
    if isinstance(error, TimeoutFailure):
        return True
    error_str = str(error).lower()
    return any(indicator in error_str for indicator in TIMEOUT_INDICATORS)


def is_unreachable_error(error):
    error_str = str(error).lower()
    return any(indicator in error_str for indicator in FETCH_FAILED_INDICATORS)


def classify_error(error):
    """Chooses the user-facing message for a pipeline failure.

    Args:
        error: The exception that stopped the pipeline

    Returns:
        Message for the envelope's error field
    """
    if isinstance(error, ConfigurationFailure):
        return CONFIGURATION_MESSAGE
    if is_unreachable_error(error):
        return UNREACHABLE_MESSAGE
    if is_timeout_error(error):
        return TIMEOUT_MESSAGE
    return f"{GENERIC_MESSAGE_PREFIX}: {_describe(error)}"


def build_success(items):
    return FeedResult.success(items)


def build_failure(error):
    return FeedResult.failure(classify_error(error))
