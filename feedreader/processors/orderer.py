"""Orders feed items by publish date, newest first."""

import calendar
import re

# Internal to feedparser; pyproject.toml pins feedparser to <7 for this import
from feedparser.datetimes import _parse_date

# Sort key for dates that cannot be parsed, older than any real instant
OLDEST = float('-inf')

# Fractional seconds after hh:mm:ss, which feedparser's time tuples drop
FRACTION_RE = re.compile(r':\d{2}(\.\d+)')


def parse_pub_date(value):
    """Parses a publish date into UTC epoch seconds.

    Uses feedparser's date handlers, so RFC 822, W3C-DTF/ISO 8601 and the
    other formats feeds use in practice are all understood. Fractional
    seconds are kept.

    Args:
        value: Date text as found in the feed

    Returns:
        Epoch seconds, or None when the text is not a recognizable date
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        parsed = _parse_date(text)
    except (ValueError, OverflowError, TypeError, IndexError, KeyError, AttributeError):
        return None
    if not parsed:
        return None

    timestamp = calendar.timegm(parsed)
    fraction = FRACTION_RE.search(text)
    if fraction:
        return timestamp + float(fraction.group(1))
    return timestamp


def _sort_key(item):
    timestamp = parse_pub_date(item.pub_date)
    return OLDEST if timestamp is None else timestamp


def order_items(items):
    """Returns the items sorted by publish date, most recent first.

    The sort is stable, so items with equal dates keep their feed order, and
    unparsable dates end up last.
    """
    return sorted(items, key=_sort_key, reverse=True)
