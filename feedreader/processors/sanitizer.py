"""Description sanitizer: strips markup, decodes a few entities and bounds the length."""

import re

from feedreader.config.settings import DESCRIPTION_MAX_LENGTH, NO_DESCRIPTION

TAG_RE = re.compile(r'<[^>]*?>', re.IGNORECASE)

# Applied in order; anything else is left as written
ENTITY_REPLACEMENTS = (
    ('&nbsp;', ' '),
    ('&amp;', '&'),
    ('&lt;', '<'),
    ('&gt;', '>'),
)


def sanitize_description(value, max_length=DESCRIPTION_MAX_LENGTH):
    """Cleans a description for display.

    Tags are removed before entities are decoded so a decoded '<' is never
    taken for the start of a tag.

    Args:
        value: Raw description (text, or any other node shape)
        max_length: Maximum number of characters kept

    Returns:
        Plain text of at most max_length characters
    """
    if not isinstance(value, str):
        return NO_DESCRIPTION

    text = TAG_RE.sub('', value)
    for entity, replacement in ENTITY_REPLACEMENTS:
        text = text.replace(entity, replacement)
    # Trailing whitespace left by the cut is dropped too
    return text.strip()[:max_length].rstrip()


def sanitize_item(item):
    """Sanitizes the item's description in place and returns the item."""
    item.description = sanitize_description(item.description)
    return item
