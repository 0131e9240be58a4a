"""Item extractor mapping a generic feed tree onto FeedItem records."""

from datetime import datetime, timezone

from feedreader.config.settings import NO_TITLE, NO_LINK, NO_DESCRIPTION
from feedreader.core.errors import FieldExtractionFailure
from feedreader.core.models import FeedItem
from feedreader.parsers.xml_tree import TEXT_KEY

ITEM_PATH = ('rss', 'channel', 'item')


def as_sequence(value):
    """Normalizes a single node or a list of nodes into a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def current_timestamp():
    """Current UTC time in ISO-8601 form with milliseconds, e.g. 2025-01-06T10:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def node_text(value):
    """Reads the text of a field node.

    Args:
        value: Text leaf, element dict or list of repeated elements

    Returns:
        The text, or None when the field is absent or empty

    Raises:
        FieldExtractionFailure: The node has no readable text
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        text = value.get(TEXT_KEY)
        if text is None or isinstance(text, str):
            return text or None
        raise FieldExtractionFailure(f"Unsupported text node: {type(text).__name__}")
    if isinstance(value, list):
        for entry in value:
            text = node_text(entry)
            if text:
                return text
        return None
    raise FieldExtractionFailure(f"Unsupported field node: {type(value).__name__}")


def find_item_nodes(tree):
    """Descends rss -> channel -> item and returns the item nodes as a list."""
    node = tree
    for segment in ITEM_PATH:
        if not isinstance(node, dict) or segment not in node:
            return []
        node = node[segment]
        # A repeated channel is unusual; the first one carries the items
        if segment != ITEM_PATH[-1] and isinstance(node, list):
            node = node[0] if node else None
    return as_sequence(node)


def _field(item_node, name):
    """Reads one field's text, absorbing shape errors into an absent value."""
    if not isinstance(item_node, dict):
        return None
    try:
        return node_text(item_node.get(name))
    except FieldExtractionFailure as e:
        print(f"[WARNING] Ignoring unreadable '{name}' field: {e}")
        return None


def _raw_field(item_node, name):
    if not isinstance(item_node, dict):
        return None
    return item_node.get(name) or None


def extract_item(item_node):
    """Maps one raw item node to a FeedItem using the per-field fallback order.

    Args:
        item_node: Generic node for a single <item> element

    Returns:
        FeedItem with the description still unsanitized
    """
    title = _field(item_node, 'title') or NO_TITLE
    link = _field(item_node, 'link') or NO_LINK
    pub_date = _field(item_node, 'pubDate') or current_timestamp()

    # Left raw here, the sanitizer replaces non-text shapes
    description = (
        _raw_field(item_node, 'description')
        or _raw_field(item_node, 'content:encoded')
        or NO_DESCRIPTION
    )

    guid = _field(item_node, 'guid') or _field(item_node, 'link')

    return FeedItem(
        title=title,
        link=link,
        pub_date=pub_date,
        description=description,
        guid=guid
    )


def extract_items(tree):
    """Extracts candidate items from a parsed feed tree.

    Args:
        tree: Generic node tree returned by parse_xml_tree

    Returns:
        List of FeedItem records in document order (empty when the feed has no items)
    """
    return [extract_item(node) for node in find_item_nodes(tree)]
