"""Feed service that runs the fetch, parse, extract, sanitize and order pipeline."""

from feedreader.config.settings import load_config
from feedreader.extractors.item_extractor import extract_items
from feedreader.fetchers.rss_fetcher import RSSFetcher
from feedreader.parsers.xml_tree import parse_xml_tree
from feedreader.processors.orderer import order_items
from feedreader.processors.sanitizer import sanitize_item
from feedreader.core.reporter import build_success, build_failure


class FeedService:
    """Produces the feed envelope for the configured source.

    Each call re-runs the whole pipeline; nothing is cached between calls.
    """

    def __init__(self, config=None, fetcher=None):
        """Initialize the service.

        Args:
            config: FeedConfig, read from the environment settings when omitted
            fetcher: Object with a fetch_feed() method, an RSSFetcher by default
        """
        self.config = config if config is not None else load_config()
        self.fetcher = fetcher if fetcher is not None else RSSFetcher(self.config)

    def get_feed(self):
        """Fetches and normalizes the feed.

        Returns:
            FeedResult; failures are reported through its error field, never raised
        """
        try:
            print(f"[INFO] Fetching RSS: {self.config.rss_url}")
            raw_feed = self.fetcher.fetch_feed()

            tree = parse_xml_tree(raw_feed)
            items = [sanitize_item(item) for item in extract_items(tree)]
            items = order_items(items)

            print(f"[INFO] RSS fetched successfully, {len(items)} items")
            return build_success(items)
        except Exception as e:
            print(f"[ERROR] RSS fetch failed: {e}")
            return build_failure(e)
