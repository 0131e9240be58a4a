"""RSS feed fetcher for retrieving the raw feed document over HTTP."""

import re

import requests

from feedreader.config.settings import USER_AGENT, ACCEPT_HEADER
from feedreader.core.errors import ConfigurationFailure, FetchFailure, TimeoutFailure
from feedreader.utils.retry import retry_with_attempts

_XML_ENCODING_RE = re.compile(rb'<\?xml[^>]*encoding=["\']([A-Za-z0-9._-]+)["\']')


class RSSFetcher:
    """Class for fetching the raw text of the configured RSS feed."""

    def __init__(self, config):
        self.config = config
        self.headers = {
            'User-Agent': USER_AGENT,
            'Accept': ACCEPT_HEADER,
            'Cache-Control': 'no-cache'
        }

    def fetch_feed(self):
        """Fetches the configured feed.

        Returns:
            Response body as text

        Raises:
            ConfigurationFailure: No feed URL is configured
            TimeoutFailure: Every attempt timed out
            FetchFailure: The host was unreachable or answered with a non-2xx status
        """
        feed_url = (self.config.rss_url or '').strip()
        if not feed_url:
            raise ConfigurationFailure("RSS URL is not configured")

        fetch = retry_with_attempts(self.config.retries)(self._request)
        return fetch(feed_url)

    def _request(self, feed_url):
        """Performs a single GET attempt and maps transport errors to feed failures."""
        try:
            with requests.Session() as session:
                response = session.get(
                    feed_url,
                    headers=self.headers,
                    timeout=self.config.timeout_seconds
                )
        except requests.Timeout as e:
            raise TimeoutFailure(f"Request timeout after {self.config.timeout_ms}ms: {e}") from e
        except requests.RequestException as e:
            raise FetchFailure(f"fetch failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise FetchFailure(
                f'[GET] "{feed_url}": {response.status_code} {response.reason or ""}'.rstrip(),
                status_code=response.status_code
            )

        return self._decode_body(response)

    @staticmethod
    def _decode_body(response):
        """Decodes the body using the HTTP charset, the XML declaration, or UTF-8."""
        content_type = response.headers.get('Content-Type', '') or ''
        if 'charset=' in content_type.lower():
            return response.text

        content = response.content or b''
        match = _XML_ENCODING_RE.search(content[:200])
        encoding = match.group(1).decode('ascii') if match else 'utf-8'
        try:
            return content.decode(encoding, errors='replace')
        except LookupError:
            return content.decode('utf-8', errors='replace')
