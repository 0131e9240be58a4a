import re
import unittest
from unittest.mock import patch

from feedreader.config.settings import NO_TITLE, NO_LINK, NO_DESCRIPTION
from feedreader.core.errors import FieldExtractionFailure
from feedreader.extractors.item_extractor import (
    as_sequence, current_timestamp, extract_item, extract_items, find_item_nodes, node_text
)
from feedreader.parsers.xml_tree import parse_xml_tree

ISO_TIMESTAMP_RE = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$')

FIRST_ITEM = """
    <item>
      <title>First post</title>
      <link>https://example.com/first</link>
      <pubDate>Mon, 06 Jan 2025 10:00:00 GMT</pubDate>
      <description>Hello</description>
      <guid isPermaLink="false">post-1</guid>
    </item>"""

SECOND_ITEM = """
    <item>
      <title>Second post</title>
      <link>https://example.com/second</link>
      <pubDate>Tue, 07 Jan 2025 10:00:00 GMT</pubDate>
      <description>World</description>
    </item>"""


def feed_with(*items):
    return (
        '<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">'
        '<channel><title>Blog</title>' + ''.join(items) + '</channel></rss>'
    )


class TestExtractItems(unittest.TestCase):

    def test_extracts_every_item_in_document_order(self):
        items = extract_items(parse_xml_tree(feed_with(FIRST_ITEM, SECOND_ITEM)))

        self.assertEqual(len(items), 2)
        self.assertEqual([item.title for item in items], ['First post', 'Second post'])
        self.assertEqual(items[0].link, 'https://example.com/first')
        self.assertEqual(items[0].pub_date, 'Mon, 06 Jan 2025 10:00:00 GMT')
        self.assertEqual(items[0].description, 'Hello')

    def test_single_and_multiple_items_are_equivalent(self):
        single = extract_items(parse_xml_tree(feed_with(FIRST_ITEM)))
        multiple = extract_items(parse_xml_tree(feed_with(FIRST_ITEM, SECOND_ITEM)))

        self.assertEqual(len(single), 1)
        self.assertEqual(single[0], multiple[0])
        self.assertEqual(single[0].to_dict(), multiple[0].to_dict())

    def test_item_count_matches_source(self):
        for count in (0, 1, 2, 5):
            with self.subTest(count=count):
                tree = parse_xml_tree(feed_with(*([SECOND_ITEM] * count)))
                self.assertEqual(len(extract_items(tree)), count)

    def test_missing_path_segments_yield_no_items(self):
        self.assertEqual(extract_items({}), [])
        self.assertEqual(extract_items(parse_xml_tree('<rss version="2.0"/>')), [])
        self.assertEqual(extract_items(parse_xml_tree('<rss><channel><title>x</title></channel></rss>')), [])
        self.assertEqual(extract_items(parse_xml_tree('<feed><entry><title>x</title></entry></feed>')), [])

    def test_missing_title_uses_placeholder_only_for_title(self):
        item = extract_item({
            'link': 'https://example.com/a',
            'description': 'Body text',
            'pubDate': 'Mon, 06 Jan 2025 10:00:00 GMT',
        })

        self.assertEqual(item.title, NO_TITLE)
        self.assertEqual(item.link, 'https://example.com/a')
        self.assertEqual(item.description, 'Body text')

    def test_missing_link_uses_hash_placeholder(self):
        item = extract_item({'title': 'No link here'})

        self.assertEqual(item.link, NO_LINK)
        self.assertEqual(item.link, '#')
        self.assertIsNone(item.guid)

    def test_missing_pub_date_uses_current_timestamp(self):
        item = extract_item({'title': 'Undated'})
        self.assertRegex(item.pub_date, ISO_TIMESTAMP_RE)

    @patch('feedreader.extractors.item_extractor.current_timestamp', return_value='2025-01-06T10:00:00.000Z')
    def test_pub_date_fallback_is_evaluated_per_item(self, mock_now):
        items = extract_items(parse_xml_tree(feed_with('<item/>', FIRST_ITEM)))

        self.assertEqual(items[0].pub_date, '2025-01-06T10:00:00.000Z')
        self.assertEqual(items[1].pub_date, 'Mon, 06 Jan 2025 10:00:00 GMT')
        mock_now.assert_called_once_with()

    def test_description_falls_back_to_encoded_content(self):
        tree = parse_xml_tree(feed_with(
            '<item><title>x</title><content:encoded><![CDATA[<p>Rich</p>]]></content:encoded></item>'
        ))
        self.assertEqual(extract_items(tree)[0].description, '<p>Rich</p>')

    def test_description_prefers_description_over_encoded_content(self):
        item = extract_item({'description': 'Short', 'content:encoded': '<p>Long</p>'})
        self.assertEqual(item.description, 'Short')

    def test_description_placeholder_when_both_missing(self):
        self.assertEqual(extract_item({'title': 'x'}).description, NO_DESCRIPTION)

    def test_empty_description_counts_as_missing(self):
        item = extract_item({'description': '', 'content:encoded': 'Encoded'})
        self.assertEqual(item.description, 'Encoded')

    def test_guid_read_from_text_key(self):
        items = extract_items(parse_xml_tree(feed_with(FIRST_ITEM)))
        self.assertEqual(items[0].guid, 'post-1')

    def test_guid_falls_back_to_link(self):
        items = extract_items(parse_xml_tree(feed_with(SECOND_ITEM)))
        self.assertEqual(items[0].guid, 'https://example.com/second')

    def test_malformed_item_does_not_stop_extraction(self):
        tree = parse_xml_tree(feed_with('<item>just text</item>', SECOND_ITEM))
        items = extract_items(tree)

        self.assertEqual(len(items), 2)
        self.assertEqual(items[0].title, NO_TITLE)
        self.assertEqual(items[0].link, NO_LINK)
        self.assertEqual(items[0].description, NO_DESCRIPTION)
        self.assertEqual(items[1].title, 'Second post')

    def test_unreadable_field_is_replaced_by_fallback(self):
        item = extract_item({'title': 42, 'link': 'https://example.com/a'})

        self.assertEqual(item.title, NO_TITLE)
        self.assertEqual(item.link, 'https://example.com/a')

    def test_repeated_link_uses_first_value(self):
        item = extract_item({'link': ['https://example.com/a', 'https://example.com/b']})
        self.assertEqual(item.link, 'https://example.com/a')


class TestHelpers(unittest.TestCase):

    def test_as_sequence(self):
        self.assertEqual(as_sequence(None), [])
        self.assertEqual(as_sequence({'a': 'b'}), [{'a': 'b'}])
        self.assertEqual(as_sequence(['x', 'y']), ['x', 'y'])

    def test_find_item_nodes_normalizes_arity(self):
        one = {'rss': {'channel': {'item': {'title': 'a'}}}}
        many = {'rss': {'channel': {'item': [{'title': 'a'}, {'title': 'b'}]}}}
        self.assertEqual(find_item_nodes(one), [{'title': 'a'}])
        self.assertEqual(len(find_item_nodes(many)), 2)

    def test_node_text_shapes(self):
        self.assertEqual(node_text('abc'), 'abc')
        self.assertIsNone(node_text(''))
        self.assertIsNone(node_text(None))
        self.assertEqual(node_text({'@_isPermaLink': 'true', '#text': 'id-1'}), 'id-1')
        self.assertIsNone(node_text({'@_href': 'https://example.com'}))
        self.assertEqual(node_text(['', {'#text': 'second'}]), 'second')

    def test_node_text_rejects_unknown_shapes(self):
        with self.assertRaises(FieldExtractionFailure):
            node_text(42)

    def test_current_timestamp_format(self):
        self.assertRegex(current_timestamp(), ISO_TIMESTAMP_RE)


if __name__ == '__main__':
    unittest.main()
