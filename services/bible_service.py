# services/bible_service.py
import logging

from services.custom_bibles import is_custom_version
from utils.errors import ParseFailure
from utils.reference_parser import build_passage_id, format_reference, parse_query

logger = logging.getLogger(__name__)


class BibleService:
    """Combines the remote content API with the bundled custom versions"""

    def __init__(self, api_client, custom_bibles):
        self.api_client = api_client
        self.custom_bibles = custom_bibles

    def get_versions(self):
        api_versions = self.api_client.get_versions()
        custom_versions = self.custom_bibles.list_versions()
        return [dict(version, isFavorite=False) for version in api_versions + custom_versions]

    def get_passage(self, bible_id, passage_id, show_verse_numbers=True):
        if is_custom_version(bible_id):
            return self.custom_bibles.get_passage(bible_id, passage_id, show_verse_numbers)
        return self.api_client.get_passage(bible_id, passage_id, show_verse_numbers)

    def lookup(self, query, bible_id, show_verse_numbers=True):
        """Parse a reader query, fetch the passage and label it with a readable reference"""
        parsed = parse_query(query)
        if not parsed:
            raise ParseFailure(query, message='Invalid search format')

        passage_id = build_passage_id(parsed)
        logger.info(f"Looking up '{query}' as {passage_id} in {bible_id}")
        passage = dict(self.get_passage(bible_id, passage_id, show_verse_numbers))
        passage['reference'] = format_reference(passage.get('reference', passage_id), query)
        return {'data': passage, 'parsed': parsed.to_dict(), 'passageId': passage_id}
