# services/storage.py
"""Small load/save document stores used by the import accumulator."""
import copy
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class DocumentStore:
    """Interface: load() returns the stored document (or None), save(doc) replaces it"""

    def load(self):
        raise NotImplementedError

    def save(self, document):
        raise NotImplementedError


class JsonFileStore(DocumentStore):
    """Whole-document JSON file, rewritten in full on every save"""

    def __init__(self, path):
        self.path = Path(path)

    def load(self):
        if not self.path.exists():
            return None
        with open(self.path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def save(self, document):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)
        logger.debug(f"Saved document to {self.path}")


class InMemoryStore(DocumentStore):
    def __init__(self, document=None):
        self.document = copy.deepcopy(document)
        self.saves = 0

    def load(self):
        return copy.deepcopy(self.document)

    def save(self, document):
        self.document = copy.deepcopy(document)
        self.saves += 1
