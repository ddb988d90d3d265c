"""
Flat JSON document store.

The whole application state (users, job cards, parts) lives in one JSON
file. It is read in full, changed in memory and written back in full.
Mutations go through ``DocumentStore.transaction()`` which holds a lock
for the entire read-modify-write cycle, so two requests never overwrite
each other's changes.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path

from config import settings
from errors import StoreError

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "jobCards", "parts")


def empty_document() -> dict:
    return {name: [] for name in COLLECTIONS}


class DocumentStore:
    def __init__(self, path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> dict:
        """Read the whole document, creating an empty one on first use."""
        if not self.path.exists():
            with self._lock:
                # A transaction may have created it while we waited.
                if not self.path.exists():
                    logger.info("Document %s not found, starting empty", self.path)
                    document = empty_document()
                    self.save(document)
                    return document
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            logger.exception("Error reading document %s", self.path)
            raise StoreError("Could not read from database.", {"path": str(self.path)}) from e
        if not isinstance(document, dict):
            raise StoreError("Could not read from database.", {"path": str(self.path)})
        for name in COLLECTIONS:
            document.setdefault(name, [])
        return document

    def save(self, document: dict) -> None:
        """Replace the stored document with ``document``."""
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.exception("Error writing document %s", self.path)
            raise StoreError("Could not write to database.", {"path": str(self.path)}) from e

    @contextmanager
    def transaction(self):
        """Yield the loaded document and save it if the block succeeds.

        An exception inside the block discards every in-memory change.
        """
        with self._lock:
            document = self.load()
            yield document
            self.save(document)


db = DocumentStore(settings.db_path)


def get_db() -> DocumentStore:
    return db
