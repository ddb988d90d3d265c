"""Parts inventory: stock listing and consumption."""

import logging
from typing import List, Optional

from database import DocumentStore
from errors import InsufficientStock, NotFound

logger = logging.getLogger(__name__)


def find_part(document: dict, part_id: str) -> Optional[dict]:
    return next((p for p in document["parts"] if p.get("id") == part_id), None)


class InventoryLedger:
    def __init__(self, store: DocumentStore):
        self.store = store

    def list(self) -> List[dict]:
        return self.store.load()["parts"]

    def consume(self, part_id: str, quantity: int, document: Optional[dict] = None) -> dict:
        """Take ``quantity`` units of a part out of stock.

        With ``document`` the change is made inside the caller's
        transaction; otherwise the ledger opens and commits its own.
        Raises ``NotFound`` or ``InsufficientStock`` without touching
        the stock.
        """
        if document is None:
            with self.store.transaction() as doc:
                return self.consume(part_id, quantity, doc)

        part = find_part(document, part_id)
        if part is None:
            raise NotFound("Part not found in inventory.", {"part_id": part_id})
        if part["quantity"] < quantity:
            logger.warning(
                "Stock too low for %s: requested %d, %d left", part_id, quantity, part["quantity"]
            )
            raise InsufficientStock(part["partName"], part["quantity"])

        part["quantity"] -= quantity
        logger.info("Consumed %d x %s, %d left", quantity, part["partName"], part["quantity"])
        return part
