"""StockEntry — append-only ledger of received goods."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ims.domain.exceptions import InvoiceRequiredError
from ims.domain.model.value_objects import Quantity


@dataclass(frozen=True)
class StockEntry:
    """One receipt of goods against an invoice. Never mutated or deleted."""

    id: str
    product_id: str
    quantity: Quantity
    invoice_number: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def record(product_id: str, quantity: Quantity, invoice_number: str) -> StockEntry:
        if not invoice_number or not invoice_number.strip():
            raise InvoiceRequiredError()
        return StockEntry(
            id=uuid.uuid4().hex,
            product_id=product_id,
            quantity=quantity,
            invoice_number=invoice_number.strip(),
        )
