"""Unit tests for StockEntry."""

import pytest

from ims.domain.exceptions import InvoiceRequiredError
from ims.domain.model.stock_entry import StockEntry
from ims.domain.model.value_objects import Quantity


class TestStockEntryRecord:

    def test_record(self):
        entry = StockEntry.record("p1", Quantity(5), " INV-1 ")
        assert entry.product_id == "p1"
        assert entry.quantity.value == 5
        assert entry.invoice_number == "INV-1"
        assert entry.created_at.tzinfo is not None

    @pytest.mark.parametrize("invoice", ["", "   ", None])
    def test_invoice_required(self, invoice):
        with pytest.raises(InvoiceRequiredError, match="Invoice number required"):
            StockEntry.record("p1", Quantity(5), invoice)

    def test_immutable(self):
        entry = StockEntry.record("p1", Quantity(5), "INV-1")
        with pytest.raises(AttributeError):
            entry.invoice_number = "INV-2"
