"""Tests for the PlaceOrder use case.

Uses the in-memory fake unit of work — no database.
"""

import pytest

from ims.application.dto import OrderLineSpec
from ims.application.place_order import PlaceOrderHandler
from ims.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    NoItemsError,
    ProductsNotFoundError,
    RetryExhaustedError,
)
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Money
from tests.fakes import BrokenEventPublisher, FakeEventPublisher, FakeUnitOfWork


def _setup(
    products: list[Product] | None = None, publisher=None, max_conflict_retries: int = 3
) -> tuple[PlaceOrderHandler, FakeUnitOfWork, FakeEventPublisher]:
    """Build handler with a fake unit of work, optionally pre-loaded with products."""
    if products is None:
        products = [
            Product(id="P", name="Widget", price=Money.of("100.00"), stock=10),
            Product(id="Q", name="Gadget", price=Money.of("25.00"), stock=4),
            Product(id="Z", name="Empty", price=Money.of("5.00"), stock=0),
        ]
    uow = FakeUnitOfWork(products)
    publisher = publisher if publisher is not None else FakeEventPublisher()
    handler = PlaceOrderHandler(uow, publisher, max_conflict_retries=max_conflict_retries)
    return handler, uow, publisher


class TestPlaceOrderHappyPath:

    def test_single_line(self):
        handler, uow, _ = _setup()

        dto = handler.handle("123.456.789-00", "Bob", [OrderLineSpec("P", 3)])

        assert uow.products.stock_of("P") == 7
        assert len(dto.items) == 1
        assert dto.items[0].quantity == 3
        assert dto.items[0].unit_price == "100.00"
        assert dto.total == "300.00"
        assert dto.remaining_stock == {"P": 7}

    def test_persists_order(self):
        handler, uow, _ = _setup()

        dto = handler.handle("doc", "Bob", [OrderLineSpec("P", 1), OrderLineSpec("Q", 2)])

        saved = uow.orders.get_by_id(dto.id)
        assert saved is not None
        assert saved.customer_document == "doc"
        assert saved.seller_name == "Bob"
        assert [(i.product_id, i.quantity.value) for i in saved.items] == [("P", 1), ("Q", 2)]
        assert uow.commits == 1

    def test_only_ordered_products_change(self):
        handler, uow, _ = _setup()

        handler.handle("doc", "Bob", [OrderLineSpec("Q", 4)])

        assert uow.products.stock_of("Q") == 0
        assert uow.products.stock_of("P") == 10
        assert uow.products.stock_of("Z") == 0

    def test_repeated_product_deducted_per_line(self):
        handler, uow, _ = _setup()

        dto = handler.handle("doc", "Bob", [OrderLineSpec("P", 3), OrderLineSpec("P", 2)])

        assert uow.products.stock_of("P") == 5
        assert len(dto.items) == 2

    def test_distinct_order_ids(self):
        handler, _, _ = _setup()
        dto1 = handler.handle("doc", "Bob", [OrderLineSpec("P", 1)])
        dto2 = handler.handle("doc", "Bob", [OrderLineSpec("P", 1)])
        assert dto1.id != dto2.id


class TestPlaceOrderPriceCapture:

    def test_price_snapshot_at_placement(self):
        handler, uow, _ = _setup()

        dto = handler.handle("doc", "Bob", [OrderLineSpec("P", 1)])

        # Change the product price
        with uow:
            widget = uow.products.get_by_id("P")
            widget.update_details(widget.name, Money.of("99.99"), widget.description)
            uow.products.update(widget)
            uow.commit()

        # Existing order still has original price
        saved = uow.orders.get_by_id(dto.id)
        assert str(saved.items[0].unit_price) == "100.00"
        assert str(saved.total) == "100.00"


class TestPlaceOrderValidation:

    def test_no_items_never_touches_storage(self):
        handler, uow, publisher = _setup()
        with pytest.raises(NoItemsError):
            handler.handle("doc", "Bob", [])
        assert uow.entered == 0
        assert publisher.published == []

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, qty):
        handler, uow, _ = _setup()
        with pytest.raises(InvalidQuantityError, match="All quantities must be > 0"):
            handler.handle("doc", "Bob", [OrderLineSpec("P", 1), OrderLineSpec("Q", qty)])
        assert uow.entered == 0

    def test_quantity_checked_before_existence(self):
        handler, _, _ = _setup()
        with pytest.raises(InvalidQuantityError):
            handler.handle("doc", "Bob", [OrderLineSpec("ghost", 0)])

    def test_unknown_product_rejected_without_changes(self):
        handler, uow, _ = _setup()

        with pytest.raises(ProductsNotFoundError, match="ghost"):
            handler.handle("doc", "Bob", [OrderLineSpec("P", 1), OrderLineSpec("ghost", 1)])

        assert uow.products.stock_of("P") == 10
        assert uow.orders.count() == 0

    def test_out_of_stock_reports_detail(self):
        handler, uow, _ = _setup()

        with pytest.raises(InsufficientStockError) as excinfo:
            handler.handle("doc", "Bob", [OrderLineSpec("Z", 1)])

        assert excinfo.value.code == "InsufficientStock"
        assert excinfo.value.product_id == "Z"
        assert excinfo.value.available == 0
        assert excinfo.value.required == 1
        assert uow.products.stock_of("Z") == 0

    def test_full_rollback_when_one_line_short(self):
        handler, uow, publisher = _setup()

        with pytest.raises(InsufficientStockError, match="Gadget"):
            handler.handle("doc", "Bob", [OrderLineSpec("P", 3), OrderLineSpec("Q", 5)])

        assert uow.products.stock_of("P") == 10
        assert uow.products.stock_of("Q") == 4
        assert uow.orders.count() == 0
        assert uow.commits == 0
        assert publisher.published == []

    def test_first_short_line_reported(self):
        handler, _, _ = _setup()

        with pytest.raises(InsufficientStockError) as excinfo:
            handler.handle("doc", "Bob", [OrderLineSpec("Q", 9), OrderLineSpec("Z", 1)])

        assert excinfo.value.product_id == "Q"


class TestPlaceOrderConcurrency:

    def test_conflict_retried_against_fresh_read(self):
        handler, uow, _ = _setup()
        calls = []

        def other_writer(product):
            # first attempt only: another order takes 6 units of P
            if not calls:
                uow.concurrent_write("P", stock=4)
            calls.append(product.id)

        uow.products.before_update = other_writer

        dto = handler.handle("doc", "Bob", [OrderLineSpec("P", 3)])

        assert uow.entered == 2
        assert uow.products.stock_of("P") == 1
        assert uow.orders.get_by_id(dto.id) is not None

    def test_retry_sees_stock_taken_by_winner(self):
        handler, uow, _ = _setup()

        def other_writer(product):
            uow.products.before_update = None
            uow.concurrent_write("P", stock=2)

        uow.products.before_update = other_writer

        with pytest.raises(InsufficientStockError) as excinfo:
            handler.handle("doc", "Bob", [OrderLineSpec("P", 3)])

        assert excinfo.value.available == 2
        assert uow.products.stock_of("P") == 2
        assert uow.orders.count() == 0

    def test_gives_up_after_bounded_retries(self):
        handler, uow, publisher = _setup(max_conflict_retries=2)

        uow.products.before_update = lambda product: uow.concurrent_write(product.id)

        with pytest.raises(RetryExhaustedError, match="try again") as excinfo:
            handler.handle("doc", "Bob", [OrderLineSpec("P", 3)])

        assert excinfo.value.attempts == 3
        assert uow.entered == 3
        assert uow.orders.count() == 0
        assert publisher.published == []


class TestPlaceOrderEvents:

    def test_publishes_order_created(self):
        handler, _, publisher = _setup()

        dto = handler.handle("doc", "Bob", [OrderLineSpec("P", 3)])

        assert len(publisher.published) == 1
        topic, payload = publisher.published[0]
        assert topic == "orders.created"
        assert payload["order_id"] == dto.id
        assert payload["customer_document"] == "doc"
        assert payload["seller_name"] == "Bob"
        assert payload["items"] == [{"product_id": "P", "quantity": 3, "unit_price": "100.00"}]
        assert "created_at" in payload

    def test_broken_sink_does_not_fail_the_order(self):
        handler, uow, _ = _setup(publisher=BrokenEventPublisher())

        dto = handler.handle("doc", "Bob", [OrderLineSpec("P", 3)])

        assert uow.orders.get_by_id(dto.id) is not None
        assert uow.products.stock_of("P") == 7
