"""Tests for the GetOrder use case."""

import pytest

from ims.application.dto import OrderLineSpec
from ims.application.get_order import GetOrderHandler
from ims.application.place_order import PlaceOrderHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.exceptions import OrderNotFoundError
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Money
from tests.fakes import FakeEventPublisher, FakeUnitOfWork


def _uow() -> FakeUnitOfWork:
    return FakeUnitOfWork(
        [
            Product(id="P", name="Widget", price=Money.of("100.00"), stock=10),
            Product(id="Q", name="Gadget", price=Money.of("2.50"), stock=10),
        ]
    )


class TestGetOrder:

    def test_round_trip_matches_placed_order(self):
        uow = _uow()
        placed = PlaceOrderHandler(uow, FakeEventPublisher()).handle(
            "doc", "Bob", [OrderLineSpec("P", 3), OrderLineSpec("Q", 4)]
        )

        fetched = GetOrderHandler(uow).handle(placed.id)

        assert fetched.id == placed.id
        assert fetched.items == placed.items
        assert fetched.total == placed.total
        assert fetched.remaining_stock == {}
        assert [(i.product_id, i.quantity, i.unit_price) for i in fetched.items] == [
            ("P", 3, "100.00"),
            ("Q", 4, "2.50"),
        ]

    def test_stable_after_price_change(self):
        uow = _uow()
        placed = PlaceOrderHandler(uow, FakeEventPublisher()).handle(
            "doc", "Bob", [OrderLineSpec("P", 1)]
        )

        UpdateProductHandler(uow).handle("P", name="Widget", price="150.00")

        fetched = GetOrderHandler(uow).handle(placed.id)
        assert fetched.items[0].unit_price == "100.00"
        assert fetched.total == "100.00"

    def test_not_found(self):
        with pytest.raises(OrderNotFoundError, match="not found") as excinfo:
            GetOrderHandler(_uow()).handle("missing")
        assert excinfo.value.code == "NotFound"

    def test_lookup_does_not_write(self):
        uow = _uow()
        with pytest.raises(OrderNotFoundError):
            GetOrderHandler(uow).handle("missing")
        assert uow.commits == 0
