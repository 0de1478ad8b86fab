"""Integration tests for the ShowOrder and ListOrders queries."""

import pytest

from farmorders.application.list_orders import ListOrdersHandler
from farmorders.application.place_order import PlaceOrderHandler
from farmorders.application.show_order import ShowOrderHandler
from farmorders.domain.exceptions import EntityNotFoundError, ForbiddenError
from farmorders.domain.model.principal import Principal
from tests.application.helpers import BUYER_ID, SELLER_ID, listings, request
from tests.fakes import FakeClock, FakeUnitOfWork

BUYER = Principal(buyer_id=BUYER_ID)


def _setup() -> tuple[FakeUnitOfWork, FakeClock]:
    return FakeUnitOfWork(listings()), FakeClock()


class TestShowOrder:

    def test_buyer_sees_order_with_reservation(self):
        uow, clock = _setup()
        placed = PlaceOrderHandler(uow, clock=clock).handle(BUYER, request(("1", 2, "120")))

        dto = ShowOrderHandler(uow).handle(placed.id, BUYER)

        assert dto == placed
        assert dto.created_at == "2024-03-01 09:00 UTC"

    def test_seller_sees_order(self):
        uow, clock = _setup()
        placed = PlaceOrderHandler(uow, clock=clock).handle(BUYER, request(("1", 2, "120")))
        dto = ShowOrderHandler(uow).handle(placed.id, Principal(buyer_id="u-a", seller_id=SELLER_ID))
        assert dto.id == placed.id

    def test_stranger_forbidden(self):
        uow, clock = _setup()
        placed = PlaceOrderHandler(uow, clock=clock).handle(BUYER, request(("1", 2, "120")))
        with pytest.raises(ForbiddenError):
            ShowOrderHandler(uow).handle(placed.id, Principal(buyer_id="nosy"))

    def test_unknown_order(self):
        uow, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(uow).handle(3, BUYER)


class TestListOrders:

    def test_newest_first(self):
        uow, clock = _setup()
        place = PlaceOrderHandler(uow, clock=clock)
        first = place.handle(BUYER, request(("1", 1, "120")))
        clock.advance(minutes=5)
        second = place.handle(BUYER, request(("2", 1, "80")))
        place.handle(Principal(buyer_id="other"), request(("3", 1, "60")))

        orders = ListOrdersHandler(uow).handle(BUYER_ID)

        assert [o.id for o in orders] == [second.id, first.id]

    def test_no_orders(self):
        uow, _ = _setup()
        assert ListOrdersHandler(uow).handle(BUYER_ID) == []
