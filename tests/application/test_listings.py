"""Integration tests for the listing use cases (add, set, show)."""

import pytest

from farmorders.application.add_listing import AddListingHandler
from farmorders.application.set_listing import SetListingHandler
from farmorders.application.show_listings import ShowListingsHandler
from farmorders.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    ValidationError,
)
from farmorders.domain.model.listed_item import ListingStatus
from tests.application.helpers import SELLER_ID, listings
from tests.fakes import FakeUnitOfWork


class TestAddListing:

    def test_first_listing_gets_id_one(self):
        uow = FakeUnitOfWork()
        item = AddListingHandler(uow).handle(SELLER_ID, "Onions", "45.50", 20)
        assert item.id == "1"
        assert uow.ledger.available("1") == 20

    def test_ids_continue_after_existing(self):
        uow = FakeUnitOfWork(listings())
        item = AddListingHandler(uow).handle(SELLER_ID, "Onions", "45", 20, unit="bunch")
        assert item.id == "4"
        assert item.unit == "bunch"

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            AddListingHandler(FakeUnitOfWork()).handle(SELLER_ID, "Onions", "0", 1)

    def test_negative_stock_rejected(self):
        uow = FakeUnitOfWork()
        with pytest.raises(ValidationError):
            AddListingHandler(uow).handle(SELLER_ID, "Onions", "10", -1)
        assert uow.ledger.list_all() == []

    def test_name_required(self):
        with pytest.raises(ValidationError, match="name is required"):
            AddListingHandler(FakeUnitOfWork()).handle(SELLER_ID, " ", "10", 1)


class TestSetListing:

    def test_set_quantity(self):
        uow = FakeUnitOfWork(listings())
        SetListingHandler(uow).handle("1", SELLER_ID, quantity=3)
        assert uow.ledger.available("1") == 3

    def test_mark_unavailable(self):
        uow = FakeUnitOfWork(listings())
        SetListingHandler(uow).handle("1", SELLER_ID, available=False)
        assert uow.ledger.get("1").status == ListingStatus.UNAVAILABLE

    def test_other_seller_forbidden(self):
        uow = FakeUnitOfWork(listings())
        with pytest.raises(ForbiddenError):
            SetListingHandler(uow).handle("1", "farmer-b", quantity=0)
        assert uow.ledger.available("1") == 10

    def test_unknown_listing(self):
        with pytest.raises(EntityNotFoundError):
            SetListingHandler(FakeUnitOfWork()).handle("9", SELLER_ID, quantity=1)


class TestShowListings:

    def test_lists_all_with_formatted_price(self):
        lines = ShowListingsHandler(FakeUnitOfWork(listings())).handle()
        assert [line.listed_item_id for line in lines] == ["1", "2", "3"]
        assert lines[0].unit_price == "KES 120.00"
        assert lines[0].available == 10
        assert lines[0].status == "available"
