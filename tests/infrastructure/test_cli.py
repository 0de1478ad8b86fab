"""Smoke tests for the click CLI against a throwaway SQLite database."""

import pytest
from click.testing import CliRunner

from farmorders.domain.service.restock_reconciler import RestockReconciler
from farmorders.infrastructure import bootstrap
from farmorders.infrastructure.cli.main import cli


@pytest.fixture
def run(cli_env):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, list(args), catch_exceptions=False)

    return _run


@pytest.fixture
def stocked(run):
    result = run("listing", "add", "--seller", "farmer-a", "--name", "Tomatoes", "--price", "120", "--quantity", "10")
    assert result.exit_code == 0, result.output
    result = run("listing", "add", "--seller", "farmer-a", "--name", "Kale", "--price", "80", "--quantity", "10")
    assert result.exit_code == 0, result.output
    return run


def _listing_line(run, name: str) -> str:
    return next(line for line in run("listing", "list").output.splitlines() if name in line)


class TestListingCommands:

    def test_add_and_list(self, stocked):
        result = stocked("listing", "list")
        assert result.exit_code == 0
        assert "Tomatoes" in result.output
        assert "KES 120.00" in result.output

    def test_set_requires_a_change(self, stocked):
        result = stocked("listing", "set", "--id", "1", "--seller", "farmer-a")
        assert result.exit_code != 0
        assert "Nothing to change" in result.output

    def test_set_by_other_seller(self, stocked):
        result = stocked("listing", "set", "--id", "1", "--seller", "farmer-b", "--quantity", "0")
        assert result.exit_code == 1
        assert "not yours" in result.output


class TestOrderCommands:

    def test_place_show_and_list(self, stocked):
        result = stocked(
            "order", "place", "--buyer", "buyer-1",
            "--items", "1:5@120,2:3@80", "--address", "Kiambu Rd 4", "--date", "2024-03-04",
        )
        assert result.exit_code == 0, result.output
        assert "Order #1 placed." in result.output
        assert "KES 840.00" in result.output
        assert "Reserved until" in result.output

        result = stocked("order", "show", "--id", "1", "--buyer", "buyer-1")
        assert result.exit_code == 0
        assert "status=pending" in result.output

        result = stocked("order", "list", "--buyer", "buyer-1")
        assert result.exit_code == 0
        assert "pending" in result.output

        assert " 5 " in _listing_line(stocked, "Tomatoes")

    def test_bad_item_format(self, stocked):
        result = stocked("order", "place", "--buyer", "b", "--items", "1x5", "--address", "x")
        assert result.exit_code == 2
        assert "Invalid item format" in result.output

    def test_insufficient_stock_is_reported(self, stocked):
        result = stocked("order", "place", "--buyer", "b", "--items", "1:11@120", "--address", "x")
        assert result.exit_code == 1
        assert "Insufficient stock for Tomatoes" in result.output

    def test_self_purchase_is_reported(self, stocked):
        result = stocked(
            "order", "place", "--buyer", "u-1", "--as-seller", "farmer-a",
            "--items", "1:1@120", "--address", "x",
        )
        assert result.exit_code == 1
        assert "self-purchase" in result.output

    def test_cancel_restores_stock(self, stocked):
        stocked("order", "place", "--buyer", "b", "--items", "1:4@120", "--address", "x")

        result = stocked("order", "cancel", "--id", "1", "--buyer", "b")

        assert result.exit_code == 0
        assert "cancelled" in result.output
        assert " 10 " in _listing_line(stocked, "Tomatoes")

    def test_cancel_after_restock_says_so(self, stocked):
        stocked("order", "place", "--buyer", "b", "--items", "1:4@120", "--address", "x")
        with bootstrap.unit_of_work() as uow:
            RestockReconciler(uow).reconcile(1)
            uow.commit()

        result = stocked("order", "cancel", "--id", "1", "--buyer", "b")

        assert result.exit_code == 0
        assert "stock had already been restored" in result.output
        assert " 10 " in _listing_line(stocked, "Tomatoes")

    def test_seller_lifecycle(self, stocked):
        stocked("order", "place", "--buyer", "b", "--items", "1:1@120", "--address", "x")

        assert stocked("order", "confirm", "--id", "1", "--buyer", "u-a", "--as-seller", "farmer-a").exit_code == 0
        assert stocked("order", "complete", "--id", "1", "--buyer", "u-a", "--as-seller", "farmer-a").exit_code == 0

        result = stocked("order", "decline", "--id", "1", "--buyer", "u-a", "--as-seller", "farmer-a")
        assert result.exit_code == 1
        assert "completed" in result.output


class TestPaymentAndReservationCommands:

    def test_record_payment(self, stocked):
        stocked("order", "place", "--buyer", "b", "--items", "1:1@120", "--address", "x")

        result = stocked("payment", "record", "--id", "1", "--status", "completed")

        assert result.exit_code == 0
        assert "payment is now completed (order pending)" in result.output

    def test_sweep_with_nothing_expired(self, stocked):
        stocked("order", "place", "--buyer", "b", "--items", "1:1@120", "--address", "x")

        result = stocked("reservation", "sweep")

        assert result.exit_code == 0
        assert "Expired 0 order(s)" in result.output
        assert "No expired reservations." in stocked("reservation", "expired").output
