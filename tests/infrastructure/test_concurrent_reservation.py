"""Two buyers racing for the last unit: exactly one wins."""

import threading

from farmorders.application.dto import OrderItemSpec, PlaceOrderRequest
from farmorders.application.place_order import PlaceOrderHandler
from farmorders.domain.exceptions import InsufficientStockError
from farmorders.domain.model.principal import Principal


def test_last_unit_is_sold_once(seeded):
    with seeded() as uow:
        item = uow.ledger.get("1")
        item.set_stock(1)
        uow.ledger.save(item)
        uow.commit()

    barrier = threading.Barrier(2)
    results: list[str] = []
    lock = threading.Lock()

    def buy(buyer: str) -> None:
        handler = PlaceOrderHandler(seeded())
        request = PlaceOrderRequest(items=[OrderItemSpec("1", 1, "120")], delivery_address="x")
        barrier.wait()
        try:
            handler.handle(Principal(buyer_id=buyer), request)
            outcome = "ok"
        except InsufficientStockError:
            outcome = "sold out"
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=buy, args=(f"buyer-{n}",)) for n in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert sorted(results) == ["ok", "sold out"]
    with seeded() as uow:
        assert uow.ledger.get("1").quantity_available == 0
        assert len(uow.orders.list_for_buyer("buyer-0") + uow.orders.list_for_buyer("buyer-1")) == 1
