"""Tests for the read side: ShowOrder, ListOrders and OrderStats."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from jewelstore.application.cancel_order import CancelOrderHandler
from jewelstore.application.list_orders import ListOrdersHandler
from jewelstore.application.order_stats import OrderStatsHandler
from jewelstore.application.place_order import PlaceOrderHandler
from jewelstore.application.show_order import ShowOrderHandler
from jewelstore.application.update_order_status import UpdateOrderStatusHandler
from jewelstore.domain.exceptions import OrderNotFoundError, ValidationError
from tests.builders import customer, items, make_product
from tests.fakes import FakeOrderRepository, FakeProductRepository


def _setup():
    """Three orders: 10000 pending, 20000 completed, 30000 cancelled."""
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository([
        make_product("a", price="10000", stock=100),
    ])
    place = PlaceOrderHandler(order_repo, product_repo)
    ids = [place.handle(customer(), items(("a", n))).order.id for n in (1, 2, 3)]

    # Spread creation times so sorting is deterministic
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for offset, order_id in enumerate(ids):
        stored = order_repo._store[order_id]
        stored.created_at = base + timedelta(days=offset)
        stored.updated_at = stored.created_at

    UpdateOrderStatusHandler(order_repo, product_repo).handle(ids[1], "completed")
    CancelOrderHandler(order_repo, product_repo).handle(ids[2])
    return ids, order_repo, product_repo


class TestShowOrder:

    def test_returns_order_with_product_projection(self):
        ids, order_repo, product_repo = _setup()
        dto = ShowOrderHandler(order_repo, product_repo).handle(ids[0])
        assert dto.id == ids[0]
        assert dto.items[0].product.id == "a"
        assert dto.items[0].line_total == Decimal("10000")

    def test_unknown_order(self):
        _, order_repo, product_repo = _setup()
        with pytest.raises(OrderNotFoundError):
            ShowOrderHandler(order_repo, product_repo).handle("missing")


class TestListOrders:

    def test_newest_first_by_default(self):
        ids, order_repo, product_repo = _setup()
        dtos = ListOrdersHandler(order_repo, product_repo).handle()
        assert [d.id for d in dtos] == list(reversed(ids))

    def test_ascending(self):
        ids, order_repo, product_repo = _setup()
        dtos = ListOrdersHandler(order_repo, product_repo).handle(direction="asc")
        assert [d.id for d in dtos] == ids

    def test_sort_by_total_accepts_web_names(self):
        ids, order_repo, product_repo = _setup()
        handler = ListOrdersHandler(order_repo, product_repo)
        by_total = handler.handle(sort_by="total", direction="asc")
        by_created = handler.handle(sort_by="createdAt", direction="asc")
        assert [d.total for d in by_total] == [
            Decimal("10000"), Decimal("20000"), Decimal("30000")
        ]
        assert [d.id for d in by_created] == ids

    def test_filter_by_status(self):
        ids, order_repo, product_repo = _setup()
        dtos = ListOrdersHandler(order_repo, product_repo).handle(status="completed")
        assert [d.id for d in dtos] == [ids[1]]

    def test_empty_store(self):
        handler = ListOrdersHandler(FakeOrderRepository(), FakeProductRepository())
        assert handler.handle() == []

    def test_bad_sort_field(self):
        _, order_repo, product_repo = _setup()
        with pytest.raises(ValidationError, match="Cannot sort orders by"):
            ListOrdersHandler(order_repo, product_repo).handle(sort_by="customer")

    def test_bad_direction(self):
        _, order_repo, product_repo = _setup()
        with pytest.raises(ValidationError):
            ListOrdersHandler(order_repo, product_repo).handle(direction="sideways")

    def test_bad_status_filter(self):
        _, order_repo, product_repo = _setup()
        with pytest.raises(ValidationError):
            ListOrdersHandler(order_repo, product_repo).handle(status="shipped")


class TestOrderStats:

    def test_breakdown_and_revenue(self):
        _, order_repo, _ = _setup()
        stats = OrderStatsHandler(order_repo).handle()

        assert [(s.status, s.count, s.total_revenue) for s in stats.status_breakdown] == [
            ("pending", 1, Decimal("10000")),
            ("completed", 1, Decimal("20000")),
            ("cancelled", 1, Decimal("30000")),
        ]
        assert stats.total_orders == 3
        assert stats.total_revenue == Decimal("30000")

    def test_empty_store(self):
        stats = OrderStatsHandler(FakeOrderRepository()).handle()
        assert stats.status_breakdown == []
        assert stats.total_orders == 0
        assert stats.total_revenue == Decimal("0")
