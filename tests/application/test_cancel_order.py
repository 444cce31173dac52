"""Integration tests for the CancelOrder and UpdateOrderStatus use cases."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from jewelstore.application.cancel_order import CancelOrderHandler
from jewelstore.application.place_order import PlaceOrderHandler
from jewelstore.application.update_order_status import UpdateOrderStatusHandler
from jewelstore.domain.exceptions import (
    InvalidTransitionError,
    OrderNotFoundError,
    ValidationError,
)
from jewelstore.domain.model.order import OrderStatus
from tests.builders import customer, items, make_product
from tests.fakes import FakeOrderRepository, FakeProductRepository


def _setup():
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository([
        make_product("x", name="Ruby Ring", stock=5),
        make_product("y", name="Silver Hoops", stock=5, category="earrings", metal="silver"),
    ])
    placed = PlaceOrderHandler(order_repo, product_repo).handle(
        customer(), items(("x", 2), ("y", 3))
    )
    return placed.order.id, order_repo, product_repo


class TestCancelOrder:

    def test_restocks_every_line_and_marks_cancelled(self):
        order_id, order_repo, product_repo = _setup()
        assert (product_repo.stock_of("x"), product_repo.stock_of("y")) == (3, 2)

        dto = CancelOrderHandler(order_repo, product_repo).handle(order_id)

        assert dto.status == "cancelled"
        assert (product_repo.stock_of("x"), product_repo.stock_of("y")) == (5, 5)
        assert order_repo.get_by_id(order_id).status == OrderStatus.CANCELLED

    def test_second_cancel_is_noop(self):
        order_id, order_repo, product_repo = _setup()
        handler = CancelOrderHandler(order_repo, product_repo)
        handler.handle(order_id)
        dto = handler.handle(order_id)

        assert dto.status == "cancelled"
        assert (product_repo.stock_of("x"), product_repo.stock_of("y")) == (5, 5)

    def test_concurrent_cancels_restock_once(self):
        order_id, order_repo, product_repo = _setup()
        handler = CancelOrderHandler(order_repo, product_repo)

        with ThreadPoolExecutor(max_workers=6) as pool:
            results = list(pool.map(lambda _: handler.handle(order_id), range(12)))

        assert all(r.status == "cancelled" for r in results)
        assert (product_repo.stock_of("x"), product_repo.stock_of("y")) == (5, 5)

    def test_processing_order_can_be_cancelled(self):
        order_id, order_repo, product_repo = _setup()
        UpdateOrderStatusHandler(order_repo, product_repo).handle(order_id, "processing")
        dto = CancelOrderHandler(order_repo, product_repo).handle(order_id)
        assert dto.status == "cancelled"
        assert product_repo.stock_of("x") == 5

    def test_completed_order_cannot_be_cancelled(self):
        order_id, order_repo, product_repo = _setup()
        UpdateOrderStatusHandler(order_repo, product_repo).handle(order_id, "completed")

        with pytest.raises(InvalidTransitionError, match="Cannot cancel completed order"):
            CancelOrderHandler(order_repo, product_repo).handle(order_id)
        assert product_repo.stock_of("x") == 3
        assert order_repo.get_by_id(order_id).status == OrderStatus.COMPLETED

    def test_deleted_product_skipped_on_restock(self):
        order_id, order_repo, product_repo = _setup()
        product_repo.delete("x")

        dto = CancelOrderHandler(order_repo, product_repo).handle(order_id)

        assert dto.status == "cancelled"
        assert product_repo.stock_of("y") == 5
        assert dto.items[0].product is None
        assert dto.items[0].name == "Ruby Ring"

    def test_unknown_order(self):
        _, order_repo, product_repo = _setup()
        with pytest.raises(OrderNotFoundError, match="Order not found"):
            CancelOrderHandler(order_repo, product_repo).handle("nope")


class TestUpdateOrderStatus:

    def test_moves_to_processing_without_touching_stock(self):
        order_id, order_repo, product_repo = _setup()
        dto = UpdateOrderStatusHandler(order_repo, product_repo).handle(
            order_id, "processing"
        )
        assert dto.status == "processing"
        assert dto.updated_at >= dto.created_at
        assert product_repo.stock_of("x") == 3

    def test_completed_can_go_back_to_processing(self):
        order_id, order_repo, product_repo = _setup()
        handler = UpdateOrderStatusHandler(order_repo, product_repo)
        handler.handle(order_id, "completed")
        assert handler.handle(order_id, "processing").status == "processing"

    def test_unknown_status_rejected(self):
        order_id, order_repo, product_repo = _setup()
        with pytest.raises(ValidationError, match="not a valid order status"):
            UpdateOrderStatusHandler(order_repo, product_repo).handle(order_id, "bogus")
        assert order_repo.get_by_id(order_id).status == OrderStatus.PENDING

    def test_unknown_order_reported_before_status(self):
        _, order_repo, product_repo = _setup()
        with pytest.raises(OrderNotFoundError):
            UpdateOrderStatusHandler(order_repo, product_repo).handle("nope", "bogus")

    def test_cancelled_target_restocks(self):
        order_id, order_repo, product_repo = _setup()
        dto = UpdateOrderStatusHandler(order_repo, product_repo).handle(
            order_id, "cancelled"
        )
        assert dto.status == "cancelled"
        assert (product_repo.stock_of("x"), product_repo.stock_of("y")) == (5, 5)

    def test_cancelled_order_cannot_be_reopened(self):
        order_id, order_repo, product_repo = _setup()
        handler = UpdateOrderStatusHandler(order_repo, product_repo)
        handler.handle(order_id, "cancelled")

        with pytest.raises(InvalidTransitionError, match="from cancelled to pending"):
            handler.handle(order_id, "pending")
        assert product_repo.stock_of("x") == 5
