"""Tests for the JSON-file repositories, against a temporary directory."""

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from jewelstore.application.dto import OrderItemSpec
from jewelstore.application.place_order import PlaceOrderHandler
from jewelstore.application.update_product import UpdateProductHandler
from jewelstore.domain.exceptions import DuplicateIdempotencyKeyError
from jewelstore.domain.model.order import Customer, Order, OrderLineItem, OrderStatus
from jewelstore.domain.model.product import Metal
from jewelstore.domain.model.value_objects import Money, Quantity, Weight
from jewelstore.infrastructure.persistence.json_order_repository import JsonOrderRepository
from jewelstore.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from tests.builders import customer, make_product


def _order(key=None) -> Order:
    return Order.create(
        customer=Customer.create("Asha", "asha@example.com", "98765", "MG Road"),
        items=[
            OrderLineItem(
                product_id="a",
                name="Diamond Ring",
                price=Money.of("25000.50"),
                quantity=Quantity(2),
                metal=Metal.GOLD,
                weight=Weight.of("5.5"),
            )
        ],
        idempotency_key=key,
    )


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text()) == []

    def test_save_and_reload(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = make_product(None, name="Pearl Studs", price="12000.75", metal="silver")
        repo.save(product)

        assert product.id is not None
        loaded = JsonProductRepository(tmp_path / "products.json").get_by_id(product.id)
        assert loaded.name == "Pearl Studs"
        assert loaded.price == Money.of("12000.75")
        assert loaded.metal == Metal.SILVER
        assert loaded.created_at == product.created_at

    def test_save_upserts(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("a", stock=1))
        repo.save(make_product("a", stock=7))
        assert [p.stock for p in repo.list_all()] == [7]

    def test_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("a"))
        assert repo.delete("a") is True
        assert repo.delete("a") is False
        assert repo.get_by_id("a") is None

    def test_decrement_is_conditional(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("a", stock=3))
        assert repo.decrement_stock("a", 2) == 1
        assert repo.decrement_stock("a", 2) is None
        assert repo.decrement_stock("missing", 1) is None
        assert repo.get_by_id("a").stock == 1

    def test_increment(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("a", stock=3))
        assert repo.increment_stock("a", 4) == 7
        assert repo.increment_stock("missing", 1) is None

    def test_concurrent_decrements_across_instances_never_oversell(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save(make_product("a", stock=10))

        def take(_):
            return JsonProductRepository(path).decrement_stock("a", 1)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(take, range(25)))

        assert sum(r is not None for r in results) == 10
        assert JsonProductRepository(path).get_by_id("a").stock == 0


class TestJsonOrderRepository:

    def test_add_and_reload(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order(key="T1")
        repo.add(order)

        loaded = JsonOrderRepository(tmp_path / "orders.json").get_by_id(order.id)
        assert loaded.customer.email == "asha@example.com"
        assert loaded.total == Money.of("50001.00")
        assert loaded.items[0].weight == Weight.of("5.5")
        assert loaded.items[0].metal == Metal.GOLD
        assert loaded.status == OrderStatus.PENDING
        assert loaded.idempotency_key == "T1"

    def test_lookup_by_key(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order(key="T1")
        repo.add(order)
        assert repo.get_by_idempotency_key("T1").id == order.id
        assert repo.get_by_idempotency_key("T2") is None

    def test_duplicate_key_rejected(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.add(_order(key="T1"))
        with pytest.raises(DuplicateIdempotencyKeyError):
            repo.add(_order(key="T1"))
        assert len(repo.list_all()) == 1

    def test_orders_without_key_never_collide(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.add(_order())
        repo.add(_order())
        assert len(repo.list_all()) == 2

    def test_list_filters_by_status(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second = _order(), _order()
        repo.add(first)
        repo.add(second)
        second.cancel()
        repo.transition_status(second, expected=OrderStatus.PENDING)

        pending = repo.list_all(status=OrderStatus.PENDING)
        assert [o.id for o in pending] == [first.id]

    def test_transition_is_compare_and_set(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.add(order)

        order.change_status(OrderStatus.PROCESSING)
        assert repo.transition_status(order, expected=OrderStatus.PENDING) is True
        # Stale expectation loses
        order.change_status(OrderStatus.COMPLETED)
        assert repo.transition_status(order, expected=OrderStatus.PENDING) is False
        assert repo.get_by_id(order.id).status == OrderStatus.PROCESSING

    def test_concurrent_adds_with_one_key(self, tmp_path):
        path = tmp_path / "orders.json"

        def add(_):
            try:
                JsonOrderRepository(path).add(_order(key="same"))
                return True
            except DuplicateIdempotencyKeyError:
                return False

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(add, range(10)))

        assert results.count(True) == 1
        assert len(JsonOrderRepository(path).list_all()) == 1


class SellingJsonProductRepository(JsonProductRepository):
    """A concurrent checkout sells the whole stock right after the first read."""

    def __init__(self, file_path, orders_path) -> None:
        super().__init__(file_path)
        self.orders = JsonOrderRepository(orders_path)
        self._armed = True

    def get_by_id(self, product_id):
        found = super().get_by_id(product_id)
        if self._armed:
            self._armed = False
            PlaceOrderHandler(self.orders, self).handle(
                customer(), [OrderItemSpec(product_id, found.stock)]
            )
        return found


class TestJsonProductEdits:

    def test_update_details_writes_only_named_fields(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("a", name="Ruby Ring", stock=4))

        edited = repo.get_by_id("a")
        edited.update_details(name="Ruby Band", price=Money.of("31000"))
        edited.stock = 99
        repo.decrement_stock("a", 1)

        stored = repo.update_details(edited, ["name", "price"])
        assert stored.name == "Ruby Band"
        assert stored.price == Money.of("31000")
        assert stored.stock == 3

    def test_update_details_missing_product(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        assert repo.update_details(make_product("ghost"), ["name"]) is None

    def test_set_stock(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("a", stock=4))
        assert repo.set_stock("a", 12) == 12
        assert repo.get_by_id("a").stock == 12
        assert repo.set_stock("missing", 1) is None

    def test_price_edit_does_not_restore_sold_stock(self, tmp_path):
        repo = SellingJsonProductRepository(
            tmp_path / "products.json", tmp_path / "orders.json"
        )
        repo.save(make_product("A", stock=5))

        UpdateProductHandler(repo).handle("A", price="30000")

        assert len(repo.orders.list_all()) == 1
        reloaded = JsonProductRepository(tmp_path / "products.json").get_by_id("A")
        assert reloaded.stock == 0
        assert reloaded.price == Money.of("30000")
