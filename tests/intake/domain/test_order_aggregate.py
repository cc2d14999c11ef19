"""Tests for Order aggregate construction and its JSON representation."""

import pytest
from intake.order.order import Delivery, Item, Order, Payment
from protean.exceptions import ValidationError

from tests.intake.factories import item_payload, order_payload


class TestOrderFromPayload:
    def test_scalar_fields(self):
        order = Order.from_payload(order_payload("o1"))

        assert order.order_uid == "o1"
        assert order.track_number == "WBILMTESTTRACK"
        assert order.entry == "WBIL"
        assert order.locale == "en"
        assert order.customer_id == "test"
        assert order.delivery_service == "meest"
        assert order.shardkey == "9"
        assert order.sm_id == 99
        assert order.date_created == "2021-11-26T06:22:19Z"
        assert order.oof_shard == "1"

    def test_delivery_is_a_value_object(self):
        order = Order.from_payload(order_payload())

        assert isinstance(order.delivery, Delivery)
        assert order.delivery.name == "Test Testov"
        assert order.delivery.email == "test@gmail.com"

    def test_payment_is_keyed_by_transaction(self):
        order = Order.from_payload(order_payload("o1", transaction="t1"))

        assert isinstance(order.payment, Payment)
        assert order.payment.transaction == "t1"
        assert order.payment.amount == 1817
        assert order.payment.payment_dt == 1637907727

    def test_items_keep_their_order(self):
        items = [item_payload(300), item_payload(100), item_payload(200)]
        order = Order.from_payload(order_payload(items=items))

        assert all(isinstance(item, Item) for item in order.items)
        assert [item.chrt_id for item in order.items] == [300, 100, 200]

    def test_same_catalog_item_twice(self):
        order = Order.from_payload(order_payload(items=[item_payload(100), item_payload(100, size="L")]))

        assert [item.chrt_id for item in order.items] == [100, 100]
        assert [item.size for item in order.items] == ["0", "L"]

    def test_no_items(self):
        order = Order.from_payload(order_payload(items=[]))

        assert len(order.items) == 0

    def test_unknown_keys_are_ignored(self):
        payload = order_payload()
        payload["unexpected"] = "value"
        payload["delivery"]["floor"] = "3"

        order = Order.from_payload(payload)

        assert "unexpected" not in order.to_payload()
        assert "floor" not in order.to_payload()["delivery"]

    def test_negative_amount_is_rejected(self):
        payload = order_payload()
        payload["payment"]["amount"] = -1

        with pytest.raises(ValidationError):
            Order.from_payload(payload)

    def test_negative_chrt_id_is_rejected(self):
        with pytest.raises(ValidationError):
            Order.from_payload(order_payload(items=[item_payload(-5)]))


    def test_chrt_id_beyond_storage_range_is_rejected(self):
        with pytest.raises(ValidationError):
            Order.from_payload(order_payload(items=[item_payload(2**63)]))

    def test_sm_id_beyond_storage_range_is_rejected(self):
        with pytest.raises(ValidationError):
            Order.from_payload(order_payload(sm_id=2**63))


    def test_unvalidated_payload_missing_a_key_raises_key_error(self):
        payload = order_payload()
        del payload["delivery"]["city"]

        with pytest.raises(KeyError):
            Order.from_payload(payload)


class TestOrderToPayload:
    def test_echoes_the_accepted_payload(self):
        payload = order_payload("o1", transaction="t1", items=[item_payload(100), item_payload(200)])

        assert Order.from_payload(payload).to_payload() == payload

    def test_empty_strings_survive(self):
        result = Order.from_payload(order_payload()).to_payload()

        assert result["internal_signature"] == ""
        assert result["payment"]["request_id"] == ""

    def test_key_order_follows_the_wire_format(self):
        keys = list(Order.from_payload(order_payload()).to_payload())

        assert keys[:6] == ["order_uid", "track_number", "entry", "delivery", "payment", "items"]
        assert keys[-1] == "oof_shard"
