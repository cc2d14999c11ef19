"""Shared BDD fixtures and step definitions for the Intake domain."""

import pytest
from intake.order.order import Order
from pytest_bdd import given, parsers, then
from sqlalchemy.exc import SQLAlchemyError

from tests.intake.factories import item_payload, order_payload


@pytest.fixture()
def outcome():
    """Collects what happened in the When step."""
    return {}


@given(
    parsers.cfparse('an order "{order_uid}" paid by transaction "{transaction}" with item {chrt_id:d}'),
    target_fixture="order",
)
def _(order_uid, transaction, chrt_id):
    return Order.from_payload(order_payload(order_uid, transaction=transaction, items=[item_payload(chrt_id)]))


@given(
    parsers.cfparse('an order "{order_uid}" paid by transaction "{transaction}" with no items'),
    target_fixture="order",
)
def _(order_uid, transaction):
    return Order.from_payload(order_payload(order_uid, transaction=transaction, items=[]))


@given(parsers.cfparse('an accepted order "{order_uid}" paid by transaction "{transaction}"'))
def _(service, order_uid, transaction):
    service.accept_order(Order.from_payload(order_payload(order_uid, transaction=transaction)))


@then(parsers.cfparse("the order book lists {count:d} order"))
def _(service, count):
    assert service.count() == count


@then("the order is refused by storage")
def _(outcome):
    assert isinstance(outcome.get("error"), SQLAlchemyError)


@then(parsers.cfparse('storage holds order "{order_uid}" with items {chrt_ids}'))
def _(repository, order_uid, chrt_ids):
    stored = {order.order_uid: order for order in repository.get_all_orders()}
    expected = [int(value) for value in chrt_ids.split(",")]
    assert [item.chrt_id for item in stored[order_uid].items] == expected


@then(parsers.cfparse('storage holds order "{order_uid}" with no items'))
def _(repository, order_uid):
    assert repository.get_items_for_order(order_uid) == []
    assert order_uid in {order.order_uid for order in repository.get_all_orders()}


@then(parsers.cfparse('storage holds no order "{order_uid}"'))
def _(repository, order_uid):
    assert order_uid not in {order.order_uid for order in repository.get_all_orders()}
