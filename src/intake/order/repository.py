"""Storage of Order aggregates across the relational order schema.

One order occupies five tables: ``delivery`` (surrogate key), ``payment``
(keyed by its transaction), ``order_info`` referencing both, the shared
``item`` catalog and the ``order_item`` lines holding per-order item
attributes. Writes happen inside a single transaction; reads rebuild every
aggregate with two queries.
"""

from collections import defaultdict

import structlog
from protean.exceptions import ValidationError
from sqlalchemy import insert, select
from sqlalchemy.engine import Connection, Engine

from intake.order.order import (
    DELIVERY_FIELDS,
    ITEM_CATALOG_FIELDS,
    ITEM_FIELDS,
    ITEM_LINE_FIELDS,
    ORDER_FIELDS,
    PAYMENT_FIELDS,
    Delivery,
    Item,
    Order,
    Payment,
)
from intake.utils.db import delivery, item, order_info, order_item, payment

logger = structlog.get_logger(__name__)


class OrderRepository:
    """Maps Order aggregates to and from the order tables.

    Storage errors (``sqlalchemy.exc.SQLAlchemyError``) propagate unchanged.
    An item whose catalog attributes contradict the stored ``item`` row is
    rejected with ``protean.exceptions.ValidationError``.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    # -------------------------------------------------------------------
    # Write path
    # -------------------------------------------------------------------
    def save_order(self, order: Order) -> None:
        """Persist ``order`` atomically.

        Delivery first (for its generated id), then Payment, then the order
        row referencing both, then each item with its link row. A failure at
        any step rolls back every step before it.
        """
        logger.info("Saving order", order_uid=order.order_uid)
        with self.engine.begin() as conn:
            delivery_id = self._insert_delivery(conn, order.delivery)
            self._insert_payment(conn, order.payment)
            self._insert_order(conn, order, delivery_id)
            for position, order_line in enumerate(order.items):
                self._insert_item(conn, order_line)
                self._insert_order_item(conn, order.order_uid, position, order_line)
        logger.info("Order saved", order_uid=order.order_uid, item_count=len(order.items))

    def _insert_delivery(self, conn: Connection, value: Delivery) -> int:
        result = conn.execute(insert(delivery).values({name: getattr(value, name) for name in DELIVERY_FIELDS}))
        delivery_id = result.inserted_primary_key[0]
        logger.debug("Delivery inserted", delivery_id=delivery_id)
        return delivery_id

    def _insert_payment(self, conn: Connection, value: Payment) -> None:
        conn.execute(insert(payment).values({name: getattr(value, name) for name in PAYMENT_FIELDS}))
        logger.debug("Payment inserted", transaction=value.transaction)

    def _insert_order(self, conn: Connection, order: Order, delivery_id: int) -> None:
        values = {name: getattr(order, name) for name in ORDER_FIELDS}
        values["delivery_id"] = delivery_id
        values["payment_transaction"] = order.payment.transaction
        conn.execute(insert(order_info).values(values))
        logger.debug("Order row inserted", order_uid=order.order_uid, delivery_id=delivery_id)

    def _insert_item(self, conn: Connection, value: Item) -> None:
        catalog = {name: getattr(value, name) for name in ITEM_CATALOG_FIELDS}
        existing = conn.execute(select(item).where(item.c.chrt_id == value.chrt_id)).mappings().first()
        if existing is None:
            conn.execute(insert(item).values(catalog))
            logger.debug("Item inserted", chrt_id=value.chrt_id)
            return

        conflicts = [name for name in ITEM_CATALOG_FIELDS if existing[name] != catalog[name]]
        if conflicts:
            raise ValidationError(
                {"items": [f"chrt_id {value.chrt_id} is already stored with different {', '.join(conflicts)}"]}
            )
        logger.debug("Item already in catalog", chrt_id=value.chrt_id)

    def _insert_order_item(self, conn: Connection, order_uid: str, position: int, value: Item) -> None:
        values = {name: getattr(value, name) for name in ITEM_LINE_FIELDS}
        values.update(order_uid=order_uid, position=position, item_chrt_id=value.chrt_id)
        conn.execute(insert(order_item).values(values))
        logger.debug("Order item linked", order_uid=order_uid, chrt_id=value.chrt_id, position=position)

    # -------------------------------------------------------------------
    # Read path
    # -------------------------------------------------------------------
    def get_all_orders(self) -> list[Order]:
        """Every stored order, in storage order, with its items."""
        with self.engine.connect() as conn:
            rows = conn.execute(_orders_query()).mappings().all()
            items_by_order = defaultdict(list)
            for row in conn.execute(_items_query()).mappings():
                items_by_order[row["order_uid"]].append(_item_from_row(row))

        orders = [_order_from_row(row, items_by_order.get(row["order_uid"], [])) for row in rows]
        logger.info("Orders loaded", count=len(orders))
        return orders

    def get_items_for_order(self, order_uid: str) -> list[Item]:
        """Items linked to ``order_uid`` in their original position; empty if none."""
        with self.engine.connect() as conn:
            rows = conn.execute(_items_query().where(order_item.c.order_uid == order_uid)).mappings().all()
        return [_item_from_row(row) for row in rows]


# ---------------------------------------------------------------------------
# Queries and row mapping
# ---------------------------------------------------------------------------
def _orders_query():
    columns = [order_info.c[name] for name in ORDER_FIELDS]
    columns += [delivery.c[name].label(f"delivery_{name}") for name in DELIVERY_FIELDS]
    columns += [payment.c[name].label(f"payment_{name}") for name in PAYMENT_FIELDS]
    return select(*columns).select_from(
        order_info.join(delivery, order_info.c.delivery_id == delivery.c.delivery_id).join(
            payment, order_info.c.payment_transaction == payment.c.transaction
        )
    )


def _items_query():
    return (
        select(
            order_item.c.order_uid,
            *[item.c[name] for name in ITEM_CATALOG_FIELDS],
            *[order_item.c[name] for name in ITEM_LINE_FIELDS],
        )
        .select_from(order_item.join(item, order_item.c.item_chrt_id == item.c.chrt_id))
        .order_by(order_item.c.order_uid, order_item.c.position)
    )


def _item_from_row(row) -> Item:
    return Item(**{name: row[name] for name in ITEM_FIELDS})


def _order_from_row(row, items: list[Item]) -> Order:
    return Order(
        **{name: row[name] for name in ORDER_FIELDS},
        delivery=Delivery(**{name: row[f"delivery_{name}"] for name in DELIVERY_FIELDS}),
        payment=Payment(**{name: row[f"payment_{name}"] for name in PAYMENT_FIELDS}),
        items=items,
    )
