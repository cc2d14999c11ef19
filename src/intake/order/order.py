"""Order aggregate with its Delivery and Payment value objects and Item entities.

An order is accepted once and never changes afterwards. Delivery and Payment
have no identity visible to callers; the storage layer keys delivery rows by
a generated surrogate and payment rows by the payment's ``transaction``.
Items carry a shared catalog identifier (``chrt_id``) that may appear under
many orders.
"""

from protean.fields import HasMany, Identifier, Integer, String, ValueObject

from intake.domain import intake

# Largest value a signed 64-bit column holds
MAX_STORED_INT = 2**63 - 1

DELIVERY_FIELDS = ("name", "phone", "zip", "city", "address", "region", "email")

PAYMENT_FIELDS = (
    "transaction",
    "request_id",
    "currency",
    "provider",
    "amount",
    "payment_dt",
    "bank",
    "delivery_cost",
    "goods_total",
    "custom_fee",
)

ITEM_FIELDS = (
    "chrt_id",
    "track_number",
    "price",
    "rid",
    "name",
    "sale",
    "size",
    "total_price",
    "nm_id",
    "brand",
    "status",
)

# Catalog attributes are fixed per chrt_id; line attributes vary per order
ITEM_CATALOG_FIELDS = ("chrt_id", "name", "size", "nm_id", "brand")
ITEM_LINE_FIELDS = ("track_number", "price", "rid", "sale", "total_price", "status")

ORDER_FIELDS = (
    "order_uid",
    "track_number",
    "entry",
    "locale",
    "internal_signature",
    "customer_id",
    "delivery_service",
    "shardkey",
    "sm_id",
    "date_created",
    "oof_shard",
)


def _pick(source, names):
    return {name: getattr(source, name) for name in names}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@intake.value_object(part_of="Order")
class Delivery:
    """Recipient and destination of an order."""

    name = String(max_length=255, default="")
    phone = String(max_length=255, default="")
    zip = String(max_length=255, default="")
    city = String(max_length=255, default="")
    address = String(max_length=255, default="")
    region = String(max_length=255, default="")
    email = String(max_length=255, default="")


@intake.value_object(part_of="Order")
class Payment:
    """Payment captured with the order.

    Amounts are integers in minor currency units; ``payment_dt`` is an epoch
    timestamp in seconds.
    """

    transaction = String(required=True, max_length=255)
    request_id = String(max_length=255, default="")
    currency = String(max_length=255, default="")
    provider = String(max_length=255, default="")
    amount = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)
    payment_dt = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)
    bank = String(max_length=255, default="")
    delivery_cost = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)
    goods_total = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)
    custom_fee = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@intake.entity(part_of="Order")
class Item:
    """A catalog item listed on an order."""

    chrt_id = Integer(required=True, min_value=0, max_value=MAX_STORED_INT)
    track_number = String(max_length=255, default="")
    price = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)
    rid = String(max_length=255, default="")
    name = String(max_length=255, default="")
    sale = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)
    size = String(max_length=255, default="")
    total_price = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)
    nm_id = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)
    brand = String(max_length=255, default="")
    status = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)

    def to_payload(self) -> dict:
        return _pick(self, ITEM_FIELDS)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@intake.aggregate
class Order:
    order_uid = Identifier(identifier=True, required=True)
    track_number = String(max_length=255, default="")
    entry = String(max_length=255, default="")
    delivery = ValueObject(Delivery, required=True)
    payment = ValueObject(Payment, required=True)
    items = HasMany(Item)
    locale = String(max_length=255, default="")
    internal_signature = String(max_length=255, default="")
    customer_id = String(max_length=255, default="")
    delivery_service = String(max_length=255, default="")
    shardkey = String(max_length=255, default="")
    sm_id = Integer(min_value=0, max_value=MAX_STORED_INT, default=0)
    date_created = String(max_length=255, default="")
    oof_shard = String(max_length=255, default="")

    @classmethod
    def from_payload(cls, payload: dict) -> "Order":
        """Build an order from its JSON representation.

        Expects a payload already checked against ``OrderRequest``: every
        delivery, payment and item key must be present, otherwise ``KeyError``
        is raised. Keys outside the order schema are ignored. Raises
        ``protean.exceptions.ValidationError`` when a field is out of range.
        """
        return cls(
            **{name: payload[name] for name in ORDER_FIELDS if name in payload},
            delivery=Delivery(**{name: payload["delivery"][name] for name in DELIVERY_FIELDS}),
            payment=Payment(**{name: payload["payment"][name] for name in PAYMENT_FIELDS}),
            items=[Item(**{name: item[name] for name in ITEM_FIELDS}) for item in payload.get("items") or []],
        )

    def to_payload(self) -> dict:
        """JSON representation, with keys in the order clients send them."""
        payload = _pick(self, ORDER_FIELDS[:3])
        payload["delivery"] = _pick(self.delivery, DELIVERY_FIELDS)
        payload["payment"] = _pick(self.payment, PAYMENT_FIELDS)
        payload["items"] = [item.to_payload() for item in self.items]
        payload.update(_pick(self, ORDER_FIELDS[3:]))
        return payload
