"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that match the field names of the
``OrderRequest`` schema and pass its non-negative integer checks.
"""

import random
import time
import uuid
from functools import lru_cache

from faker import Faker

fake = Faker()

# A small catalog so that orders regularly share chrt_id values
CATALOG_SIZE = 500


def unique_order_uid() -> str:
    """Generate unique order identifiers like 'a1b2c3d4e5f6a7b8lt'."""
    return f"{uuid.uuid4().hex[:16]}lt"


def track_number() -> str:
    return f"WBILM{fake.bothify('??????').upper()}"


def delivery_data() -> dict:
    return {
        "name": fake.name()[:255],
        "phone": f"+972{random.randint(1000000, 9999999)}",
        "zip": fake.postcode()[:20],
        "city": fake.city()[:100],
        "address": fake.street_address()[:255],
        "region": fake.state()[:100],
        "email": fake.email(),
    }


@lru_cache(maxsize=CATALOG_SIZE)
def catalog_entry(chrt_id: int) -> dict:
    """Catalog attributes for ``chrt_id``; the same on every call.

    The service rejects an item whose name, size, nm_id or brand differ from
    what is already stored for its chrt_id.
    """
    catalog_fake = Faker()
    catalog_fake.seed_instance(chrt_id)
    return {
        "chrt_id": chrt_id,
        "name": catalog_fake.word().title(),
        "size": catalog_fake.random_element(["0", "S", "M", "L", "XL"]),
        "nm_id": 1000000 + chrt_id,
        "brand": catalog_fake.company()[:100],
    }


def item_data(track: str) -> dict:
    price = random.randint(100, 5000)
    sale = random.choice([0, 10, 20, 30, 50])
    entry = catalog_entry(random.randint(1, CATALOG_SIZE))
    return {
        "chrt_id": entry["chrt_id"],
        "track_number": track,
        "price": price,
        "rid": uuid.uuid4().hex,
        "name": entry["name"],
        "sale": sale,
        "size": entry["size"],
        "total_price": price * (100 - sale) // 100,
        "nm_id": entry["nm_id"],
        "brand": entry["brand"],
        "status": 202,
    }


def payment_data(transaction: str, items: list[dict]) -> dict:
    goods_total = sum(item["total_price"] for item in items)
    delivery_cost = random.choice([0, 500, 1500])
    return {
        "transaction": transaction,
        "request_id": "",
        "currency": random.choice(["USD", "EUR", "RUB"]),
        "provider": "wbpay",
        "amount": goods_total + delivery_cost,
        "payment_dt": int(time.time()),
        "bank": random.choice(["alpha", "sber", "tinkoff"]),
        "delivery_cost": delivery_cost,
        "goods_total": goods_total,
        "custom_fee": 0,
    }


def order_data(item_count: int | None = None) -> dict:
    """Generate a complete POST /add_order payload."""
    order_uid = unique_order_uid()
    track = track_number()
    count = random.randint(0, 4) if item_count is None else item_count
    items = [item_data(track) for _ in range(count)]
    return {
        "order_uid": order_uid,
        "track_number": track,
        "entry": "WBIL",
        "delivery": delivery_data(),
        "payment": payment_data(order_uid, items),
        "items": items,
        "locale": random.choice(["en", "ru"]),
        "internal_signature": "",
        "customer_id": fake.user_name()[:50],
        "delivery_service": random.choice(["meest", "cdek", "boxberry"]),
        "shardkey": str(random.randint(0, 9)),
        "sm_id": random.randint(1, 100),
        "date_created": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "oof_shard": str(random.randint(0, 2)),
    }
