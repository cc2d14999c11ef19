"""Relational schema for stored orders and helpers to create or drop it."""

from sqlalchemy import (
    BigInteger,
    Column,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

metadata = MetaData()

# SQLite only autoincrements INTEGER PRIMARY KEY columns
_SurrogateKey = BigInteger().with_variant(Integer, "sqlite")

delivery = Table(
    "delivery",
    metadata,
    Column("delivery_id", _SurrogateKey, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("phone", String(255), nullable=False),
    Column("zip", String(255), nullable=False),
    Column("city", String(255), nullable=False),
    Column("address", String(255), nullable=False),
    Column("region", String(255), nullable=False),
    Column("email", String(255), nullable=False),
)

payment = Table(
    "payment",
    metadata,
    Column("transaction", String(255), primary_key=True),
    Column("request_id", String(255), nullable=False),
    Column("currency", String(255), nullable=False),
    Column("provider", String(255), nullable=False),
    Column("amount", BigInteger, nullable=False),
    Column("payment_dt", BigInteger, nullable=False),
    Column("bank", String(255), nullable=False),
    Column("delivery_cost", BigInteger, nullable=False),
    Column("goods_total", BigInteger, nullable=False),
    Column("custom_fee", BigInteger, nullable=False),
)

order_info = Table(
    "order_info",
    metadata,
    Column("order_uid", String(255), primary_key=True),
    Column("track_number", String(255), nullable=False),
    Column("entry", String(255), nullable=False),
    Column("delivery_id", _SurrogateKey, ForeignKey("delivery.delivery_id"), nullable=False),
    Column("payment_transaction", String(255), ForeignKey("payment.transaction"), nullable=False),
    Column("locale", String(255), nullable=False),
    Column("internal_signature", String(255), nullable=False),
    Column("customer_id", String(255), nullable=False),
    Column("delivery_service", String(255), nullable=False),
    Column("shardkey", String(255), nullable=False),
    Column("sm_id", BigInteger, nullable=False),
    Column("date_created", String(255), nullable=False),
    Column("oof_shard", String(255), nullable=False),
    UniqueConstraint("payment_transaction", name="uq_order_info_payment_transaction"),
)

# Catalog attributes of an item, shared by every order that lists it
item = Table(
    "item",
    metadata,
    Column("chrt_id", BigInteger, primary_key=True, autoincrement=False),
    Column("name", String(255), nullable=False),
    Column("size", String(255), nullable=False),
    Column("nm_id", BigInteger, nullable=False),
    Column("brand", String(255), nullable=False),
)

order_item = Table(
    "order_item",
    metadata,
    Column("order_uid", String(255), ForeignKey("order_info.order_uid"), primary_key=True),
    Column("position", Integer, primary_key=True, autoincrement=False),
    Column("item_chrt_id", BigInteger, ForeignKey("item.chrt_id"), nullable=False),
    # Per-order attributes of the line
    Column("track_number", String(255), nullable=False),
    Column("price", BigInteger, nullable=False),
    Column("rid", String(255), nullable=False),
    Column("sale", BigInteger, nullable=False),
    Column("total_price", BigInteger, nullable=False),
    Column("status", BigInteger, nullable=False),
)


def make_engine(url, **kwargs) -> Engine:
    """Create an engine, sharing one connection for in-memory SQLite."""
    url_text = str(url)
    if url_text.startswith("sqlite") and (url_text.endswith(":memory:") or url_text in ("sqlite://", "sqlite:///")):
        kwargs.setdefault("poolclass", StaticPool)
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


def setup_db(engine: Engine) -> None:
    """Setup database schema"""
    metadata.create_all(engine)


def drop_db(engine: Engine) -> None:
    """Drop database schema"""
    metadata.drop_all(engine)
