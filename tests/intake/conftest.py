import pytest
from intake.order.order import Order
from intake.order.repository import OrderRepository
from intake.order.service import OrderService
from intake.utils.db import drop_db, make_engine, setup_db

from tests.intake.factories import order_payload


@pytest.fixture()
def engine():
    """A fresh in-memory database with the order schema."""
    engine = make_engine("sqlite://")
    setup_db(engine)

    yield engine

    drop_db(engine)
    engine.dispose()


@pytest.fixture()
def repository(engine):
    return OrderRepository(engine)


@pytest.fixture()
def service(repository):
    return OrderService(repository)


@pytest.fixture()
def unreachable_repository(tmp_path):
    """A repository whose database file can never be opened."""
    engine = make_engine(f"sqlite:///{tmp_path / 'missing' / 'orders.db'}")
    yield OrderRepository(engine)
    engine.dispose()


@pytest.fixture()
def make_order():
    def _make_order(*args, **kwargs):
        return Order.from_payload(order_payload(*args, **kwargs))

    return _make_order
