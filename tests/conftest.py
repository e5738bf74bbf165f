"""
Pytest fixtures for ChargeLog tests.
"""

from datetime import date

import pytest

from chargelog.app import create_app
from chargelog.database import create_store, get_store
from factories import charge, park


@pytest.fixture
def app():
    """Create application for testing with an in-memory database."""
    flask_app = create_app({
        'TESTING': True,
        'DATABASE_URL': 'sqlite:///:memory:',
    })
    yield flask_app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def app_store(app):
    """The record store attached to the test app."""
    with app.app_context():
        yield get_store()


@pytest.fixture
def store():
    """A standalone record store on its own in-memory database."""
    return create_store('sqlite:///:memory:')


@pytest.fixture
def as_of():
    """Fixed reference date used by the window tests."""
    return date(2024, 3, 15)


@pytest.fixture
def checkpoint_records():
    """
    Two full charges 300 km apart with 30 kWh charged after the first.

    (10 + 20) / (400 - 100) * 100 = 10.0 kWh per 100 km
    """
    return [
        charge(date(2024, 3, 1), 100, amount=40, price=1.0, cost=40, is_full=True),
        charge(date(2024, 3, 5), 250, amount=10, price=1.0, cost=10),
        charge(date(2024, 3, 10), 400, amount=20, price=1.0, cost=20, is_full=True),
    ]


@pytest.fixture
def sample_charging():
    """Charging history spanning last year, last month and this month (as of 2024-03-15)."""
    return [
        charge(date(2023, 11, 20), 9000, amount=30, price=1.0, cost=30, is_full=True),
        charge(date(2024, 2, 10), 11000, amount=40, price=1.2, cost=48, is_full=True),
        charge(date(2024, 2, 25), 11500, amount=20, price=1.2, cost=24),
        charge(date(2024, 3, 5), 12000, amount=30, price=1.2, cost=36, is_full=True),
        charge(date(2024, 3, 12), 12300, amount=15, price=1.0, cost=15),
    ]


@pytest.fixture
def sample_parking():
    """Parking payments in last year, last month and this month (as of 2024-03-15)."""
    return [
        park(date(2023, 12, 1), 10),
        park(date(2024, 2, 14), 8),
        park(date(2024, 3, 6), 15),
        park(date(2024, 3, 8), 5.5),
    ]
