from datetime import date, datetime
from decimal import Decimal

import pytest

from rentledger_backend import create_app
from rentledger_backend.clock import FixedClock
from rentledger_backend.config import TestingConfig
from rentledger_backend.extensions import db
from rentledger_backend.transformer import TenantModel

NOW = datetime(2026, 10, 19, 12, 0, 0)
PAID_TO = date(2026, 10, 5)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def app(clock):
    app = create_app(TestingConfig, clock=clock)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def service(app):
    return app.extensions["tenant_service"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_tenant(service):
    def _make(name="Alice", weekly="100", credit="0", paid_to=PAID_TO):
        return service.save(TenantModel(
            name=name,
            weekly_rent_amount=Decimal(weekly),
            current_rent_credit_amount=Decimal(credit),
            current_rent_paid_to_date=paid_to,
        ))
    return _make
