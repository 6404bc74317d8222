"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from bonding.api.endpoints import get_exchange
from bonding.api.main import app
from bonding.curve import BondingCurve
from bonding.exchange import Exchange
from bonding.fees import BasisPointFeeCalculator
from bonding.ledger import Registry
from tests.helpers import make_asset, make_exchange, make_registry


@pytest.fixture
def curve() -> BondingCurve:
    """Curve with the default parameters."""
    return BondingCurve()


@pytest.fixture
def fee_calculator() -> BasisPointFeeCalculator:
    """Fee calculator with the default 50 bps platform fee."""
    return BasisPointFeeCalculator()


@pytest.fixture
def registry() -> Registry:
    """Initialized registry with no assets."""
    return make_registry()


@pytest.fixture
def exchange() -> Exchange:
    """Initialized exchange with no assets."""
    return make_exchange()


@pytest.fixture
def asset_id(exchange: Exchange) -> int:
    """Id of a fresh BONDING asset on the `exchange` fixture."""
    return make_asset(exchange)


@pytest.fixture
def client(exchange: Exchange) -> Iterator[TestClient]:
    """Test client wired to the `exchange` fixture."""
    app.dependency_overrides[get_exchange] = lambda: exchange
    yield TestClient(app)
    app.dependency_overrides.clear()
