"""
Pytest configuration and fixtures for the TradeSatoshi client test suite.
"""

import json
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from tradesatoshi_client.api.client import TradeSatoshiClient
from tradesatoshi_client.api.signer import Credentials


TOY_API_KEY = "toy-api-key"
# base64 of b"toy-secret"
TOY_API_SECRET = "dG95LXNlY3JldA=="


def _make_response(payload=None, status_code=200, text=None, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.text = text if text is not None else json.dumps(payload)
    return response


@pytest.fixture
def make_response():
    """Factory for stand-ins of requests.Response."""
    return _make_response


@pytest.fixture
def temp_config_dir():
    """Create a temporary directory for test configurations."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def credentials():
    return Credentials(api_key=TOY_API_KEY, api_secret=TOY_API_SECRET)


@pytest.fixture
def public_client():
    return TradeSatoshiClient()


@pytest.fixture
def private_client(credentials):
    return TradeSatoshiClient(credentials=credentials)


@pytest.fixture
def sample_ticker():
    return {"ask": 1.0, "bid": 0.9, "last": 0.95}


@pytest.fixture
def sample_balance():
    return {
        "currency": "BTC",
        "currencyLong": "Bitcoin",
        "available": 0.5,
        "total": 0.75,
        "heldForTrades": 0.25,
        "unconfirmed": 0.0,
        "pendingWithdraw": 0.0,
        "address": None,
    }


@pytest.fixture
def sample_market_summary():
    return {
        "market": "LTC_BTC",
        "high": 0.0125,
        "low": 0.0119,
        "volume": 1520.3,
        "last": 0.0121,
        "baseVolume": 18.4,
        "bid": 0.012,
        "ask": 0.0122,
        "openBuyOrders": 42,
        "openSellOrders": 57,
    }


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Keep real credentials and config paths out of every test."""
    keys = ("TRADESATOSHI_API_KEY", "TRADESATOSHI_API_SECRET", "TRADESATOSHI_CONFIG")
    original_env = {key: os.environ.pop(key, None) for key in keys}

    yield

    for key, value in original_env.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
