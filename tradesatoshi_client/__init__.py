"""
Client library for the TradeSatoshi exchange REST API.

Public market data works without credentials::

    from tradesatoshi_client import TradeSatoshiClient

    client = TradeSatoshiClient()
    ticker = client.get_ticker('LTC_BTC')

Private endpoints need a key pair::

    client = TradeSatoshiClient(Credentials(api_key, api_secret))
    balances = client.get_balances()
"""

from .api import (
    APIError,
    ConfigurationError,
    Credentials,
    MalformedResponseError,
    ParameterSet,
    TradeSatoshiClient,
    TradeSatoshiError,
    Transport,
    TransportError,
)

__version__ = '0.1.0'

__all__ = [
    'APIError',
    'ConfigurationError',
    'Credentials',
    'MalformedResponseError',
    'ParameterSet',
    'TradeSatoshiClient',
    'TradeSatoshiError',
    'Transport',
    'TransportError',
    '__version__',
]
