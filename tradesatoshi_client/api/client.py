"""
TradeSatoshi API client.

This module provides the client facade for the TradeSatoshi REST API. Each
endpoint method only assembles its parameters; signing, HTTP and envelope
decoding are shared by every endpoint.
"""

import logging
from typing import Callable, List, Optional, Type, TypeVar

from ..data.models import (
    Address, Balance, CancelledOrders, Currency, MarketSummary, Order, OrderBook,
    SubmittedOrder, SubmittedTransfer, Ticker, Trade, TradeHistory, Transaction,
    WireModel, WithdrawalId,
)
from .envelope import decode_list, decode_scalar
from .errors import ConfigurationError
from .params import ParameterSet
from .request import DEFAULT_BASE_URL, Request, private, public
from .signer import Credentials, Signer
from .transport import Transport


logger = logging.getLogger(__name__)

T = TypeVar('T', bound=WireModel)

DEFAULT_COUNT = 20
DEFAULT_DEPTH = 20
DEFAULT_MARKET = 'all'
DEFAULT_CURRENCY = 'all'
DEFAULT_BOOK_TYPE = 'both'
DEFAULT_PAGE = 0


def _default(value, fallback):
    return fallback if value is None else value


class TradeSatoshiClient:
    """
    TradeSatoshi API client.

    Public endpoints work without credentials. Private endpoints require
    Credentials and raise ConfigurationError before any network I/O when
    none were given. Instances hold no mutable state, so one client can be
    shared across threads.
    """

    def __init__(self, credentials: Optional[Credentials] = None,
                 base_url: str = DEFAULT_BASE_URL,
                 transport: Optional[Transport] = None):
        """
        Initialize the client.

        Args:
            credentials: API key pair for private endpoints (optional)
            base_url: API root URL
            transport: HTTP transport; a default one with a 30s timeout if omitted
        """
        if not base_url:
            raise ConfigurationError("Base URL must not be empty")
        self.base_url = base_url
        self.transport = transport or Transport()
        self._signer = Signer(credentials) if credentials is not None else None

    @classmethod
    def from_config(cls, config_manager) -> 'TradeSatoshiClient':
        """
        Build a client from a ConfigManager.

        Credentials come from the environment, never from the config file.
        """
        api = config_manager.get_api_settings()
        transport = Transport(
            timeout=api['timeout'],
            user_agent=api['user_agent'],
            log_requests=api['log_requests'],
        )
        return cls(
            credentials=config_manager.get_credentials(),
            base_url=api['base_url'],
            transport=transport,
        )

    @property
    def has_credentials(self) -> bool:
        return self._signer is not None

    def __repr__(self) -> str:
        return f"TradeSatoshiClient(base_url={self.base_url!r}, authenticated={self.has_credentials})"

    def _call(self, request: Request, decoder: Callable, model: Type[T]):
        if request.is_private and self._signer is None:
            raise ConfigurationError(
                f"Credentials are required for private endpoint '{request.endpoint}'"
            )
        body = self.transport.send(request, self.base_url, self._signer)
        return decoder(body, model)

    def _scalar(self, request: Request, model: Type[T]) -> T:
        return self._call(request, decode_scalar, model)

    def _list(self, request: Request, model: Type[T]) -> List[T]:
        return self._call(request, decode_list, model)

    # Public endpoints

    def get_currencies(self) -> List[Currency]:
        """Get all currencies listed on the exchange."""
        return self._list(public('getcurrencies'), Currency)

    def get_ticker(self, market: str) -> Ticker:
        """
        Get the current ticker for a market.

        Args:
            market: Market name (e.g., 'LTC_BTC')

        Returns:
            Ticker: Current ask/bid/last prices
        """
        return self._scalar(public('getticker', ParameterSet(market=market)), Ticker)

    def get_market_history(self, market: str, count: Optional[int] = None) -> List[Trade]:
        """
        Get recent public trades for a market.

        Args:
            market: Market name
            count: Number of trades (default 20)
        """
        params = ParameterSet(market=market, count=_default(count, DEFAULT_COUNT))
        return self._list(public('getmarkethistory', params), Trade)

    def get_market_summary(self, market: str) -> MarketSummary:
        return self._scalar(public('getmarketsummary', ParameterSet(market=market)), MarketSummary)

    def get_market_summaries(self) -> List[MarketSummary]:
        return self._list(public('getmarketsummaries'), MarketSummary)

    def get_order_book(self, market: str, type: Optional[str] = None,
                       depth: Optional[int] = None) -> OrderBook:
        """
        Get the order book for a market.

        Args:
            market: Market name
            type: 'buy', 'sell' or 'both' (default 'both')
            depth: Number of price levels per side (default 20)
        """
        params = ParameterSet(
            market=market,
            type=_default(type, DEFAULT_BOOK_TYPE),
            depth=_default(depth, DEFAULT_DEPTH),
        )
        return self._scalar(public('getorderbook', params), OrderBook)

    # Private endpoints

    def get_balance(self, currency: str) -> Balance:
        """Get the balance of one currency."""
        return self._scalar(private('getbalance', ParameterSet(currency=currency)), Balance)

    def get_balances(self) -> List[Balance]:
        """Get balances of all currencies; sends an empty JSON body."""
        return self._list(private('getbalances'), Balance)

    def get_order(self, order_id: int) -> Order:
        return self._scalar(private('getorder', ParameterSet(order_id=order_id)), Order)

    def get_orders(self, market: Optional[str] = None, count: Optional[int] = None) -> List[Order]:
        """
        Get open orders.

        Args:
            market: Market name (default 'all')
            count: Maximum number of orders (default 20)
        """
        params = ParameterSet(
            market=_default(market, DEFAULT_MARKET),
            count=_default(count, DEFAULT_COUNT),
        )
        return self._list(private('getorders', params), Order)

    def submit_order(self, market: str, type: str, amount: float, price: float) -> SubmittedOrder:
        """
        Place an order.

        Args:
            market: Market name
            type: 'Buy' or 'Sell'
            amount: Order quantity
            price: Limit price

        Returns:
            SubmittedOrder: New order id and ids of orders it filled
        """
        params = ParameterSet(market=market, type=type, amount=amount, price=price)
        return self._scalar(private('submitorder', params), SubmittedOrder)

    def cancel_order(self, type: str, order_id: Optional[int] = None,
                     market: Optional[str] = None) -> CancelledOrders:
        """
        Cancel one or more orders.

        Args:
            type: 'Single', 'Market', 'MarketBuys', 'MarketSells', 'AllBuys',
                'AllSells' or 'All'
            order_id: Order to cancel when type is 'Single'
            market: Market whose orders to cancel for the market-scoped types
        """
        params = ParameterSet(market=market, type=type, order_id=order_id)
        return self._scalar(private('cancelorder', params), CancelledOrders)

    def get_trade_history(self, market: Optional[str] = None, count: Optional[int] = None,
                          page_num: Optional[int] = None) -> List[TradeHistory]:
        """
        Get the account's executed trades.

        Args:
            market: Market name (default 'all')
            count: Page size (default 20)
            page_num: Zero-based page (default 0)
        """
        params = ParameterSet(
            market=_default(market, DEFAULT_MARKET),
            count=_default(count, DEFAULT_COUNT),
            page_num=_default(page_num, DEFAULT_PAGE),
        )
        return self._list(private('gettradehistory', params), TradeHistory)

    def generate_address(self, currency: str) -> Address:
        """Generate (or fetch) a deposit address for a currency."""
        return self._scalar(private('generateaddress', ParameterSet(currency=currency)), Address)

    def submit_withdraw(self, currency: str, address: str, amount: float) -> WithdrawalId:
        """
        Withdraw funds to an external address.

        Returns:
            WithdrawalId: Identifier of the created withdrawal
        """
        params = ParameterSet(currency=currency, address=address, amount=amount)
        return self._scalar(private('submitwithdraw', params), WithdrawalId)

    def get_deposits(self, currency: Optional[str] = None,
                     count: Optional[int] = None) -> List[Transaction]:
        params = ParameterSet(
            currency=_default(currency, DEFAULT_CURRENCY),
            count=_default(count, DEFAULT_COUNT),
        )
        return self._list(private('getdeposits', params), Transaction)

    def get_withdrawals(self, currency: Optional[str] = None,
                        count: Optional[int] = None) -> List[Transaction]:
        params = ParameterSet(
            currency=_default(currency, DEFAULT_CURRENCY),
            count=_default(count, DEFAULT_COUNT),
        )
        return self._list(private('getwithdrawals', params), Transaction)

    def submit_transfer(self, currency: str, username: str, amount: float) -> SubmittedTransfer:
        """Transfer funds to another TradeSatoshi user."""
        params = ParameterSet(currency=currency, username=username, amount=amount)
        return self._scalar(private('submittransfer', params), SubmittedTransfer)
