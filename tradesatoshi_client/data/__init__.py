"""Data models for TradeSatoshi API results."""

from .models import (
    Address,
    Balance,
    CancelledOrders,
    Currency,
    MarketSummary,
    Order,
    OrderBook,
    PublicOrder,
    SubmittedOrder,
    SubmittedTransfer,
    Ticker,
    Trade,
    TradeHistory,
    Transaction,
    WireModel,
    WithdrawalId,
)

__all__ = [
    'Address',
    'Balance',
    'CancelledOrders',
    'Currency',
    'MarketSummary',
    'Order',
    'OrderBook',
    'PublicOrder',
    'SubmittedOrder',
    'SubmittedTransfer',
    'Ticker',
    'Trade',
    'TradeHistory',
    'Transaction',
    'WireModel',
    'WithdrawalId',
]
