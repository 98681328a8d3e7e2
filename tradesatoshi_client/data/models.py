"""
Domain models for TradeSatoshi API results.

Each model maps one-to-one onto a JSON object returned inside the ``result``
field of the response envelope. Field names follow Python conventions; the
exchange's camelCase names live in each field's ``wire`` metadata so
``from_dict``/``to_dict`` round-trip the payload unchanged.
"""

import typing
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


def wire(name: str, **kwargs) -> Any:
    """Declare a dataclass field whose JSON name differs from the attribute."""
    return field(metadata={'wire': name}, **kwargs)


def _wire_name(f) -> str:
    return f.metadata.get('wire', f.name)


class WireModel:
    """Mixin giving dataclasses dict conversion over their wire names."""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """
        Build an instance from a decoded JSON object.

        Raises:
            TypeError: ``data`` is not a mapping or a value has the wrong type
            KeyError: A required field is missing
        """
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")

        hints = typing.get_type_hints(cls)
        kwargs = {}
        for f in fields(cls):
            name = _wire_name(f)
            if name not in data or data[name] is None:
                if _is_optional(hints[f.name]):
                    kwargs[f.name] = None
                    continue
                raise KeyError(f"{cls.__name__} is missing required field '{name}'")
            kwargs[f.name] = _convert(hints[f.name], data[name], f"{cls.__name__}.{name}")
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, WireModel):
                value = value.to_dict()
            elif isinstance(value, list):
                value = [v.to_dict() if isinstance(v, WireModel) else v for v in value]
            result[_wire_name(f)] = value
        return result


def _is_optional(hint) -> bool:
    return typing.get_origin(hint) is typing.Union and type(None) in typing.get_args(hint)


def _convert(hint, value: Any, where: str) -> Any:
    if _is_optional(hint):
        hint = next(arg for arg in typing.get_args(hint) if arg is not type(None))

    if typing.get_origin(hint) is list:
        if not isinstance(value, list):
            raise TypeError(f"{where} must be a list, got {type(value).__name__}")
        (item_hint,) = typing.get_args(hint)
        return [_convert(item_hint, item, where) for item in value]

    if isinstance(hint, type) and issubclass(hint, WireModel):
        return hint.from_dict(value)

    if hint is bool:
        if not isinstance(value, bool):
            raise TypeError(f"{where} must be a boolean, got {type(value).__name__}")
        return value

    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{where} must be a number, got {type(value).__name__}")
        try:
            return float(value)
        except OverflowError as e:
            raise ValueError(f"{where} is out of range: {e}") from e

    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{where} must be an integer, got {type(value).__name__}")
        return value

    if hint is str:
        if not isinstance(value, str):
            raise TypeError(f"{where} must be a string, got {type(value).__name__}")
        return value

    return value


@dataclass
class Currency(WireModel):
    currency: str
    currency_long: str = wire('currencyLong')
    min_confirmation: int = wire('minConfirmation')
    tx_fee: float = wire('txFee')
    status: str


@dataclass
class Address(WireModel):
    currency: str
    address: str


@dataclass
class Balance(WireModel):
    """Wallet balance for one currency."""
    currency: str
    currency_long: str = wire('currencyLong')
    available: float
    total: float
    held_for_trades: float = wire('heldForTrades')
    unconfirmed: float
    pending_withdraw: float = wire('pendingWithdraw')
    address: Optional[str] = None


@dataclass
class Order(WireModel):
    """An open or historical order owned by the account."""
    id: int
    market: str
    order_type: str = wire('type')
    amount: float
    rate: float
    remaining: float
    total: float
    status: str
    timestamp: str
    is_api: bool = wire('isApi')


@dataclass
class MarketSummary(WireModel):
    market: str
    high: float
    low: float
    volume: float
    last: float
    base_volume: float = wire('baseVolume')
    bid: float
    ask: float
    open_buy_orders: int = wire('openBuyOrders')
    open_sell_orders: int = wire('openSellOrders')


@dataclass
class Ticker(WireModel):
    ask: float
    bid: float
    last: float


@dataclass
class PublicOrder(WireModel):
    quantity: float
    rate: float


@dataclass
class OrderBook(WireModel):
    buy: List[PublicOrder]
    sell: List[PublicOrder]


@dataclass
class Trade(WireModel):
    """A public market trade."""
    id: int
    time_stamp: str = wire('timeStamp')
    quantity: float
    price: float
    total: float
    order_type: str = wire('orderType')


@dataclass
class TradeHistory(WireModel):
    """A trade executed by the account."""
    id: int
    market: str
    trade_type: str = wire('type')
    amount: float
    rate: float
    fee: float
    total: float
    time_stamp: str = wire('timeStamp')
    is_api: bool = wire('isApi')


@dataclass
class Transaction(WireModel):
    """A deposit or withdrawal."""
    id: str
    currency: str
    currency_long: str = wire('currencyLong')
    amount: float
    fee: float
    address: str
    status: str
    confirmations: int
    time_stamp: str = wire('timeStamp')
    is_api: bool = wire('isApi')
    tx_id: Optional[str] = wire('txId', default=None)


@dataclass
class WithdrawalId(WireModel):
    withdrawal_id: str = wire('withdrawalId')


@dataclass
class SubmittedOrder(WireModel):
    order_id: int = wire('orderId')
    filled: List[int]


@dataclass
class CancelledOrders(WireModel):
    canceled_orders: List[int] = wire('canceledOrders')


@dataclass
class SubmittedTransfer(WireModel):
    data: str
