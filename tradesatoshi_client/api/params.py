"""
Sparse, ordered request parameters.

A ParameterSet only carries the fields that were actually provided. Unset
fields never reach the wire, neither in the public query string nor in the
private JSON body.
"""

import json
import math
from typing import Any, Dict, Iterator, List, Optional, Tuple
from urllib.parse import quote_plus


# (attribute, wire name, value type) in the canonical wire order
FIELDS: Tuple[Tuple[str, str, type], ...] = (
    ('market', 'Market', str),
    ('count', 'Count', int),
    ('currency', 'Currency', str),
    ('type', 'Type', str),
    ('depth', 'Depth', int),
    ('amount', 'Amount', float),
    ('price', 'Price', float),
    ('address', 'Address', str),
    ('page_num', 'PageNumber', int),
    ('order_id', 'OrderId', int),
    ('username', 'Username', str),
)

_FIELD_TYPES = {name: value_type for name, _, value_type in FIELDS}


def _check_value(name: str, value: Any) -> Any:
    """Validate a value for a field and return its wire-ready form."""
    if name not in _FIELD_TYPES:
        raise ValueError(f"Unknown request parameter: {name!r}")

    if value is None:
        return None

    expected = _FIELD_TYPES[name]
    # bool is an int subclass but never a valid count or id
    if isinstance(value, bool):
        raise TypeError(f"Parameter {name!r} must be {expected.__name__}, got bool")

    if expected is float:
        if not isinstance(value, (int, float)):
            raise TypeError(f"Parameter {name!r} must be a number, got {type(value).__name__}")
        try:
            converted = float(value)
        except OverflowError as e:
            raise ValueError(f"Parameter {name!r} is out of range: {e}") from e
        if not math.isfinite(converted):
            raise ValueError(f"Parameter {name!r} must be finite, got {value!r}")
        return converted

    if not isinstance(value, expected):
        raise TypeError(
            f"Parameter {name!r} must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


class ParameterSet:
    """Immutable set of optional request fields.

    ``set()`` returns a new instance, so a base set can be shared and
    extended per call::

        base = ParameterSet(market='LTC_BTC')
        params = base.set('count', 20)
    """

    __slots__ = ('_values',)

    def __init__(self, **fields: Any):
        values: Dict[str, Any] = {}
        for name, value in fields.items():
            checked = _check_value(name, value)
            if checked is not None:
                values[name] = checked
        self._values = values

    def set(self, name: str, value: Any) -> 'ParameterSet':
        """Return a copy with ``name`` populated (or cleared when value is None)."""
        checked = _check_value(name, value)
        updated = ParameterSet()
        updated._values = dict(self._values)
        if checked is None:
            updated._values.pop(name, None)
        else:
            updated._values[name] = checked
        return updated

    def get(self, name: str) -> Optional[Any]:
        if name not in _FIELD_TYPES:
            raise ValueError(f"Unknown request parameter: {name!r}")
        return self._values.get(name)

    def populated(self) -> List[Tuple[str, Any]]:
        """Wire name/value pairs of populated fields, in canonical order."""
        return [
            (wire_name, self._values[name])
            for name, wire_name, _ in FIELDS
            if name in self._values
        ]

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.populated())

    def to_query_string(self) -> str:
        """Render as ``?Name=value&...`` or an empty string when nothing is set."""
        pairs = self.populated()
        if not pairs:
            return ""
        return "?" + "&".join(
            f"{wire_name}={quote_plus(_query_value(value))}"
            for wire_name, value in pairs
        )

    def to_json_body(self) -> str:
        """Render as compact JSON; this exact string is both signed and sent."""
        return json.dumps(self.to_dict(), separators=(',', ':'), ensure_ascii=False)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.populated())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterSet):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(tuple(self.populated()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={self._values[name]!r}" for name, _, _ in FIELDS
                          if name in self._values)
        return f"ParameterSet({inner})"


def _query_value(value: Any) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)
