"""API client module for TradeSatoshi integration."""

from .client import TradeSatoshiClient
from .envelope import Envelope, decode_list, decode_scalar, parse_envelope
from .errors import (
    APIError, ConfigurationError, MalformedResponseError, TradeSatoshiError, TransportError,
)
from .params import ParameterSet
from .request import DEFAULT_BASE_URL, AccessClass, Request
from .signer import Credentials, Signer, generate_nonce, sign
from .transport import Transport

__all__ = [
    'TradeSatoshiClient',
    'Envelope',
    'decode_list',
    'decode_scalar',
    'parse_envelope',
    'APIError',
    'ConfigurationError',
    'MalformedResponseError',
    'TradeSatoshiError',
    'TransportError',
    'ParameterSet',
    'DEFAULT_BASE_URL',
    'AccessClass',
    'Request',
    'Credentials',
    'Signer',
    'generate_nonce',
    'sign',
    'Transport',
]
