"""
Request signing for private TradeSatoshi endpoints.

The exchange authenticates private calls with an ``Authorization`` header of
the form ``Basic {api_key}:{signature}:{nonce}`` where the signature is a
base64 HMAC-SHA512 over::

    api_key + METHOD + lower(form_urlencode(url)) + nonce + base64(body)

keyed with the base64-decoded API secret.
"""

import base64
import binascii
import hashlib
import hmac
import os
import random
import string
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from .errors import ConfigurationError


API_KEY_ENV = 'TRADESATOSHI_API_KEY'
API_SECRET_ENV = 'TRADESATOSHI_API_SECRET'

# application/x-www-form-urlencoded leaves only these bytes untouched
_FORM_SAFE = frozenset((string.ascii_letters + string.digits + '*-._').encode('ascii'))

_nonce_source = random.SystemRandom()


def decode_secret(api_secret: str) -> bytes:
    """Decode the base64 API secret into raw HMAC key bytes."""
    try:
        return base64.b64decode(api_secret.encode('ascii'), validate=True)
    except (binascii.Error, UnicodeEncodeError, ValueError) as e:
        raise ConfigurationError(f"API secret is not valid base64: {e}") from e


@dataclass(frozen=True)
class Credentials:
    """API key pair. The secret never appears in repr()."""

    api_key: str
    api_secret: str = field(repr=False)

    def __post_init__(self):
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise ConfigurationError("API key must be a non-empty string")
        if not isinstance(self.api_secret, str) or not self.api_secret.strip():
            raise ConfigurationError("API secret must be a non-empty string")
        decode_secret(self.api_secret)

    @property
    def secret_bytes(self) -> bytes:
        return decode_secret(self.api_secret)

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> Optional['Credentials']:
        """Build credentials from the environment, or None when neither is set."""
        env = os.environ if environ is None else environ
        api_key = env.get(API_KEY_ENV)
        api_secret = env.get(API_SECRET_ENV)
        if not api_key and not api_secret:
            return None
        if not api_key or not api_secret:
            raise ConfigurationError(
                f"Both {API_KEY_ENV} and {API_SECRET_ENV} must be set"
            )
        return cls(api_key=api_key, api_secret=api_secret)


def form_urlencode(text: str) -> str:
    """Percent-encode ``text`` the way HTML form encoding does (space as '+')."""
    out = []
    for byte in text.encode('utf-8'):
        if byte in _FORM_SAFE:
            out.append(chr(byte))
        elif byte == 0x20:
            out.append('+')
        else:
            out.append('%%%02X' % byte)
    return ''.join(out)


def generate_nonce() -> str:
    """Fractional digits of a random float in [0, 1), without the ``0.`` prefix."""
    while True:
        text = repr(_nonce_source.random())
        if 'e' in text:
            text = format(Decimal(text), 'f')
        digits = text.partition('.')[2]
        if digits.strip('0'):
            return digits


def sign(api_key: str, secret: bytes, method: str, url: str, nonce: str, body: str) -> str:
    """Build the ``Authorization`` header value for one request.

    Args:
        api_key: Public API key
        secret: Raw (already base64-decoded) API secret
        method: HTTP method, upper-cased before signing
        url: Full request URL
        nonce: Nonce string, also echoed in the header
        body: Exact JSON body sent on the wire

    Returns:
        str: ``Basic {api_key}:{signature}:{nonce}``
    """
    encoded_url = form_urlencode(url).lower()
    encoded_body = base64.b64encode(body.encode('utf-8')).decode('ascii')
    payload = f"{api_key}{method.upper()}{encoded_url}{nonce}{encoded_body}"

    mac = hmac.new(secret, payload.encode('utf-8'), hashlib.sha512)
    signature = base64.b64encode(mac.digest()).decode('ascii')

    return f"Basic {api_key}:{signature}:{nonce}"


class Signer:
    """Signs private requests with a fixed set of credentials."""

    def __init__(self, credentials: Credentials):
        self.credentials = credentials
        self._secret = credentials.secret_bytes

    def authorization(self, method: str, url: str, body: str,
                      nonce: Optional[str] = None) -> str:
        """Return the header value, drawing a fresh nonce unless one is given."""
        if nonce is None:
            nonce = generate_nonce()
        return sign(self.credentials.api_key, self._secret, method, url, nonce, body)

    def __repr__(self) -> str:
        return f"Signer(api_key={self.credentials.api_key!r})"
