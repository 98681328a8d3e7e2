"""Request description and URL building."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .params import ParameterSet


DEFAULT_BASE_URL = "https://tradesatoshi.com/api/"


class AccessClass(Enum):
    """Whether an endpoint is public (unauthenticated) or private (signed)."""
    PUBLIC = 'public'
    PRIVATE = 'private'


# Path segment per access class, kept apart from the enum member names
PATH_SEGMENTS = {
    AccessClass.PUBLIC: 'public',
    AccessClass.PRIVATE: 'private',
}


@dataclass(frozen=True)
class Request:
    """One endpoint call. The nonce is drawn by the transport on every send."""

    access_class: AccessClass
    endpoint: str
    params: Optional[ParameterSet] = None

    @property
    def is_private(self) -> bool:
        return self.access_class is AccessClass.PRIVATE

    def path(self, base_url: str = DEFAULT_BASE_URL) -> str:
        """``{base_url}/{public|private}/{endpoint}`` without query string."""
        return f"{base_url.rstrip('/')}/{PATH_SEGMENTS[self.access_class]}/{self.endpoint}"

    def url(self, base_url: str = DEFAULT_BASE_URL) -> str:
        """Full URL. Public parameters travel in the query string."""
        url = self.path(base_url)
        if not self.is_private and self.params is not None:
            url += self.params.to_query_string()
        return url

    def body(self) -> Optional[str]:
        """JSON body for private calls (``{}`` when no parameters), None for public."""
        if not self.is_private:
            return None
        params = self.params if self.params is not None else ParameterSet()
        return params.to_json_body()


def public(endpoint: str, params: Optional[ParameterSet] = None) -> Request:
    return Request(AccessClass.PUBLIC, endpoint, params)


def private(endpoint: str, params: Optional[ParameterSet] = None) -> Request:
    return Request(AccessClass.PRIVATE, endpoint, params if params is not None else ParameterSet())
