"""
Type definitions for request signing functionality

This module provides the data classes and protocols used by the APIAuth
HMAC-SHA1 request signer: the immutable signing configuration, the request
abstraction the signer mutates, and the result of a signing pass.
"""

from typing import Callable, Dict, Mapping, Optional, Union, Protocol, runtime_checkable
from dataclasses import dataclass, field
from enum import Enum

from requests.structures import CaseInsensitiveDict

from ..exceptions import ConfigError, ErrorCodes
from .utils import split_url, to_bytes


# Header names written or read by the signer
CONTENT_TYPE_HEADER = "Content-Type"
CONTENT_MD5_HEADER = "Content-MD5"
DATE_HEADER = "Date"
AUTHORIZATION_HEADER = "Authorization"

AUTH_SCHEME = "APIAuth"


class HttpMethod(str, Enum):
    """HTTP methods supported for signing"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


# Methods without entity-enclosing semantics; their body is checksummed as empty
BODYLESS_METHODS = frozenset({HttpMethod.GET, HttpMethod.HEAD, HttpMethod.TRACE})


@dataclass(frozen=True)
class SigningConfig:
    """
    Configuration for request signing

    Attributes:
        access_id: Identifier issued to the caller, sent in the clear
        secret_key: Shared secret used as the HMAC key
    """
    access_id: str
    secret_key: Union[str, bytes] = field(repr=False)

    def __post_init__(self):
        """Validate signing configuration"""
        if not self.access_id:
            raise ConfigError(
                "Access ID is required for request signing",
                ErrorCodes.MISSING_ACCESS_ID
            )

        if not isinstance(self.access_id, str):
            raise ConfigError(
                "Access ID must be a string",
                ErrorCodes.INVALID_CONFIG,
                {"access_id_type": type(self.access_id).__name__}
            )

        if not self.secret_key:
            raise ConfigError(
                "Secret key is required for request signing",
                ErrorCodes.MISSING_SECRET_KEY
            )

        if not isinstance(self.secret_key, (str, bytes)):
            raise ConfigError(
                "Secret key must be a string or bytes",
                ErrorCodes.INVALID_CONFIG,
                {"secret_key_type": type(self.secret_key).__name__}
            )

    @property
    def secret_key_bytes(self) -> bytes:
        """Secret key as raw bytes for use as HMAC key material."""
        return to_bytes(self.secret_key)


@runtime_checkable
class SigningTarget(Protocol):
    """
    Request abstraction the signer reads from and writes headers to.

    Adapters for host HTTP clients implement this protocol. ``get_body``
    returns None when the request has no body, and may raise
    UnsupportedBodyError when the body cannot be introspected.
    """

    @property
    def path(self) -> str: ...

    @property
    def query(self) -> str: ...

    def get_header(self, name: str) -> Optional[str]: ...

    def set_header(self, name: str, value: str) -> None: ...

    def get_body(self) -> Optional[bytes]: ...


@dataclass
class SignableRequest:
    """
    Outbound request to be signed

    Attributes:
        method: HTTP method (GET, POST, etc.)
        url: Complete request URL or origin-relative target
        headers: Request headers; lookups are case-insensitive, casing is kept
        body: Optional request body (string or bytes)
    """
    method: HttpMethod
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[Union[str, bytes]] = None

    def __post_init__(self):
        """Validate request after initialization"""
        if not self.url:
            raise ValueError("Request URL cannot be empty")

        if not isinstance(self.method, HttpMethod):
            self.method = HttpMethod(str(self.method).upper())

        self.headers = CaseInsensitiveDict(self.headers or {})

    @property
    def path(self) -> str:
        return split_url(self.url)[0]

    @property
    def query(self) -> str:
        return split_url(self.url)[1]

    def get_header(self, name: str) -> Optional[str]:
        return self.headers.get(name)

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def get_body(self) -> Optional[bytes]:
        if self.method in BODYLESS_METHODS:
            return None
        if self.body is None:
            return b""
        return to_bytes(self.body)


@dataclass
class SigningResult:
    """
    Final header values of a signed request

    Attributes:
        content_md5: Content-MD5 header value (computed or pre-existing)
        date: Date header value (generated or pre-existing)
        canonical_string: String the signature was computed over
        signature: Base64 HMAC-SHA1 signature
        authorization: Complete Authorization header value
    """
    content_md5: str
    date: str
    canonical_string: str
    signature: str
    authorization: str

    @property
    def headers(self) -> Dict[str, str]:
        """Headers written by the signer, keyed by their canonical names."""
        return {
            CONTENT_MD5_HEADER: self.content_md5,
            DATE_HEADER: self.date,
            AUTHORIZATION_HEADER: self.authorization,
        }


# Type aliases for convenience
Clock = Callable[[], float]
