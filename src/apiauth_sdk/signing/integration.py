"""
HTTP client integration for request signing

This module plugs the APIAuth signer into the requests and httpx clients so
outgoing requests are signed as late as possible: after every other
component has set its headers and body, right before transmission.
"""

import logging
from typing import Dict, Optional, Union

import httpx
import requests
from requests.adapters import BaseAdapter, HTTPAdapter
from requests.auth import AuthBase
from requests.models import PreparedRequest
from requests.status_codes import codes
from requests.sessions import Session
from requests.structures import CaseInsensitiveDict

from ..exceptions import ConfigError, UnsupportedBodyError, ErrorCodes
from .types import (
    SigningConfig,
    HttpMethod,
    BODYLESS_METHODS,
    AUTHORIZATION_HEADER,
    CONTENT_MD5_HEADER,
    DATE_HEADER,
)
from .utils import split_url, to_bytes
from .signer import ApiAuthSigner

logger = logging.getLogger(__name__)

SIGNED_PREFIXES = ('http://', 'https://')

# Redirects on which requests resends the original body
BODY_PRESERVING_REDIRECTS = (codes.temporary_redirect, codes.permanent_redirect)


def _is_bodyless(method: Optional[str]) -> bool:
    try:
        return HttpMethod((method or 'GET').upper()) in BODYLESS_METHODS
    except ValueError:
        return False


class PreparedRequestAdapter:
    """
    SigningTarget view over a requests PreparedRequest.

    Streaming bodies (files, generators) are not read; they raise
    UnsupportedBodyError and are checksummed as empty by the signer.
    """

    def __init__(self, prepared: PreparedRequest):
        self.prepared = prepared
        if self.prepared.headers is None:
            self.prepared.headers = CaseInsensitiveDict()

    @property
    def path(self) -> str:
        return split_url(self.prepared.url)[0]

    @property
    def query(self) -> str:
        return split_url(self.prepared.url)[1]

    def get_header(self, name: str) -> Optional[str]:
        value = self.prepared.headers.get(name)
        if isinstance(value, bytes):
            return value.decode('latin-1')
        return value

    def set_header(self, name: str, value: str) -> None:
        self.prepared.headers[name] = value

    def get_body(self) -> Optional[bytes]:
        if _is_bodyless(self.prepared.method):
            return None

        body = self.prepared.body
        if body is None or isinstance(body, (str, bytes, bytearray)):
            return to_bytes(body)

        raise UnsupportedBodyError(
            f"Cannot read request body of type {type(body).__name__}",
            ErrorCodes.UNSUPPORTED_BODY,
            {"body_type": type(body).__name__}
        )


def _forget_signature(prepared: PreparedRequest, response: requests.Response) -> None:
    """
    Drop APIAuth headers that would be stale on a redirected request.

    requests builds each hop of a redirect chain by copying the request just
    sent. The copy gets a new target and, except on 307 and 308, loses its
    body, so the old signature and checksum no longer describe it. The
    response keeps a snapshot of what was actually sent.
    """
    response.request = prepared.copy()
    prepared.headers.pop(AUTHORIZATION_HEADER, None)
    if response.status_code not in BODY_PRESERVING_REDIRECTS:
        prepared.headers.pop(CONTENT_MD5_HEADER, None)
        prepared.headers.pop(DATE_HEADER, None)
    logger.debug(f"Cleared APIAuth headers before redirect from {prepared.url}")


class ApiAuth(AuthBase):
    """
    requests authentication handler signing with APIAuth.

    Usage: ``requests.get(url, auth=ApiAuth(config))``.

    requests does not run auth handlers again when following redirects, so
    redirected requests are sent without APIAuth headers. Use a
    SigningSession or SigningHTTPAdapter to sign every hop.
    """

    def __init__(self, config: SigningConfig):
        self.signer = ApiAuthSigner(config)

    def __call__(self, prepared: PreparedRequest) -> PreparedRequest:
        self.signer.sign(PreparedRequestAdapter(prepared))
        prepared.register_hook('response', self.handle_redirect)
        return prepared

    def handle_redirect(self, response: requests.Response, **kwargs) -> requests.Response:
        if response.is_redirect:
            _forget_signature(response.request, response)
        return response


class SigningHTTPAdapter(HTTPAdapter):
    """
    HTTPAdapter that signs every request it sends.

    Signing happens inside ``send``, after session-level preparation, auth
    handlers and hooks have run. Mount it with ``Session.mount()``.
    """

    def __init__(self, config: SigningConfig, **kwargs):
        """
        Initialize signing adapter.

        Args:
            config: Signing configuration
            **kwargs: Arguments for requests.adapters.HTTPAdapter
        """
        self.config = config
        self.signer = ApiAuthSigner(config)
        super().__init__(**kwargs)

    def send(self, request: PreparedRequest, **kwargs) -> requests.Response:
        self.signer.sign(PreparedRequestAdapter(request))
        logger.debug(f"Signed {request.method} request to {request.url}")
        response = super().send(request, **kwargs)
        if response.is_redirect:
            _forget_signature(request, response)
        return response


def sign_prepared_request(prepared: PreparedRequest, config: SigningConfig) -> PreparedRequest:
    """
    Sign a prepared request in place.

    Args:
        prepared: Prepared request to sign
        config: Signing configuration

    Returns:
        PreparedRequest: The same request with APIAuth headers set
    """
    ApiAuthSigner(config).sign(PreparedRequestAdapter(prepared))
    return prepared


def _mount_signing_adapters(session: Session, config: SigningConfig) -> Dict[str, BaseAdapter]:
    originals = {prefix: session.adapters.get(prefix) for prefix in SIGNED_PREFIXES}
    for prefix in SIGNED_PREFIXES:
        session.mount(prefix, SigningHTTPAdapter(config))
    return originals


def _restore_adapters(session: Session, originals: Dict[str, Optional[BaseAdapter]]) -> None:
    for prefix, adapter in originals.items():
        session.mount(prefix, adapter or HTTPAdapter())


class SigningSession:
    """
    HTTP session wrapper with automatic request signing capability.

    This class wraps a requests.Session and mounts a SigningHTTPAdapter for
    http and https URLs while signing is enabled.
    """

    def __init__(
        self,
        signing_config: Optional[SigningConfig] = None,
        session: Optional[Session] = None,
        auto_sign: bool = True
    ):
        """
        Initialize signing session.

        Args:
            signing_config: Optional signing configuration
            session: Optional existing requests session to wrap
            auto_sign: Whether to automatically sign requests
        """
        self.session = session or requests.Session()
        self.signing_config: Optional[SigningConfig] = None
        self.signer: Optional[ApiAuthSigner] = None
        self.auto_sign = False
        self._original_adapters: Optional[Dict[str, BaseAdapter]] = None

        if signing_config is not None:
            self.configure_signing(signing_config, auto_sign=auto_sign)

    def configure_signing(self, config: SigningConfig, auto_sign: bool = True) -> None:
        """
        Configure request signing for this session.

        Args:
            config: Signing configuration
            auto_sign: Whether to automatically sign requests

        Raises:
            ConfigError: If configuration is invalid
        """
        self.signer = ApiAuthSigner(config)
        self.signing_config = config
        self._unmount()
        self.auto_sign = False
        logger.info(f"Configured request signing for access ID: {config.access_id}")

        if auto_sign:
            self.enable_signing()

    def enable_signing(self) -> None:
        """Enable automatic request signing (if configured)."""
        if not self.signer:
            logger.warning("Cannot enable signing - no signing configuration available")
            return

        if self._original_adapters is None:
            self._original_adapters = _mount_signing_adapters(self.session, self.signing_config)
        self.auto_sign = True
        logger.info("Enabled automatic request signing")

    def disable_signing(self) -> None:
        """Disable automatic request signing."""
        self._unmount()
        self.auto_sign = False
        logger.info("Disabled automatic request signing")

    def _unmount(self) -> None:
        if self._original_adapters is not None:
            _restore_adapters(self.session, self._original_adapters)
            self._original_adapters = None

    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        """
        Make HTTP request, signed when signing is enabled.

        Args:
            method: HTTP method
            url: Request URL
            **kwargs: Additional arguments for requests

        Returns:
            requests.Response: HTTP response
        """
        return self.session.request(method, url, **kwargs)

    def get(self, url: str, **kwargs) -> requests.Response:
        """Make GET request."""
        return self.request('GET', url, **kwargs)

    def post(self, url: str, **kwargs) -> requests.Response:
        """Make POST request."""
        return self.request('POST', url, **kwargs)

    def put(self, url: str, **kwargs) -> requests.Response:
        """Make PUT request."""
        return self.request('PUT', url, **kwargs)

    def delete(self, url: str, **kwargs) -> requests.Response:
        """Make DELETE request."""
        return self.request('DELETE', url, **kwargs)

    def patch(self, url: str, **kwargs) -> requests.Response:
        """Make PATCH request."""
        return self.request('PATCH', url, **kwargs)

    def head(self, url: str, **kwargs) -> requests.Response:
        """Make HEAD request."""
        return self.request('HEAD', url, **kwargs)

    def options(self, url: str, **kwargs) -> requests.Response:
        """Make OPTIONS request."""
        return self.request('OPTIONS', url, **kwargs)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def create_signing_session(
    signing_config: Optional[SigningConfig] = None,
    auto_sign: bool = True,
    **session_kwargs
) -> SigningSession:
    """
    Create a new signing session.

    Args:
        signing_config: Optional signing configuration
        auto_sign: Whether to automatically sign requests
        **session_kwargs: Attributes to set on the requests.Session

    Returns:
        SigningSession: Configured signing session
    """
    session = requests.Session()

    for key, value in session_kwargs.items():
        if hasattr(session, key):
            setattr(session, key, value)

    return SigningSession(
        signing_config=signing_config,
        session=session,
        auto_sign=auto_sign
    )


def enable_request_signing(session: Union[Session, SigningSession], config: SigningConfig) -> None:
    """
    Enable request signing for an existing session.

    Args:
        session: Session to enable signing for
        config: Signing configuration

    Raises:
        ConfigError: If session type is not supported
    """
    if isinstance(session, SigningSession):
        session.configure_signing(config, auto_sign=True)
    elif isinstance(session, Session):
        disable_request_signing(session)
        session._apiauth_original_adapters = _mount_signing_adapters(session, config)
        logger.info(f"Enabled request signing for access ID: {config.access_id}")
    else:
        raise ConfigError(
            f"Unsupported session type: {type(session)}",
            ErrorCodes.INVALID_CONFIG,
            {"session_type": str(type(session))}
        )


def disable_request_signing(session: Union[Session, SigningSession]) -> None:
    """
    Disable request signing for a session.

    Args:
        session: Session to disable signing for
    """
    if isinstance(session, SigningSession):
        session.disable_signing()
    elif hasattr(session, '_apiauth_original_adapters'):
        _restore_adapters(session, session._apiauth_original_adapters)
        delattr(session, '_apiauth_original_adapters')


class HttpxRequestAdapter:
    """SigningTarget view over an httpx Request."""

    def __init__(self, request: httpx.Request):
        self.request = request

    def _target(self):
        path, _, query = self.request.url.raw_path.decode('ascii').partition('?')
        return path or '/', f"?{query}" if query else ""

    @property
    def path(self) -> str:
        return self._target()[0]

    @property
    def query(self) -> str:
        return self._target()[1]

    def get_header(self, name: str) -> Optional[str]:
        return self.request.headers.get(name)

    def set_header(self, name: str, value: str) -> None:
        self.request.headers[name] = value

    def get_body(self) -> Optional[bytes]:
        if _is_bodyless(self.request.method):
            return None

        try:
            return self.request.content
        except httpx.RequestNotRead as e:
            raise UnsupportedBodyError(
                "Streaming request body has not been read",
                ErrorCodes.UNSUPPORTED_BODY
            ) from e


class HttpxApiAuth(httpx.Auth):
    """
    httpx authentication flow signing with APIAuth.

    Works with both ``httpx.Client`` and ``httpx.AsyncClient``; the request
    body is read before signing so Content-MD5 covers it.
    """

    requires_request_body = True

    def __init__(self, config: SigningConfig):
        self.signer = ApiAuthSigner(config)

    def auth_flow(self, request: httpx.Request):
        self.signer.sign(HttpxRequestAdapter(request))
        yield request
