"""
APIAuth HMAC-SHA1 request signer

This module provides the signer that runs as the last step before an HTTP
request is transmitted. It ensures the Content-MD5 and Date headers are
present, builds the canonical string from the request and writes the
``APIAuth {access_id}:{signature}`` Authorization header.
"""

import time
import logging
from typing import Optional

from ..exceptions import UnsupportedBodyError
from .types import (
    SigningConfig,
    SigningTarget,
    SigningResult,
    Clock,
    AUTH_SCHEME,
    AUTHORIZATION_HEADER,
    CONTENT_MD5_HEADER,
    DATE_HEADER,
)
from .utils import (
    calculate_content_md5,
    compute_hmac_signature,
    format_http_date,
    PerformanceTimer,
)
from .canonical_string import build_canonical_string
from .signing_config import validate_signing_config

logger = logging.getLogger(__name__)


class ApiAuthSigner:
    """
    APIAuth request signer

    The signer holds nothing but its immutable configuration, so a single
    instance can sign requests from several threads at once.
    """

    def __init__(self, config: SigningConfig, clock: Optional[Clock] = None):
        """
        Initialize the signer with configuration.

        Args:
            config: Signing configuration
            clock: Optional time source for generated Date headers

        Raises:
            ConfigError: If configuration is invalid
        """
        validate_signing_config(config)
        self.config = config
        self.clock = clock or time.time

    def sign(self, request: SigningTarget) -> None:
        """
        Sign a request in place.

        Headers are updated on the request; the body is never replaced.

        Args:
            request: Request about to be sent
        """
        self.sign_request(request)

    def sign_request(self, request: SigningTarget) -> SigningResult:
        """
        Sign a request in place and report the final header values.

        Args:
            request: Request about to be sent

        Returns:
            SigningResult: Checksum, date, canonical string and authorization
        """
        timer = PerformanceTimer()

        self._set_content_md5(request)
        self._set_date(request)

        canonical_string = self.canonical_string(request)
        signature = compute_hmac_signature(canonical_string, self.config.secret_key_bytes)
        authorization = self._format_authorization(signature)
        request.set_header(AUTHORIZATION_HEADER, authorization)

        logger.debug(
            f"Signed request to {request.path} for access ID {self.config.access_id} "
            f"in {timer.elapsed_ms():.3f}ms"
        )

        return SigningResult(
            content_md5=request.get_header(CONTENT_MD5_HEADER),
            date=request.get_header(DATE_HEADER),
            canonical_string=canonical_string,
            signature=signature,
            authorization=authorization
        )

    def canonical_string(self, request: SigningTarget) -> str:
        """
        Build the canonical string of a request without modifying it.

        Args:
            request: Request carrying the headers to sign

        Returns:
            str: Canonical string
        """
        return build_canonical_string(request)

    def hmac_signature(self, request: SigningTarget) -> str:
        """
        Compute the signature of a request without modifying it.

        The caller is responsible for the Content-MD5 and Date headers being
        present when they are meant to be covered.

        Args:
            request: Request carrying the headers to sign

        Returns:
            str: Base64-encoded HMAC-SHA1 signature
        """
        return compute_hmac_signature(self.canonical_string(request), self.config.secret_key_bytes)

    def authorization_header(self, request: SigningTarget) -> str:
        """
        Build the Authorization header value for a request without setting it.

        Args:
            request: Request carrying the headers to sign

        Returns:
            str: ``APIAuth {access_id}:{signature}``
        """
        return self._format_authorization(self.hmac_signature(request))

    def _format_authorization(self, signature: str) -> str:
        return f"{AUTH_SCHEME} {self.config.access_id}:{signature}"

    def _set_content_md5(self, request: SigningTarget) -> None:
        if request.get_header(CONTENT_MD5_HEADER):
            return
        request.set_header(CONTENT_MD5_HEADER, calculate_content_md5(self._read_body(request)))

    def _set_date(self, request: SigningTarget) -> None:
        if request.get_header(DATE_HEADER):
            return
        request.set_header(DATE_HEADER, format_http_date(self.clock()))

    def _read_body(self, request: SigningTarget) -> bytes:
        """Read the body to checksum; bodiless and unreadable bodies count as empty."""
        try:
            body = request.get_body()
        except UnsupportedBodyError as e:
            logger.warning(f"Request body cannot be read, checksumming as empty: {e}")
            return b""

        return body if body is not None else b""


def create_signer(config: SigningConfig) -> ApiAuthSigner:
    """
    Create a new APIAuth signer.

    Args:
        config: Signing configuration

    Returns:
        ApiAuthSigner: Configured signer instance
    """
    return ApiAuthSigner(config)


def sign_request(request: SigningTarget, config: SigningConfig) -> SigningResult:
    """
    Sign a request with the given configuration.

    Args:
        request: Request to sign in place
        config: Signing configuration

    Returns:
        SigningResult: Signing result
    """
    signer = create_signer(config)
    return signer.sign_request(request)
