"""
Verification of APIAuth signed requests

This module recomputes signatures the way a receiving server does, using the
same canonical string and HMAC helpers as the signer. It is used by
integration tests and by services that accept APIAuth signed requests.
"""

import time
import logging
from typing import Optional, Tuple
from dataclasses import dataclass

from cryptography.hazmat.primitives import constant_time

from ..exceptions import SignatureMismatchError, UnsupportedBodyError, ErrorCodes
from .types import (
    SigningConfig,
    SigningTarget,
    Clock,
    AUTH_SCHEME,
    AUTHORIZATION_HEADER,
    CONTENT_MD5_HEADER,
    DATE_HEADER,
)
from .utils import calculate_content_md5, parse_http_date
from .signer import ApiAuthSigner

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """
    Outcome of verifying a signed request

    Attributes:
        valid: Whether the request passed every check
        access_id: Access ID presented by the request, if any
        presented_signature: Signature carried by the Authorization header
        expected_signature: Signature recomputed from the request
        reason: Error code of the first failed check
    """
    valid: bool
    access_id: Optional[str] = None
    presented_signature: Optional[str] = None
    expected_signature: Optional[str] = None
    reason: Optional[str] = None


def parse_authorization_header(value: Optional[str]) -> Tuple[str, str]:
    """
    Split an APIAuth Authorization header into access ID and signature.

    Args:
        value: Header value, ``APIAuth {access_id}:{signature}``

    Returns:
        tuple: (access_id, signature)

    Raises:
        SignatureMismatchError: If the header is absent or malformed
    """
    prefix = f"{AUTH_SCHEME} "
    if not value or not value.startswith(prefix):
        raise SignatureMismatchError(
            "Authorization header is not an APIAuth credential",
            ErrorCodes.MALFORMED_AUTHORIZATION,
            {"authorization": value}
        )

    # Base64 signatures never contain a colon
    access_id, separator, signature = value[len(prefix):].rpartition(':')
    if not separator or not access_id or not signature:
        raise SignatureMismatchError(
            "Authorization header must be 'APIAuth <access_id>:<signature>'",
            ErrorCodes.MALFORMED_AUTHORIZATION,
            {"authorization": value}
        )

    return access_id, signature


class ApiAuthVerifier:
    """
    APIAuth signature verifier

    Holds the shared secret of one access ID. Optional checks cover the
    Content-MD5 header against the body and the Date header against a
    maximum clock skew.
    """

    def __init__(
        self,
        config: SigningConfig,
        max_clock_skew: Optional[int] = None,
        verify_content_md5: bool = False,
        clock: Optional[Clock] = None
    ):
        """
        Initialize the verifier.

        Args:
            config: Access ID and shared secret to verify against
            max_clock_skew: Maximum allowed age of the Date header in seconds
            verify_content_md5: Whether to recompute the body checksum
            clock: Optional time source for the clock skew check

        Raises:
            ConfigError: If configuration is invalid
        """
        self.signer = ApiAuthSigner(config)
        self.config = config
        self.max_clock_skew = max_clock_skew
        self.verify_content_md5 = verify_content_md5
        self.clock = clock or time.time

    def verify(self, request: SigningTarget) -> VerificationResult:
        """
        Verify a signed request.

        Args:
            request: Request as received

        Returns:
            VerificationResult: Verification outcome
        """
        try:
            access_id, presented = parse_authorization_header(request.get_header(AUTHORIZATION_HEADER))
        except SignatureMismatchError as e:
            return VerificationResult(valid=False, reason=e.error_code)

        result = VerificationResult(valid=False, access_id=access_id, presented_signature=presented)

        if access_id != self.config.access_id:
            result.reason = ErrorCodes.ACCESS_ID_MISMATCH
            return result

        result.expected_signature = self.signer.hmac_signature(request)
        if not constant_time.bytes_eq(
            result.expected_signature.encode('ascii'),
            presented.encode('utf-8')
        ):
            result.reason = ErrorCodes.SIGNATURE_MISMATCH
            return result

        if self.verify_content_md5 and not self._content_md5_matches(request):
            result.reason = ErrorCodes.CONTENT_MD5_MISMATCH
            return result

        if self.max_clock_skew is not None and not self._date_is_fresh(request):
            result.reason = ErrorCodes.STALE_DATE
            return result

        result.valid = True
        return result

    def verify_or_raise(self, request: SigningTarget) -> VerificationResult:
        """
        Verify a signed request, raising on failure.

        Args:
            request: Request as received

        Returns:
            VerificationResult: Successful verification outcome

        Raises:
            SignatureMismatchError: If any check fails
        """
        result = self.verify(request)
        if not result.valid:
            logger.warning(f"Rejected APIAuth request to {request.path}: {result.reason}")
            raise SignatureMismatchError(
                f"Request signature verification failed: {result.reason}",
                result.reason,
                {"access_id": result.access_id}
            )
        return result

    def _content_md5_matches(self, request: SigningTarget) -> bool:
        try:
            body = request.get_body()
        except UnsupportedBodyError:
            return False
        return request.get_header(CONTENT_MD5_HEADER) == calculate_content_md5(body)

    def _date_is_fresh(self, request: SigningTarget) -> bool:
        timestamp = parse_http_date(request.get_header(DATE_HEADER))
        if timestamp is None:
            return False
        return abs(self.clock() - timestamp) <= self.max_clock_skew


def verify_request(request: SigningTarget, config: SigningConfig) -> bool:
    """
    Check the signature of a request.

    Args:
        request: Request as received
        config: Access ID and shared secret

    Returns:
        bool: True if the Authorization header matches
    """
    return ApiAuthVerifier(config).verify(request).valid
