"""
Utility functions for request signing

This module provides the primitives of the APIAuth scheme: the Content-MD5
checksum, HTTP-date formatting, the HMAC-SHA1 signature and URL splitting.
"""

import time
import base64
import hashlib
from datetime import timezone
from email.utils import formatdate, parsedate_to_datetime
from typing import Optional, Tuple, Union
from urllib.parse import urlsplit

from cryptography.hazmat.primitives import hashes, hmac


def to_bytes(value: Union[str, bytes, bytearray, memoryview, None]) -> bytes:
    """
    Convert a body or key value to bytes.

    Args:
        value: String (UTF-8 encoded), bytes-like object or None

    Returns:
        bytes: Raw bytes, empty for None
    """
    if value is None:
        return b""
    if isinstance(value, str):
        return value.encode('utf-8')
    return bytes(value)


def calculate_content_md5(body: Union[str, bytes, None]) -> str:
    """
    Calculate the Content-MD5 header value for a request body.

    The raw 16-byte digest is base64 encoded, not its hex form.

    Args:
        body: Request body content (string, bytes, or None)

    Returns:
        str: Base64-encoded MD5 digest
    """
    digest = hashlib.md5(to_bytes(body)).digest()
    return base64.b64encode(digest).decode('ascii')


def format_http_date(timestamp: Optional[float] = None) -> str:
    """
    Format timestamp as an RFC 1123 HTTP-date.

    Weekday and month names are always English, whatever the process locale.

    Args:
        timestamp: Unix timestamp (uses current time if None)

    Returns:
        str: Date such as ``Mon, 23 Jan 1984 03:29:56 GMT``
    """
    if timestamp is None:
        timestamp = time.time()
    return formatdate(timestamp, usegmt=True)


def parse_http_date(value: Optional[str]) -> Optional[int]:
    """
    Parse an HTTP-date header value.

    Args:
        value: Header value to parse

    Returns:
        int: Unix timestamp, or None if the value is not a valid date
    """
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    # "-0000" zones come back naive
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def compute_hmac_signature(message: Union[str, bytes], secret_key: Union[str, bytes]) -> str:
    """
    Compute the APIAuth signature of a canonical string.

    Args:
        message: Canonical string to sign
        secret_key: Shared secret used as HMAC key (may be empty)

    Returns:
        str: Base64-encoded HMAC-SHA1 with surrounding whitespace stripped
    """
    mac = hmac.HMAC(to_bytes(secret_key), hashes.SHA1())
    mac.update(to_bytes(message))
    return base64.b64encode(mac.finalize()).decode('ascii').strip()


def split_url(url: str) -> Tuple[str, str]:
    """
    Split a URL into the path and query parts used by the canonical string.

    Args:
        url: Absolute URL or origin-relative target

    Returns:
        tuple: (path, query) where path defaults to ``/`` and query keeps its
            leading ``?`` or is empty
    """
    parts = urlsplit(url)
    path = parts.path or "/"
    query = f"?{parts.query}" if parts.query else ""
    return path, query


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000
