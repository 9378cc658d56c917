"""
Canonical string construction for APIAuth signatures

The canonical string is the HMAC input shared by signer and verifier. It is
made of exactly four fields joined by a comma:

    content-type,content-md5,path+query,date

Fields are taken verbatim from the request. A field that itself contains a
comma (e.g. a content-type with parameters) is not escaped; servers verifying
APIAuth signatures recompute the string the same way, so the layout must not
change.
"""

from typing import List

from .types import (
    SigningTarget,
    CONTENT_TYPE_HEADER,
    CONTENT_MD5_HEADER,
    DATE_HEADER,
)

CANONICAL_DELIMITER = ","


def canonical_fields(request: SigningTarget) -> List[str]:
    """
    Extract the four canonical fields from a request.

    Args:
        request: Request to read from; it is not modified

    Returns:
        list: content-type, Content-MD5, path+query and Date, absent headers
            contributing an empty string
    """
    return [
        request.get_header(CONTENT_TYPE_HEADER) or "",
        request.get_header(CONTENT_MD5_HEADER) or "",
        request.path + request.query,
        request.get_header(DATE_HEADER) or "",
    ]


def build_canonical_string(request: SigningTarget) -> str:
    """
    Build the canonical string for a request.

    Args:
        request: Request to build the canonical string from

    Returns:
        str: Comma-joined canonical string
    """
    return CANONICAL_DELIMITER.join(canonical_fields(request))
