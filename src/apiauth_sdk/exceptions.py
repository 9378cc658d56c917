"""
Exception classes for APIAuth Python SDK
"""

from typing import Optional, Dict, Any


class ApiAuthSDKError(Exception):
    """Base exception for all APIAuth SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ConfigError(ApiAuthSDKError):
    """Exception raised when signing configuration is missing or invalid"""
    pass


class UnsupportedBodyError(ApiAuthSDKError):
    """Exception raised when a request body cannot be read for checksumming"""
    pass


class SignatureMismatchError(ApiAuthSDKError):
    """Exception raised when a presented signature does not verify"""
    pass


class ErrorCodes:
    """Standard error codes for SDK operations"""

    # Configuration errors
    INVALID_CONFIG = "INVALID_CONFIG"
    MISSING_ACCESS_ID = "MISSING_ACCESS_ID"
    MISSING_SECRET_KEY = "MISSING_SECRET_KEY"
    CONFIG_PARSE_ERROR = "CONFIG_PARSE_ERROR"

    # Request errors
    UNSUPPORTED_BODY = "UNSUPPORTED_BODY"

    # Verification errors
    MALFORMED_AUTHORIZATION = "MALFORMED_AUTHORIZATION"
    ACCESS_ID_MISMATCH = "ACCESS_ID_MISMATCH"
    SIGNATURE_MISMATCH = "SIGNATURE_MISMATCH"
    CONTENT_MD5_MISMATCH = "CONTENT_MD5_MISMATCH"
    STALE_DATE = "STALE_DATE"
