"""
APIAuth Python SDK
Outbound HTTP request signing with the APIAuth HMAC-SHA1 scheme
"""

from .version import __version__
from .exceptions import (
    ApiAuthSDKError,
    ConfigError,
    UnsupportedBodyError,
    SignatureMismatchError,
    ErrorCodes,
)
from .signing import (
    # Core signing functionality
    ApiAuthSigner,
    create_signer,
    sign_request,
    build_canonical_string,
    # Types
    SignableRequest,
    SigningConfig,
    SigningTarget,
    SigningResult,
    HttpMethod,
    # Configuration
    SigningConfigBuilder,
    create_signing_config,
    load_signing_config,
    load_signing_config_from_json,
    load_signing_config_from_file,
    # Utilities
    calculate_content_md5,
    compute_hmac_signature,
    format_http_date,
    # Verification
    ApiAuthVerifier,
    VerificationResult,
    verify_request,
    # Hooks
    BeforeSendHooks,
    register_signer,
    # HTTP integration
    ApiAuth,
    HttpxApiAuth,
    SigningHTTPAdapter,
    SigningSession,
    create_signing_session,
    enable_request_signing,
    disable_request_signing,
    sign_prepared_request,
)

__all__ = [
    '__version__',
    # Exceptions
    'ApiAuthSDKError',
    'ConfigError',
    'UnsupportedBodyError',
    'SignatureMismatchError',
    'ErrorCodes',
    # Request signing
    'ApiAuthSigner',
    'create_signer',
    'sign_request',
    'build_canonical_string',
    'SignableRequest',
    'SigningConfig',
    'SigningTarget',
    'SigningResult',
    'HttpMethod',
    'SigningConfigBuilder',
    'create_signing_config',
    'load_signing_config',
    'load_signing_config_from_json',
    'load_signing_config_from_file',
    'calculate_content_md5',
    'compute_hmac_signature',
    'format_http_date',
    'ApiAuthVerifier',
    'VerificationResult',
    'verify_request',
    'BeforeSendHooks',
    'register_signer',
    'ApiAuth',
    'HttpxApiAuth',
    'SigningHTTPAdapter',
    'SigningSession',
    'create_signing_session',
    'enable_request_signing',
    'disable_request_signing',
    'sign_prepared_request',
]
