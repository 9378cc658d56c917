"""
APIAuth Python SDK - Request Signing Module

HMAC-SHA1 request signing compatible with APIAuth servers. This module
provides the signer, its configuration and the integrations that sign
outgoing requests right before they are sent.
"""

from .types import (
    SignableRequest,
    SigningConfig,
    SigningTarget,
    SigningResult,
    HttpMethod,
    BODYLESS_METHODS,
    AUTH_SCHEME,
    AUTHORIZATION_HEADER,
    CONTENT_MD5_HEADER,
    CONTENT_TYPE_HEADER,
    DATE_HEADER,
)

from .signer import (
    ApiAuthSigner,
    create_signer,
    sign_request,
)

from .canonical_string import (
    CANONICAL_DELIMITER,
    build_canonical_string,
)

from .signing_config import (
    SigningConfigBuilder,
    validate_signing_config,
    create_signing_config,
    load_signing_config,
    load_signing_config_from_json,
    load_signing_config_from_file,
)

from .utils import (
    calculate_content_md5,
    compute_hmac_signature,
    format_http_date,
    parse_http_date,
    split_url,
)

from .verifier import (
    ApiAuthVerifier,
    VerificationResult,
    parse_authorization_header,
    verify_request,
)

from .hooks import (
    BeforeSendHooks,
    SIGNER_PRIORITY,
    register_signer,
)

from .integration import (
    ApiAuth,
    HttpxApiAuth,
    HttpxRequestAdapter,
    PreparedRequestAdapter,
    SigningHTTPAdapter,
    SigningSession,
    create_signing_session,
    enable_request_signing,
    disable_request_signing,
    sign_prepared_request,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'ApiAuthSigner',
    'create_signer',
    'sign_request',
    'build_canonical_string',
    'CANONICAL_DELIMITER',
    # Types
    'SignableRequest',
    'SigningConfig',
    'SigningTarget',
    'SigningResult',
    'HttpMethod',
    'BODYLESS_METHODS',
    'AUTH_SCHEME',
    'AUTHORIZATION_HEADER',
    'CONTENT_MD5_HEADER',
    'CONTENT_TYPE_HEADER',
    'DATE_HEADER',
    # Configuration
    'SigningConfigBuilder',
    'validate_signing_config',
    'create_signing_config',
    'load_signing_config',
    'load_signing_config_from_json',
    'load_signing_config_from_file',
    # Utilities
    'calculate_content_md5',
    'compute_hmac_signature',
    'format_http_date',
    'parse_http_date',
    'split_url',
    # Verification
    'ApiAuthVerifier',
    'VerificationResult',
    'parse_authorization_header',
    'verify_request',
    # Hooks
    'BeforeSendHooks',
    'SIGNER_PRIORITY',
    'register_signer',
    # HTTP Integration
    'ApiAuth',
    'HttpxApiAuth',
    'HttpxRequestAdapter',
    'PreparedRequestAdapter',
    'SigningHTTPAdapter',
    'SigningSession',
    'create_signing_session',
    'enable_request_signing',
    'disable_request_signing',
    'sign_prepared_request',
]
