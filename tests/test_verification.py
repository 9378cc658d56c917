"""
Test suite for APIAuth signature verification

These tests sign requests with the signer and check them the way a
receiving server would.
"""

import pytest

from apiauth_sdk.signing import (
    ApiAuthSigner,
    ApiAuthVerifier,
    SignableRequest,
    HttpMethod,
    create_signing_config,
    parse_authorization_header,
    verify_request,
)
from apiauth_sdk.exceptions import ErrorCodes, SignatureMismatchError

ACCESS_ID = '1044'
SECRET_KEY = r'ybqnM8UFztOwDfLOnsLlpUi+weSLvhiA5AigjUmRcWZ9dRSj1cnGWlnGKSAI\n+VT2VcdmQ3F61lfumx133MWcHw=='
FIXED_DATE = 'Mon, 23 Jan 1984 03:29:56 GMT'
FIXED_TIMESTAMP = 443676596


class TestParseAuthorizationHeader:
    """Test Authorization header parsing"""

    def test_valid_header(self):
        """Access ID and signature are split on the last colon"""
        assert parse_authorization_header('APIAuth 1044:pJU5sKxYnd1t83MxJLRsaUBqYSg=') == (
            '1044', 'pJU5sKxYnd1t83MxJLRsaUBqYSg='
        )
        assert parse_authorization_header('APIAuth team:client:abc=') == ('team:client', 'abc=')

    @pytest.mark.parametrize("value", [
        None,
        '',
        'Bearer token',
        'APIAuth',
        'APIAuth 1044',
        'APIAuth :signature',
        'APIAuth 1044:',
    ])
    def test_malformed_header(self, value):
        """Malformed headers are rejected"""
        with pytest.raises(SignatureMismatchError) as exc_info:
            parse_authorization_header(value)
        assert exc_info.value.error_code == ErrorCodes.MALFORMED_AUTHORIZATION


class TestApiAuthVerifier:
    """Test server-side verification"""

    def setup_method(self):
        """Set up test fixtures"""
        self.config = create_signing_config(ACCESS_ID, SECRET_KEY)
        self.signer = ApiAuthSigner(self.config, clock=lambda: FIXED_TIMESTAMP)
        self.request = SignableRequest(
            method=HttpMethod.POST,
            url='https://api.example.com/orders?page=2',
            headers={'Content-Type': 'application/json'},
            body='{"item": 42}'
        )
        self.signer.sign(self.request)

    def test_signed_request_verifies(self):
        """A freshly signed request passes"""
        verifier = ApiAuthVerifier(self.config)
        result = verifier.verify(self.request)

        assert result.valid
        assert result.access_id == ACCESS_ID
        assert result.presented_signature == result.expected_signature
        assert result.reason is None
        assert verify_request(self.request, self.config)

    def test_tampered_path_fails(self):
        """Changing the target invalidates the signature"""
        tampered = SignableRequest(
            method=HttpMethod.POST,
            url='https://api.example.com/orders?page=3',
            headers=dict(self.request.headers),
            body=self.request.body
        )

        result = ApiAuthVerifier(self.config).verify(tampered)
        assert not result.valid
        assert result.reason == ErrorCodes.SIGNATURE_MISMATCH

    def test_wrong_secret_fails(self):
        """A different secret computes a different signature"""
        other = create_signing_config(ACCESS_ID, 'another-secret')
        assert not verify_request(self.request, other)

    def test_wrong_access_id_fails(self):
        """Requests for another access ID are rejected"""
        other = create_signing_config('2000', SECRET_KEY)
        result = ApiAuthVerifier(other).verify(self.request)
        assert result.reason == ErrorCodes.ACCESS_ID_MISMATCH

    def test_missing_authorization_fails(self):
        """Unsigned requests are rejected"""
        request = SignableRequest(method=HttpMethod.GET, url='https://api.example.com/')
        result = ApiAuthVerifier(self.config).verify(request)
        assert not result.valid
        assert result.reason == ErrorCodes.MALFORMED_AUTHORIZATION

    def test_content_md5_check(self):
        """Body changes are caught when the checksum is verified"""
        verifier = ApiAuthVerifier(self.config, verify_content_md5=True)
        assert verifier.verify(self.request).valid

        self.request.body = '{"item": 43}'
        result = verifier.verify(self.request)
        assert result.reason == ErrorCodes.CONTENT_MD5_MISMATCH

        # Signature alone still matches, the body is not part of it
        assert ApiAuthVerifier(self.config).verify(self.request).valid

    def test_clock_skew(self):
        """Stale Date headers are rejected when a skew is configured"""
        fresh = ApiAuthVerifier(self.config, max_clock_skew=900, clock=lambda: FIXED_TIMESTAMP + 60)
        assert fresh.verify(self.request).valid

        stale = ApiAuthVerifier(self.config, max_clock_skew=900, clock=lambda: FIXED_TIMESTAMP + 3600)
        assert stale.verify(self.request).reason == ErrorCodes.STALE_DATE

        assert self.request.get_header('Date') == FIXED_DATE

    def test_verify_or_raise(self):
        """Strict verification raises on mismatch"""
        verifier = ApiAuthVerifier(self.config)
        assert verifier.verify_or_raise(self.request).valid

        self.request.set_header('Authorization', 'APIAuth 1044:AAAAAAAAAAAAAAAAAAAAAAAAAAA=')
        with pytest.raises(SignatureMismatchError) as exc_info:
            verifier.verify_or_raise(self.request)
        assert exc_info.value.error_code == ErrorCodes.SIGNATURE_MISMATCH
