#!/usr/bin/env python3
"""
APIAuth Python SDK - Request Signing Example

This example demonstrates how to sign HTTP requests with the APIAuth
HMAC-SHA1 scheme and how a receiving server verifies them.
"""

import json
import logging
import os
import sys

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from apiauth_sdk import (
    ApiAuthSigner,
    ApiAuthVerifier,
    SignableRequest,
    HttpMethod,
    ConfigError,
    BeforeSendHooks,
    register_signer,
    create_signing_config,
    load_signing_config_from_json,
)


def basic_signing_example():
    """Demonstrate basic request signing workflow"""
    print("=== Basic Request Signing Example ===")

    # 1. Create signing configuration
    print("1. Creating signing configuration...")
    config = create_signing_config("1044", "example-shared-secret")
    print(f"   Access ID: {config.access_id}")

    # 2. Create a sample request
    print("\n2. Creating sample HTTP request...")
    request = SignableRequest(
        method=HttpMethod.PUT,
        url="https://api.example.com/resource.xml?foo=bar&bar=foo",
        headers={"Content-Type": "application/json"},
        body=json.dumps({"name": "example"})
    )
    print(f"   Method: {request.method.value}")
    print(f"   URL: {request.url}")

    # 3. Sign the request
    print("\n3. Signing the request...")
    signer = ApiAuthSigner(config)
    result = signer.sign_request(request)

    print(f"   Content-MD5: {result.content_md5}")
    print(f"   Date: {result.date}")
    print(f"   Canonical string: {result.canonical_string}")
    print(f"   Authorization: {result.authorization}")

    # 4. Verify it the way the server does
    print("\n4. Verifying the request...")
    verification = ApiAuthVerifier(config, verify_content_md5=True).verify(request)
    print(f"   Valid: {verification.valid}")

    return request


def hooks_example():
    """Demonstrate signing as the last before-send callback"""
    print("\n\n=== Before-Send Hooks Example ===")

    config = create_signing_config("1044", "example-shared-secret")
    hooks = BeforeSendHooks()
    register_signer(hooks, ApiAuthSigner(config))
    hooks.register(lambda request: request.set_header("Content-Type", "text/plain"))

    request = SignableRequest(method=HttpMethod.GET, url="https://api.example.com/items?page=2")
    hooks.dispatch(request)

    for name, value in request.headers.items():
        print(f"   {name}: {value}")


def configuration_example():
    """Demonstrate configuration loading and errors"""
    print("\n\n=== Configuration Example ===")

    config = load_signing_config_from_json('{"accessId": "1044", "secretKey": "from-json"}')
    print(f"   Loaded access ID {config.access_id} from JSON")

    try:
        create_signing_config("1044", "")
    except ConfigError as e:
        print(f"   Missing secret key: {e}")


def main():
    """Run all examples"""
    logging.basicConfig(level=logging.DEBUG)
    print("APIAuth Python SDK - Request Signing Examples")
    print("=" * 50)

    basic_signing_example()
    hooks_example()
    configuration_example()

    print("\n\n=== All Examples Completed Successfully! ===")


if __name__ == "__main__":
    main()
