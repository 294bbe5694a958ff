import json
import time

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from tokenexchange.adapters.jwks import JwksTokenValidator
from tokenexchange.config import JwksConfig
from tokenexchange.models import claim_values


def generate_keys():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    public_jwk = jwt.algorithms.RSAAlgorithm.to_jwk(key.public_key())
    jwk_dict = json.loads(public_jwk)
    jwk_dict["kid"] = "test"
    jwk_dict["use"] = "sig"
    jwk_dict["alg"] = "RS256"
    return key, jwk_dict, private_pem


@pytest.fixture
def signing(monkeypatch):
    key, jwk_dict, private_pem = generate_keys()
    jwks = {"keys": [jwk_dict]}
    calls = []

    class Resp:
        def __init__(self):
            self.status_code = 200

        def raise_for_status(self):
            pass

        def json(self):
            return jwks

    def fake_get(url, timeout=5):
        calls.append(url)
        return Resp()

    monkeypatch.setattr("requests.get", fake_get)
    return private_pem, calls


@pytest.mark.asyncio
async def test_jwks_validator_returns_claims(signing):
    private_pem, calls = signing
    token = jwt.encode(
        {
            "sub": "alice",
            "aud": ["api1", "api2"],
            "client_id": "app1",
            "iss": "https://idp/",
            "exp": int(time.time()) + 60,
        },
        private_pem,
        algorithm="RS256",
        headers={"kid": "test"},
    )

    validator = JwksTokenValidator(JwksConfig(url="http://idp/jwks", issuer="https://idp/"))
    result = await validator.validate_access_token(token)

    assert not result.is_error
    assert claim_values(result.claims, "sub") == ["alice"]
    assert claim_values(result.claims, "aud") == ["api1", "api2"]
    assert claim_values(result.claims, "client_id") == ["app1"]

    await validator.validate_access_token(token)
    assert calls == ["http://idp/jwks"]


@pytest.mark.asyncio
async def test_jwks_validator_rejects_wrong_issuer(signing):
    private_pem, _ = signing
    token = jwt.encode(
        {"sub": "alice", "iss": "https://other/"},
        private_pem,
        algorithm="RS256",
        headers={"kid": "test"},
    )

    validator = JwksTokenValidator(JwksConfig(url="http://idp/jwks", issuer="https://idp/"))
    result = await validator.validate_access_token(token)

    assert result.is_error
    assert result.claims == []


@pytest.mark.asyncio
async def test_jwks_validator_rejects_unknown_key(signing):
    _, other_jwk, other_pem = generate_keys()
    token = jwt.encode(
        {"sub": "alice"}, other_pem, algorithm="RS256", headers={"kid": "other"}
    )

    validator = JwksTokenValidator(JwksConfig(url="http://idp/jwks"))
    result = await validator.validate_access_token(token)

    assert result.is_error


@pytest.mark.asyncio
async def test_jwks_validator_rejects_garbage(signing):
    validator = JwksTokenValidator(JwksConfig(url="http://idp/jwks"))
    result = await validator.validate_access_token("not-a-jwt")
    assert result.is_error


@pytest.mark.asyncio
async def test_jwks_validator_rejects_algorithm_named_by_token(signing):
    token = jwt.encode(
        {"sub": "mallory", "client_id": "app1"},
        "a-shared-secret-that-is-long-enough-for-hs256",
        algorithm="HS256",
        headers={"kid": "test"},
    )

    validator = JwksTokenValidator(JwksConfig(url="http://idp/jwks"))
    result = await validator.validate_access_token(token)

    assert result.is_error
    assert result.claims == []
