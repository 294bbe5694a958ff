"""Tests for configuration loading."""

import pytest

from tokenexchange.adapters import InMemoryTokenValidator, get_token_validator
from tokenexchange.adapters.jwks import JwksTokenValidator
from tokenexchange.config import OwnershipMode, TokenExchangeConfig, load_config


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
ownership_mode: audience
validation_timeout: 2.5
rewrite_client_id: true
token_validator:
  backend: jwks
  jwks:
    url: https://idp.example.com/jwks
    leeway: 10
"""
    )
    monkeypatch.setenv("TOKEN_EXCHANGE_CONFIG", str(config_path))

    config = load_config()
    assert config.ownership_mode is OwnershipMode.AUDIENCE
    assert config.validation_timeout == 2.5
    assert config.rewrite_client_id is True
    assert config.token_validator.backend == "jwks"
    assert config.token_validator.jwks.url == "https://idp.example.com/jwks"
    assert config.token_validator.jwks.leeway == 10


def test_load_config_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("TOKEN_EXCHANGE_CONFIG", str(tmp_path / "missing.yaml"))

    config = load_config()
    assert config.ownership_mode is OwnershipMode.AUDIENCE_OR_CLIENT_ID
    assert config.validation_timeout == 10.0
    assert config.rewrite_client_id is False
    assert config.token_validator.backend == "inmemory"


def test_jwks_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("TOKEN_EXCHANGE_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("TOKEN_EXCHANGE_JWKS_URL", "https://env.example.com/jwks")
    monkeypatch.setenv("TOKEN_EXCHANGE_JWKS_LEEWAY", "5")

    jwks = load_config().token_validator.jwks
    assert jwks.url == "https://env.example.com/jwks"
    assert jwks.leeway == 5


def test_get_token_validator_uses_config(tmp_path, monkeypatch):
    monkeypatch.delenv("TOKEN_EXCHANGE_VALIDATOR", raising=False)
    config = TokenExchangeConfig(
        token_validator={
            "backend": "jwks",
            "jwks": {"url": "https://confighost/jwks", "audience": "api1"},
        }
    )

    validator = get_token_validator(config=config)
    assert isinstance(validator, JwksTokenValidator)
    assert validator.config.url == "https://confighost/jwks"
    assert validator.config.audience == "api1"


@pytest.mark.asyncio
async def test_get_token_validator_inmemory_tokens(monkeypatch):
    monkeypatch.delenv("TOKEN_EXCHANGE_VALIDATOR", raising=False)
    config = TokenExchangeConfig(
        token_validator={"inmemory": {"tokens": {"abc": {"sub": "123", "aud": ["api1"]}}}}
    )

    validator = get_token_validator(config=config)
    assert isinstance(validator, InMemoryTokenValidator)

    result = await validator.validate_access_token("abc")
    assert not result.is_error
    assert [(c.type, c.value) for c in result.claims] == [("sub", "123"), ("aud", "api1")]
    assert (await validator.validate_access_token("missing")).is_error


def test_get_token_validator_rejects_unknown_backend():
    with pytest.raises(ValueError):
        get_token_validator("ldap", config=TokenExchangeConfig())


def test_get_token_validator_jwks_requires_url(monkeypatch):
    monkeypatch.delenv("TOKEN_EXCHANGE_VALIDATOR", raising=False)
    with pytest.raises(ValueError):
        get_token_validator("jwks", config=TokenExchangeConfig())
