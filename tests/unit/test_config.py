"""Unit tests for configuration validation."""

import pytest

from src.config import Config


ENV_KEYS = [
    "HONEYPOT_ACCESS_KEY",
    "DNSBL_ZONE",
    "RESOLVER_WORKERS",
    "DNS_TIMEOUT",
    "EXIT_LIST_URL",
    "HTTP_TIMEOUT",
    "PRESERVE_INPUT_ORDER",
    "VERBOSE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_config_from_env_defaults(monkeypatch):
    """Test loading configuration with only the access key set."""
    monkeypatch.setenv("HONEYPOT_ACCESS_KEY", "abcdefghijkl")

    config = Config.from_env()

    assert config.honeypot_access_key == "abcdefghijkl"
    assert config.dnsbl_zone == "dnsbl.httpbl.org"
    assert config.resolver_workers == 10  # Default
    assert config.dns_timeout == 5  # Default
    assert config.exit_list_url == "https://check.torproject.org/exit-addresses"
    assert config.http_timeout == 30
    assert config.preserve_input_order is False
    assert config.verbose is False


def test_config_overrides(monkeypatch):
    env_vars = {
        "HONEYPOT_ACCESS_KEY": "abcdefghijkl",
        "DNSBL_ZONE": "bl.example.org.",
        "RESOLVER_WORKERS": "25",
        "DNS_TIMEOUT": "2",
        "EXIT_LIST_URL": "http://mirror.example.org/exits",
        "HTTP_TIMEOUT": "60",
        "PRESERVE_INPUT_ORDER": "Yes",
        "VERBOSE": "1",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    config = Config.from_env()

    assert config.dnsbl_zone == "bl.example.org"
    assert config.resolver_workers == 25
    assert config.dns_timeout == 2
    assert config.exit_list_url == "http://mirror.example.org/exits"
    assert config.preserve_input_order is True
    assert config.verbose is True


@pytest.mark.parametrize("value", [None, "", "   "])
def test_config_missing_access_key(monkeypatch, value):
    """Test that a missing or empty key is a hard stop."""
    if value is not None:
        monkeypatch.setenv("HONEYPOT_ACCESS_KEY", value)

    with pytest.raises(
        ValueError, match="Required environment variable HONEYPOT_ACCESS_KEY is not set"
    ):
        Config.from_env()


@pytest.mark.parametrize(
    "key, value, message",
    [
        ("RESOLVER_WORKERS", "0", "RESOLVER_WORKERS must be a positive integer"),
        ("RESOLVER_WORKERS", "ten", "RESOLVER_WORKERS must be an integer"),
        ("DNS_TIMEOUT", "0", "DNS_TIMEOUT must be between 1 and 60 seconds"),
        ("DNS_TIMEOUT", "61", "DNS_TIMEOUT must be between 1 and 60 seconds"),
        ("HTTP_TIMEOUT", "301", "HTTP_TIMEOUT must be between 1 and 300 seconds"),
        ("EXIT_LIST_URL", "ftp://example.org/list", "EXIT_LIST_URL must be an HTTP"),
        ("DNSBL_ZONE", ".", "DNSBL_ZONE cannot be empty"),
    ],
)
def test_config_invalid_values(monkeypatch, key, value, message):
    monkeypatch.setenv("HONEYPOT_ACCESS_KEY", "abcdefghijkl")
    monkeypatch.setenv(key, value)

    with pytest.raises(ValueError, match=message):
        Config.from_env()
