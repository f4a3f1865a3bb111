"""Configuration module for torhoney.

Loads and validates environment variables.
"""

import os
from dataclasses import dataclass

from src.services.honeypot_codec import DEFAULT_ZONE as DEFAULT_DNSBL_ZONE


DEFAULT_EXIT_LIST_URL = "https://check.torproject.org/exit-addresses"


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Project Honeypot Configuration
    honeypot_access_key: str
    dnsbl_zone: str

    # Resolver Configuration
    resolver_workers: int
    dns_timeout: int

    # Exit List Configuration
    exit_list_url: str
    http_timeout: int

    # Operational Configuration
    preserve_input_order: bool
    verbose: bool

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If required variables are missing or invalid.

        Returns:
            Config: Validated configuration instance.
        """
        honeypot_access_key = cls._get_required_env("HONEYPOT_ACCESS_KEY").strip()
        if not honeypot_access_key:
            raise ValueError(
                "Required environment variable HONEYPOT_ACCESS_KEY is not set"
            )

        dnsbl_zone = os.getenv("DNSBL_ZONE", DEFAULT_DNSBL_ZONE).strip().strip(".")
        if not dnsbl_zone:
            raise ValueError("DNSBL_ZONE cannot be empty")

        resolver_workers = cls._get_int_env("RESOLVER_WORKERS", "10")
        if resolver_workers < 1:
            raise ValueError("RESOLVER_WORKERS must be a positive integer")

        dns_timeout = cls._get_int_env("DNS_TIMEOUT", "5")
        if not 1 <= dns_timeout <= 60:
            raise ValueError("DNS_TIMEOUT must be between 1 and 60 seconds")

        exit_list_url = os.getenv("EXIT_LIST_URL", DEFAULT_EXIT_LIST_URL)
        if not exit_list_url.startswith(("http://", "https://")):
            raise ValueError("EXIT_LIST_URL must be an HTTP(S) URL")

        http_timeout = cls._get_int_env("HTTP_TIMEOUT", "30")
        if not 1 <= http_timeout <= 300:
            raise ValueError("HTTP_TIMEOUT must be between 1 and 300 seconds")

        return cls(
            honeypot_access_key=honeypot_access_key,
            dnsbl_zone=dnsbl_zone,
            resolver_workers=resolver_workers,
            dns_timeout=dns_timeout,
            exit_list_url=exit_list_url,
            http_timeout=http_timeout,
            preserve_input_order=cls._get_bool_env("PRESERVE_INPUT_ORDER"),
            verbose=cls._get_bool_env("VERBOSE"),
        )

    @staticmethod
    def _get_required_env(key: str) -> str:
        """Get required environment variable or raise ValueError.

        Args:
            key: Environment variable name.

        Returns:
            str: Environment variable value.

        Raises:
            ValueError: If environment variable is not set or empty.
        """
        value = os.getenv(key)
        if not value:
            raise ValueError(f"Required environment variable {key} is not set")
        return value

    @staticmethod
    def _get_int_env(key: str, default: str) -> int:
        value = os.getenv(key, default)
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {value!r}")

    @staticmethod
    def _get_bool_env(key: str) -> bool:
        return os.getenv(key, "false").lower() in ("true", "1", "yes")
