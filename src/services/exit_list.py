"""Tor exit node list fetching and parsing.

The list at check.torproject.org/exit-addresses has entries like::

    ExitNode 0017413E0BD04C427F79B51360031EC95043C012
    Published 2014-09-22 15:12:27
    LastStatus 2014-09-22 17:03:03
    ExitAddress 105.237.199.197 2014-09-22 16:03:36

Only the ExitAddress lines matter.
"""

import ipaddress
import logging
from ipaddress import IPv4Address
from typing import Iterable

import requests

from src.utils.retry import exponential_backoff_retry


logger = logging.getLogger(__name__)


EXIT_ADDRESS_PREFIX = "ExitAddress "


class ExitListError(RuntimeError):
    """Raised when the exit node list cannot be fetched."""


@exponential_backoff_retry()
def _fetch_with_retry(url: str, timeout: int) -> requests.Response:
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp


def parse_exit_addresses(lines: Iterable[str]) -> list[IPv4Address]:
    """Extract IPv4 exit addresses from exit list lines.

    Bad ExitAddress lines are logged and skipped. Order is kept and
    duplicates are not removed.

    Args:
        lines: Lines of the exit-addresses document.

    Returns:
        list[IPv4Address]: Exit addresses in document order.
    """
    addresses: list[IPv4Address] = []

    for line in lines:
        if not line.startswith(EXIT_ADDRESS_PREFIX):
            continue

        parts = line.split()
        if len(parts) < 2:
            logger.warning(f"Bad ExitAddress line {line!r}")
            continue

        try:
            addr = ipaddress.ip_address(parts[1])
        except ValueError:
            logger.warning(f"Error parsing IP address {parts[1]}")
            continue

        if isinstance(addr, ipaddress.IPv6Address):
            addr = addr.ipv4_mapped
            if addr is None:
                logger.warning(f"IP address {parts[1]} is not v4")
                continue

        addresses.append(addr)

    return addresses


def fetch_exit_list(url: str, timeout: int = 30) -> list[IPv4Address]:
    """Download and parse the Tor exit node list.

    Args:
        url: Exit list URL.
        timeout: HTTP timeout in seconds.

    Returns:
        list[IPv4Address]: Exit addresses in document order.

    Raises:
        ExitListError: If the list cannot be fetched.
    """
    try:
        resp = _fetch_with_retry(url, timeout)
    except requests.exceptions.RequestException as e:
        raise ExitListError(f"Failed to get Tor exit node list {url}: {e}") from e

    addresses = parse_exit_addresses(resp.text.splitlines())
    logger.info(f"Loaded {len(addresses)} exit nodes")
    return addresses
