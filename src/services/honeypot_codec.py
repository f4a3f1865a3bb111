"""Project Honeypot http:BL query encoding and answer decoding.

API: http://www.projecthoneypot.org/httpbl_api.php

A query name is ``<access key>.<o4>.<o3>.<o2>.<o1>.<zone>``. A listed
address resolves to ``127.<days>.<score>.<class>``.
"""

from ipaddress import IPv4Address
from typing import Iterable

from src.models.classification import ClassFlags
from src.models.lookup_result import NOT_LISTED, Verdict
from src.utils.ip_utils import reverse_ip, to_ipv4


DEFAULT_ZONE = "dnsbl.httpbl.org"


class MalformedResponseError(ValueError):
    """Raised when a resolved record cannot be read as a 4-byte address."""


def encode_query(token: str, ip: IPv4Address | str, zone: str = DEFAULT_ZONE) -> str:
    """Build the http:BL query hostname for an address.

    The token is not validated; a malformed key just yields a name that
    does not resolve.

    Examples:
        >>> encode_query("abcdefghijkl", "1.2.3.4")
        'abcdefghijkl.4.3.2.1.dnsbl.httpbl.org'
    """
    return f"{token}.{reverse_ip(ip)}.{zone}"


def decode_response(records: Iterable[object]) -> Verdict:
    """Decode resolved http:BL records into a verdict.

    Only the first record is consulted. No records means not listed.

    Args:
        records: Resolved addresses (IPv4Address, bytes or strings).

    Returns:
        Verdict: listed flag, age in days, score and classification.

    Raises:
        MalformedResponseError: If the first record is not IPv4-shaped.
    """
    first = next(iter(records), None)
    if first is None:
        return NOT_LISTED

    addr = to_ipv4(first)
    if addr is None:
        raise MalformedResponseError(f"malformed response: {first!r}")

    # byte 0 is reserved (always 127)
    _, days, score, klass = addr.packed
    return Verdict(
        listed=True,
        age_days=days,
        score=score,
        class_flags=ClassFlags(klass & 0b111),
    )
