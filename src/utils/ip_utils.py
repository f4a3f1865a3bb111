"""IP address utilities for http:BL queries."""

import ipaddress
from ipaddress import IPv4Address


def is_valid_ipv4(ip: str) -> bool:
    """Validate if string is a valid IPv4 address.

    Args:
        ip: IP address string to validate.

    Returns:
        bool: True if valid IPv4, False otherwise.

    Examples:
        >>> is_valid_ipv4("203.0.113.45")
        True
        >>> is_valid_ipv4("256.0.0.1")
        False
        >>> is_valid_ipv4("::1")
        False
    """
    try:
        addr = ipaddress.ip_address(ip)
        return isinstance(addr, ipaddress.IPv4Address)
    except ValueError:
        return False


def reverse_ip(ip: IPv4Address | str) -> str:
    """Convert IPv4 address to reverse DNS format.

    Args:
        ip: IPv4 address object or dotted-quad string.

    Returns:
        str: Reversed IP address.

    Raises:
        ValueError: If IP is not a valid IPv4 address.

    Examples:
        >>> reverse_ip("203.0.113.45")
        '45.113.0.203'
    """
    if not isinstance(ip, IPv4Address):
        if not is_valid_ipv4(ip):
            raise ValueError(f"Invalid IPv4 address: {ip}")
        ip = IPv4Address(ip)

    return ".".join(str(octet) for octet in reversed(ip.packed))


def to_ipv4(value: object) -> IPv4Address | None:
    """Coerce a resolved address into 4-byte IPv4 form.

    Accepts IPv4Address/IPv6Address objects, packed bytes and address
    strings. IPv4-mapped IPv6 addresses are unwrapped.

    Returns:
        IPv4Address | None: The IPv4 form, or None if there is none.
    """
    try:
        if isinstance(value, (bytes, bytearray)):
            addr = ipaddress.ip_address(bytes(value))
        elif isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
            addr = value
        else:
            addr = ipaddress.ip_address(str(value))
    except ValueError:
        return None

    if isinstance(addr, ipaddress.IPv6Address):
        return addr.ipv4_mapped
    return addr
