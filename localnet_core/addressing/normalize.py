"""
Address Normalization
=====================
Canonicalizes raw address strings into typed IPv4/IPv6 values.

IPv4-mapped IPv6 addresses (::ffff:a.b.c.d) are rewritten to plain IPv4 so
that a peer arriving through a dual-stack socket compares equal to an IPv4
configuration entry.
"""

import ipaddress
from typing import Optional

from .models import IPAddress


def strip_brackets(raw: str) -> str:
    """Remove a single surrounding [...] pair, as in "[::1]"."""
    if len(raw) >= 2 and raw.startswith("[") and raw.endswith("]"):
        return raw[1:-1]
    return raw


def demap_ipv4(address: IPAddress) -> IPAddress:
    """Rewrite an IPv4-mapped IPv6 address to its IPv4 form."""
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


def parse_address(raw: str) -> IPAddress:
    """
    Parse a possibly bracketed address string without demapping.

    Raises:
        ValueError: If the string is not an IPv4 or IPv6 address
    """
    return ipaddress.ip_address(strip_brackets(raw.strip()))


def normalize_address(raw: Optional[str]) -> Optional[IPAddress]:
    """
    Normalize a raw address string.

    Args:
        raw: Address as received, e.g. "10.0.0.1", "[::1]", "::ffff:127.0.0.1"

    Returns:
        Canonical IPv4Address/IPv6Address, or None if the input is not an address
    """
    if not isinstance(raw, str):
        return None
    try:
        return demap_ipv4(parse_address(raw))
    except ValueError:
        return None
