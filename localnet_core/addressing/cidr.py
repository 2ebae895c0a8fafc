"""
CIDR Notation Parser
====================
Parses "address" or "address/prefix" strings into CidrRange values.
"""

from .exceptions import CidrParseError
from .models import CidrRange, family_of
from .normalize import parse_address


def parse_cidr(text: str) -> CidrRange:
    """
    Parse a CIDR entry or bare IP.

    A bare address gets the maximal prefix for its family (/32 or /128).
    The network address is kept as written; host bits are not cleared.

    Args:
        text: Entry such as "10.0.0.0/8", "::1" or "[fe80::]/10"

    Returns:
        CidrRange for the entry

    Raises:
        CidrParseError: If the address or prefix is malformed or out of range
    """
    if not isinstance(text, str):
        raise CidrParseError(repr(text), "entry must be a string")

    entry = text.strip()
    if not entry:
        raise CidrParseError(text, "empty entry")

    address_part, sep, prefix_part = entry.partition("/")
    try:
        network = parse_address(address_part)
    except ValueError:
        raise CidrParseError(text, f"{address_part!r} is not an IP address") from None

    max_prefix = family_of(network).bit_width
    if not sep:
        return CidrRange(network, max_prefix)

    # int() would accept "+8", " 8" and "٨"; only plain ASCII digits are a prefix
    if not (prefix_part.isascii() and prefix_part.isdigit()):
        raise CidrParseError(text, f"{prefix_part!r} is not a prefix length")

    prefix_length = int(prefix_part)
    if prefix_length > max_prefix:
        raise CidrParseError(text, f"prefix length exceeds {max_prefix}")

    return CidrRange(network, prefix_length)
