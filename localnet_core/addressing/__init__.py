"""
Addressing Module
=================
IP address parsing, normalization and CIDR containment.
"""

from .models import AddressFamily, CidrRange, IPAddress, family_of
from .exceptions import CidrParseError
from .cidr import parse_cidr
from .normalize import demap_ipv4, normalize_address, parse_address, strip_brackets
from .prefix import prefix_matches
from .matching import CidrSet, InvalidEntryHook, ip_in_cidrs

__all__ = [
    # Models
    "AddressFamily",
    "CidrRange",
    "IPAddress",
    "family_of",
    # Exceptions
    "CidrParseError",
    # Parsing
    "parse_cidr",
    "parse_address",
    "normalize_address",
    "demap_ipv4",
    "strip_brackets",
    # Matching
    "prefix_matches",
    "CidrSet",
    "InvalidEntryHook",
    "ip_in_cidrs",
]
