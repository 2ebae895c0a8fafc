"""
Addressing Models
=================
Typed IP address and CIDR range values.
"""

import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .exceptions import CidrParseError
from .prefix import prefix_matches

# The concrete class is the family tag: IPv4Address (4 octets) or IPv6Address (16 octets)
IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class AddressFamily(str, Enum):
    """IP address families."""
    IPV4 = "ipv4"
    IPV6 = "ipv6"

    @property
    def bit_width(self) -> int:
        return 32 if self is AddressFamily.IPV4 else 128


def family_of(address: IPAddress) -> AddressFamily:
    """Return the family tag of a parsed address."""
    if isinstance(address, ipaddress.IPv4Address):
        return AddressFamily.IPV4
    return AddressFamily.IPV6


@dataclass(frozen=True)
class CidrRange:
    """A network address with a prefix length bounded by its family width."""
    network: IPAddress
    prefix_length: int

    def __post_init__(self):
        if isinstance(self.prefix_length, bool) or not isinstance(self.prefix_length, int):
            raise CidrParseError(str(self.network), "prefix length must be an integer")
        if not 0 <= self.prefix_length <= self.max_prefix:
            raise CidrParseError(
                f"{self.network}/{self.prefix_length}",
                f"prefix length must be between 0 and {self.max_prefix}",
            )

    @property
    def family(self) -> AddressFamily:
        return family_of(self.network)

    @property
    def max_prefix(self) -> int:
        return self.family.bit_width

    def contains(self, address: IPAddress) -> bool:
        """
        Check whether an address falls inside this range.

        Addresses of the other family never match, whatever their numeric value.
        """
        if family_of(address) is not self.family:
            return False
        return prefix_matches(address, self.network, self.prefix_length)

    def __str__(self) -> str:
        return f"{self.network}/{self.prefix_length}"
