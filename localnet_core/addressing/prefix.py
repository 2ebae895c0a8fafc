"""
Prefix Matching
===============
Bitwise containment test over packed address bytes.
"""

import ipaddress
from typing import Union


def prefix_matches(
    address: Union[ipaddress.IPv4Address, ipaddress.IPv6Address],
    network: Union[ipaddress.IPv4Address, ipaddress.IPv6Address],
    prefix_length: int,
) -> bool:
    """
    Check whether the leading prefix_length bits of two addresses agree.

    Both addresses must belong to the same family; callers filter out
    mismatched families before getting here.

    Args:
        address: Address under test
        network: Network address of the range
        prefix_length: Number of leading bits to compare

    Returns:
        True if the address lies within network/prefix_length
    """
    a = address.packed
    b = network.packed
    if len(a) != len(b) or not 0 <= prefix_length <= len(a) * 8:
        return False

    full_bytes, remainder = divmod(prefix_length, 8)
    if a[:full_bytes] != b[:full_bytes]:
        return False

    if remainder:
        mask = (0xFF << (8 - remainder)) & 0xFF
        if (a[full_bytes] & mask) != (b[full_bytes] & mask):
            return False

    return True
