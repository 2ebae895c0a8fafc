"""
CIDR Set Membership
===================
Tests addresses against ordered lists of CIDR/IP configuration entries.

Entries that fail to parse are skipped so that one typo never breaks
classification for every request. A skipped entry can only narrow trust,
never widen it; callers are told about skips through the ``rejected``
attribute and the ``on_invalid`` hook.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from .cidr import parse_cidr
from .exceptions import CidrParseError
from .models import CidrRange, family_of
from .normalize import demap_ipv4, normalize_address

InvalidEntryHook = Callable[[str, CidrParseError], None]


@dataclass(frozen=True)
class CidrSet:
    """An ordered, immutable set of parsed CIDR ranges."""
    ranges: Tuple[CidrRange, ...] = ()
    rejected: Tuple[Tuple[str, str], ...] = ()  # (entry, reason)

    @classmethod
    def from_strings(
        cls,
        entries: Iterable[str],
        on_invalid: Optional[InvalidEntryHook] = None,
    ) -> "CidrSet":
        """
        Parse configuration entries, skipping the malformed ones.

        Network addresses are demapped so that "::ffff:127.0.0.1/128" and
        "127.0.0.1/32" describe the same IPv4 host.

        Args:
            entries: CIDR or bare IP strings, in priority order
            on_invalid: Called with (entry, error) for each skipped entry

        Returns:
            CidrSet with parsed ranges and rejected entries
        """
        ranges = []
        rejected = []
        for entry in entries:
            try:
                parsed = parse_cidr(entry)
            except CidrParseError as e:
                rejected.append((str(entry), e.reason))
                if on_invalid is not None:
                    on_invalid(str(entry), e)
                continue
            ranges.append(_demap_range(parsed))
        return cls(ranges=tuple(ranges), rejected=tuple(rejected))

    def contains(self, raw_address: Optional[str]) -> bool:
        """
        Check whether an address falls inside any range of the set.

        Unparseable addresses never match.
        """
        address = normalize_address(raw_address)
        if address is None:
            return False

        family = family_of(address)
        for cidr in self.ranges:
            if cidr.family is not family:
                continue
            if cidr.contains(address):
                return True
        return False

    def __len__(self) -> int:
        return len(self.ranges)

    def __bool__(self) -> bool:
        return bool(self.ranges)


def _demap_range(cidr: CidrRange) -> CidrRange:
    network = demap_ipv4(cidr.network)
    if network is cidr.network:
        return cidr
    # ::ffff:0:0/96 is the mapped block; the IPv4 prefix is what remains past it
    return CidrRange(network, max(cidr.prefix_length - 96, 0))


def ip_in_cidrs(
    raw_address: Optional[str],
    entries: Iterable[str],
    on_invalid: Optional[InvalidEntryHook] = None,
) -> bool:
    """
    Check an address against CIDR/IP entries, in order.

    Args:
        raw_address: Address string as received
        entries: CIDR or bare IP strings
        on_invalid: Called with (entry, error) for each skipped entry

    Returns:
        True on the first matching entry, False otherwise
    """
    return CidrSet.from_strings(entries, on_invalid=on_invalid).contains(raw_address)
