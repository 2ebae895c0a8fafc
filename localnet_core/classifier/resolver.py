"""
Trust-Chain Resolver
====================
Determines the client address from the transport peer and X-Forwarded-For.

Single-hop trust model: only the immediate peer is checked against the
trusted proxies. When it is trusted, the leftmost X-Forwarded-For entry is
taken as the client and the hops in between are not validated. A trusted
proxy that forwards a client-supplied header unchanged therefore lets the
client choose its own address.
"""

from typing import Iterable, List, Optional, Union

from ..addressing import CidrSet, strip_brackets
from .models import ClientSource, ResolvedClient


def parse_forwarded_for(header: Optional[str]) -> List[str]:
    """Split an X-Forwarded-For value into trimmed, non-empty entries."""
    if not header:
        return []
    return [item.strip() for item in header.split(",") if item.strip()]


def resolve_client(
    peer: Optional[str],
    forwarded: Optional[str],
    trusted_proxies: Union[CidrSet, Iterable[str]] = (),
) -> ResolvedClient:
    """
    Resolve the client address for a request.

    Args:
        peer: Transport-layer remote address, possibly bracketed
        forwarded: X-Forwarded-For header value, client first
        trusted_proxies: CidrSet or CIDR/IP strings of trusted proxies

    Returns:
        ResolvedClient with the client address and its source
    """
    peer = peer.strip() if isinstance(peer, str) else ""
    if not peer:
        return ResolvedClient(ip=None, source=ClientSource.UNKNOWN)

    if not isinstance(trusted_proxies, CidrSet):
        trusted_proxies = CidrSet.from_strings(trusted_proxies)

    # An untrusted hop's claims about the client are never honored
    if not trusted_proxies.contains(peer):
        return ResolvedClient(ip=strip_brackets(peer), source=ClientSource.DIRECT)

    hops = parse_forwarded_for(forwarded if isinstance(forwarded, str) else None)
    if not hops:
        return ResolvedClient(ip=strip_brackets(peer), source=ClientSource.DIRECT)

    return ResolvedClient(ip=strip_brackets(hops[0]), source=ClientSource.FORWARDED)
