"""
Localnet Core Library
=====================
Client-IP classification and proxy-trust-chain resolution for gating
unauthenticated, local-network-only operations.
"""

__version__ = "0.1.0"

# Addressing
from localnet_core.addressing import (
    AddressFamily,
    CidrRange,
    CidrParseError,
    CidrSet,
    parse_cidr,
    normalize_address,
    strip_brackets,
    prefix_matches,
    ip_in_cidrs,
)

# Classification
from localnet_core.classifier import (
    DEFAULT_LOCAL_CIDRS,
    PRIVATE_NETWORK_CIDRS,
    TrustConfig,
    ClientSource,
    ResolvedClient,
    Classification,
    resolve_client,
    LocalClassifier,
    make_local_classifier,
)

__all__ = [
    # Addressing
    "AddressFamily",
    "CidrRange",
    "CidrParseError",
    "CidrSet",
    "parse_cidr",
    "normalize_address",
    "strip_brackets",
    "prefix_matches",
    "ip_in_cidrs",
    # Classification
    "DEFAULT_LOCAL_CIDRS",
    "PRIVATE_NETWORK_CIDRS",
    "TrustConfig",
    "ClientSource",
    "ResolvedClient",
    "Classification",
    "resolve_client",
    "LocalClassifier",
    "make_local_classifier",
]
