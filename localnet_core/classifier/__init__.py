"""
Local Network Classification
============================
Resolves the client address behind trusted proxies and classifies it
against the configured local network.
"""

from .config import (
    DEFAULT_LOCAL_CIDRS,
    PRIVATE_NETWORK_CIDRS,
    TRUSTED_PROXIES_ENV,
    LOCAL_CIDRS_ENV,
    LEGACY_TRUSTED_PROXIES_ENV,
    LEGACY_LOCAL_CIDRS_ENV,
    TrustConfig,
    parse_csv,
)
from .models import ClientSource, ResolvedClient, Classification
from .resolver import parse_forwarded_for, resolve_client
from .classifier import LocalClassifier, make_local_classifier

__all__ = [
    # Config
    "DEFAULT_LOCAL_CIDRS",
    "PRIVATE_NETWORK_CIDRS",
    "TRUSTED_PROXIES_ENV",
    "LOCAL_CIDRS_ENV",
    "LEGACY_TRUSTED_PROXIES_ENV",
    "LEGACY_LOCAL_CIDRS_ENV",
    "TrustConfig",
    "parse_csv",
    # Models
    "ClientSource",
    "ResolvedClient",
    "Classification",
    # Resolver
    "parse_forwarded_for",
    "resolve_client",
    # Classifier
    "LocalClassifier",
    "make_local_classifier",
]
