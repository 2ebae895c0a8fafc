"""
Classifier Configuration
========================
Trust configuration and environment variables.
"""

import os
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple

# Environment variables
TRUSTED_PROXIES_ENV = "LOCALNET_TRUSTED_PROXIES"
LOCAL_CIDRS_ENV = "LOCALNET_LOCAL_CIDRS"

# Names used by existing HabiTrack deployments, read when the above are unset
LEGACY_TRUSTED_PROXIES_ENV = "HABITRACK_TRUSTED_PROXIES"
LEGACY_LOCAL_CIDRS_ENV = "HABITRACK_LOCAL_CIDRS"

# Used when no local ranges are configured
DEFAULT_LOCAL_CIDRS: Tuple[str, ...] = (
    "127.0.0.1/32",
    "::1/128",
    "10.0.0.0/8",
    "192.168.0.0/16",
)

# Wider opt-in preset: all RFC 1918 space, loopback, IPv6 link-local and ULA
PRIVATE_NETWORK_CIDRS: Tuple[str, ...] = (
    "127.0.0.0/8",
    "::1/128",
    "10.0.0.0/8",
    "172.16.0.0/12",
    "192.168.0.0/16",
    "fe80::/10",
    "fc00::/7",
)


def parse_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated list, trimming and dropping empty items."""
    return [item.strip() for item in (value or "").split(",") if item.strip()]


@dataclass(frozen=True)
class TrustConfig:
    """
    Immutable trust configuration for a classifier.

    Attributes:
        trusted_proxies: Hops allowed to assert a client address via X-Forwarded-For
        local_cidrs: The local/trusted network; empty means DEFAULT_LOCAL_CIDRS
    """
    trusted_proxies: Tuple[str, ...] = ()
    local_cidrs: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any iterable (lists from config loaders) but store tuples
        object.__setattr__(self, "trusted_proxies", _as_tuple(self.trusted_proxies))
        object.__setattr__(self, "local_cidrs", _as_tuple(self.local_cidrs))

    @property
    def effective_local_cidrs(self) -> Tuple[str, ...]:
        return self.local_cidrs or DEFAULT_LOCAL_CIDRS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TrustConfig":
        """
        Load configuration from environment variables.

        Entries are not validated here; malformed ones are skipped and
        reported when a classifier is built from this configuration.
        HABITRACK_* names are honored when the LOCALNET_* ones are unset.
        """
        env = os.environ if environ is None else environ
        return cls(
            trusted_proxies=tuple(parse_csv(
                _lookup(env, TRUSTED_PROXIES_ENV, LEGACY_TRUSTED_PROXIES_ENV)
            )),
            local_cidrs=tuple(parse_csv(
                _lookup(env, LOCAL_CIDRS_ENV, LEGACY_LOCAL_CIDRS_ENV)
            )),
        )


def _lookup(env: Mapping[str, str], name: str, legacy_name: str) -> Optional[str]:
    value = env.get(name)
    if value is None:
        return env.get(legacy_name)
    return value


def _as_tuple(entries: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if entries is None:
        return ()
    if isinstance(entries, str):
        return tuple(parse_csv(entries))
    return tuple(entries)
