"""
Classifier Models
=================
Data models for client resolution and local-network classification.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass
from enum import Enum


class ClientSource(str, Enum):
    """How the client address was obtained."""
    DIRECT = "socket"               # Transport peer is the client
    FORWARDED = "x-forwarded-for"   # Taken from a trusted proxy's header
    UNKNOWN = "unknown"             # No peer address available


@dataclass(frozen=True)
class ResolvedClient:
    """Client address resolved from the peer and forwarded header."""
    ip: Optional[str]
    source: ClientSource


@dataclass(frozen=True)
class Classification:
    """Per-request classification consumed by privilege gates."""
    client_ip: Optional[str]
    source: ClientSource
    is_local: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "client_ip": self.client_ip,
            "source": self.source.value,
            "is_local": self.is_local,
        }
