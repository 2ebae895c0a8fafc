"""
Local Network Classifier
========================
Decides whether a request comes from the local/trusted network.

Construct one LocalClassifier per process from an explicit TrustConfig and
inject it where requests are handled. Configuration is parsed once; every
classify() call only reads immutable state, so an instance can be shared by
any number of threads or tasks.

Usage:
    classifier = LocalClassifier(TrustConfig.from_env())

    info = classifier.classify(request.client.host, request.headers.get("x-forwarded-for"))
    if not info.is_local:
        raise HTTPException(status_code=403)
"""

from typing import Iterable, Optional

import structlog

from ..addressing import CidrParseError, CidrSet, InvalidEntryHook
from .config import TrustConfig
from .models import Classification
from .resolver import resolve_client

logger = structlog.get_logger(__name__)

FORWARDED_FOR_HEADER = "x-forwarded-for"


class LocalClassifier:
    """
    Classifies requests as local or remote.

    Malformed configuration entries are skipped: each one is logged once
    here and passed to on_invalid, and the skipped entries stay available
    on the ``rejected_entries`` property.
    """

    def __init__(
        self,
        config: Optional[TrustConfig] = None,
        on_invalid: Optional[InvalidEntryHook] = None,
    ):
        self.config = config or TrustConfig()
        self._on_invalid = on_invalid

        self._trusted_proxies = CidrSet.from_strings(
            self.config.trusted_proxies,
            on_invalid=self._reporter("trusted_proxies"),
        )
        self._local_cidrs = CidrSet.from_strings(
            self.config.effective_local_cidrs,
            on_invalid=self._reporter("local_cidrs"),
        )

        logger.info(
            "local_classifier_configured",
            trusted_proxies=len(self._trusted_proxies),
            local_cidrs=len(self._local_cidrs),
            using_default_local_cidrs=not self.config.local_cidrs,
            skipped_entries=len(self.rejected_entries),
        )

    def _reporter(self, setting: str) -> InvalidEntryHook:
        def report(entry: str, error: CidrParseError) -> None:
            logger.warning(
                "localnet_config_entry_skipped",
                setting=setting,
                entry=entry,
                reason=error.reason,
            )
            if self._on_invalid is not None:
                self._on_invalid(entry, error)
        return report

    @property
    def trusted_proxies(self) -> CidrSet:
        return self._trusted_proxies

    @property
    def local_cidrs(self) -> CidrSet:
        return self._local_cidrs

    @property
    def rejected_entries(self):
        """(entry, reason) pairs skipped from both settings."""
        return self._trusted_proxies.rejected + self._local_cidrs.rejected

    def classify(
        self,
        peer_address: Optional[str],
        forwarded: Optional[str] = None,
    ) -> Classification:
        """
        Classify a request from its peer address and X-Forwarded-For value.

        Never raises: missing or malformed input yields a non-local result.

        Args:
            peer_address: Transport-layer remote address
            forwarded: X-Forwarded-For header value, if any

        Returns:
            Classification with client IP, its source and the local verdict
        """
        resolved = resolve_client(peer_address, forwarded, self._trusted_proxies)
        is_local = (
            self._local_cidrs.contains(resolved.ip)
            if resolved.ip is not None
            else False
        )
        return Classification(
            client_ip=resolved.ip,
            source=resolved.source,
            is_local=is_local,
        )

    def classify_request(self, request) -> Classification:
        """Classify a Starlette/FastAPI request."""
        peer = request.client.host if request.client else None
        return self.classify(peer, request.headers.get(FORWARDED_FOR_HEADER))

    def __call__(self, peer_address: Optional[str], forwarded: Optional[str] = None) -> Classification:
        return self.classify(peer_address, forwarded)


def make_local_classifier(
    trusted_proxies: Optional[Iterable[str]] = None,
    local_cidrs: Optional[Iterable[str]] = None,
    on_invalid: Optional[InvalidEntryHook] = None,
) -> LocalClassifier:
    """Build a classifier from plain lists of CIDR/IP strings."""
    config = TrustConfig(
        trusted_proxies=trusted_proxies or (),
        local_cidrs=local_cidrs or (),
    )
    return LocalClassifier(config, on_invalid=on_invalid)
