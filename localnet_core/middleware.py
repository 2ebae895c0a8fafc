"""
Local Network Middleware
========================
Restricts privileged routes (first-run bootstrap, kiosk mode, local
administration) to requests classified as local.

Usage:
    from localnet_core import LocalClassifier, TrustConfig
    from localnet_core.middleware import LocalNetworkOnlyMiddleware, require_local_network

    classifier = LocalClassifier(TrustConfig.from_env())
    app.state.local_classifier = classifier
    app.add_middleware(
        LocalNetworkOnlyMiddleware,
        classifier=classifier,
        protected_paths={"/api/bootstrap", "/api/kiosk"},
    )

    @app.post("/api/setup")
    async def setup(info: Classification = Depends(require_local_network)):
        ...

Development-mode overrides belong to the application; nothing here relaxes
the classification.
"""

from typing import Iterable, Optional

from fastapi import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
import structlog

from .classifier import Classification, ClientSource, LocalClassifier

logger = structlog.get_logger(__name__)

STATE_ATTRIBUTE = "network_classification"
APP_STATE_CLASSIFIER = "local_classifier"

PERMISSION_DENIED = {
    "code": "PERMISSION_DENIED",
    "message": "Local network required",
}


class LocalNetworkOnlyMiddleware(BaseHTTPMiddleware):
    """
    Middleware that blocks non-local requests to protected path prefixes.

    Blocked requests get a 403 with a PERMISSION_DENIED error body. Allowed
    requests carry their Classification on request.state.
    """

    def __init__(
        self,
        app,
        classifier: LocalClassifier,
        protected_paths: Optional[Iterable[str]] = None,
        status_code: int = 403,
    ):
        super().__init__(app)
        self.classifier = classifier
        if isinstance(protected_paths, str):
            protected_paths = (protected_paths,)
        # No prefixes means every path is protected
        self.protected_paths = tuple(protected_paths or ())
        self.status_code = status_code

    def _is_protected(self, path: str) -> bool:
        if not self.protected_paths:
            return True
        for prefix in self.protected_paths:
            base = prefix.rstrip("/")
            if path == base or path.startswith(base + "/"):
                return True
        return False

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if not self._is_protected(path):
            return await call_next(request)

        info = self.classifier.classify_request(request)
        setattr(request.state, STATE_ATTRIBUTE, info)

        if not info.is_local:
            logger.warning(
                "local_network_access_blocked",
                path=path,
                method=request.method,
                **info.to_dict(),
            )
            return JSONResponse(
                status_code=self.status_code,
                content={"error": dict(PERMISSION_DENIED)},
            )

        logger.debug("local_network_access_allowed", path=path, **info.to_dict())
        return await call_next(request)


def get_network_classification(request: Request) -> Classification:
    """
    Dependency returning the request's classification.

    Reuses the result stored by LocalNetworkOnlyMiddleware, otherwise
    classifies with the classifier on app.state.local_classifier.
    """
    info = getattr(request.state, STATE_ATTRIBUTE, None)
    if info is not None:
        return info

    classifier = getattr(request.app.state, APP_STATE_CLASSIFIER, None)
    if classifier is None:
        # Fail closed: without a classifier nothing is local
        logger.error("local_classifier_missing", path=request.url.path)
        return Classification(client_ip=None, source=ClientSource.UNKNOWN, is_local=False)

    info = classifier.classify_request(request)
    setattr(request.state, STATE_ATTRIBUTE, info)
    return info


def require_local_network(request: Request) -> Classification:
    """
    Dependency that requires a local-network request.
    Raises 403 if the request is not local.
    """
    info = get_network_classification(request)
    if not info.is_local:
        logger.warning(
            "local_network_access_blocked",
            path=request.url.path,
            method=request.method,
            **info.to_dict(),
        )
        raise HTTPException(status_code=403, detail=dict(PERMISSION_DENIED))
    return info