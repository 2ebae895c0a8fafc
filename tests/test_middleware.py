import pytest
from fastapi import Depends, FastAPI, Request
from starlette.testclient import TestClient
from starlette.types import Receive, Scope, Send

from localnet_core.classifier import Classification, LocalClassifier, TrustConfig
from localnet_core.middleware import (
    LocalNetworkOnlyMiddleware,
    get_network_classification,
    require_local_network,
)


def with_peer(app, host):
    """Wrap an ASGI app so every request arrives from the given peer address."""
    async def wrapped(scope: Scope, receive: Receive, send: Send):
        if scope["type"] == "http":
            scope = dict(scope, client=(host, 50000) if host else None)
        await app(scope, receive, send)
    return wrapped


def create_app(config=None, protected_paths=("/api/bootstrap",), attach_classifier=True):
    classifier = LocalClassifier(config or TrustConfig())
    app = FastAPI()
    if attach_classifier:
        app.state.local_classifier = classifier
    app.add_middleware(
        LocalNetworkOnlyMiddleware,
        classifier=classifier,
        protected_paths=protected_paths,
    )

    @app.post("/api/bootstrap")
    async def bootstrap(request: Request):
        return {"ok": True, "client_ip": request.state.network_classification.client_ip}

    @app.get("/api/public")
    async def public():
        return {"ok": True}

    @app.get("/api/setup")
    async def setup(info: Classification = Depends(require_local_network)):
        return info.to_dict()

    @app.get("/api/whoami")
    async def whoami(info: Classification = Depends(get_network_classification)):
        return info.to_dict()

    return app


def create_client(host, **kwargs):
    return TestClient(with_peer(create_app(**kwargs), host))


def test_local_peer_allowed():
    client = create_client("192.168.1.50")

    response = client.post("/api/bootstrap")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "client_ip": "192.168.1.50"}


def test_remote_peer_blocked():
    client = create_client("203.0.113.5")

    response = client.post("/api/bootstrap")

    assert response.status_code == 403
    assert response.json() == {
        "error": {"code": "PERMISSION_DENIED", "message": "Local network required"}
    }


def test_spoofed_forwarded_header_blocked():
    """Untrusted peers cannot claim a local address."""
    client = create_client("203.0.113.5")

    response = client.post("/api/bootstrap", headers={"X-Forwarded-For": "127.0.0.1"})

    assert response.status_code == 403


def test_trusted_proxy_forwarding_remote_client_blocked():
    client = create_client("127.0.0.1", config=TrustConfig(trusted_proxies=("127.0.0.1",)))

    response = client.post("/api/bootstrap", headers={"X-Forwarded-For": "198.51.100.7"})

    assert response.status_code == 403


def test_trusted_proxy_forwarding_local_client_allowed():
    client = create_client("127.0.0.1", config=TrustConfig(trusted_proxies=("127.0.0.1",)))

    response = client.post("/api/bootstrap", headers={"X-Forwarded-For": "10.1.2.3, 127.0.0.1"})

    assert response.status_code == 200
    assert response.json()["client_ip"] == "10.1.2.3"


def test_missing_client_blocked():
    client = create_client(None)

    response = client.post("/api/bootstrap")

    assert response.status_code == 403


def test_unprotected_path_untouched():
    client = create_client("203.0.113.5")

    response = client.get("/api/public")

    assert response.status_code == 200


def test_protected_prefix_does_not_match_siblings():
    """A prefix should not match a longer sibling segment."""
    client = create_client("203.0.113.5", protected_paths=("/api/pub",))

    assert client.get("/api/public").status_code == 200


def test_protected_prefix_covers_subpaths():
    client = create_client("203.0.113.5", protected_paths=("/api/",))

    assert client.get("/api/public").status_code == 403


def test_single_string_prefix():
    """A bare string should be one prefix, not a set of characters."""
    client = create_client("203.0.113.5", protected_paths="/api/bootstrap")

    assert client.get("/api/public").status_code == 200
    assert client.post("/api/bootstrap").status_code == 403


def test_all_paths_protected_without_prefixes():
    client = create_client("203.0.113.5", protected_paths=None)

    assert client.get("/api/public").status_code == 403


class TestRequireLocalNetwork:
    """Tests for the FastAPI dependency."""

    def test_allows_local(self):
        client = create_client("::1")

        response = client.get("/api/setup")

        assert response.status_code == 200
        assert response.json() == {"client_ip": "::1", "source": "socket", "is_local": True}

    def test_rejects_remote(self):
        client = create_client("203.0.113.5")

        response = client.get("/api/setup")

        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "PERMISSION_DENIED"

    def test_fails_closed_without_classifier(self):
        """No classifier on app.state should never grant access."""
        client = create_client("127.0.0.1", attach_classifier=False)

        response = client.get("/api/setup")

        assert response.status_code == 403

    @pytest.mark.parametrize("host,expected", [
        ("10.0.0.7", True),
        ("8.8.4.4", False),
    ])
    def test_classification_dependency(self, host, expected):
        client = create_client(host)

        response = client.get("/api/whoami")

        assert response.status_code == 200
        assert response.json()["is_local"] is expected
        assert response.json()["client_ip"] == host
