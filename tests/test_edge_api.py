"""Tests for the edge function endpoints.

Uses FastAPI TestClient against an in-memory backend.
"""

from __future__ import annotations

import pytest

fastapi = pytest.importorskip("fastapi", reason="fastapi not installed")

from edge.app import create_app  # noqa: E402
from edge.config import EdgeConfig  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from llumos import __version__  # noqa: E402
from llumos.backends.memory import InMemoryBackend  # noqa: E402
from llumos.cms.crypto import CmsCipher  # noqa: E402
from llumos.models import AuthenticatedUser  # noqa: E402
from llumos.onboarding.checklist import (  # noqa: E402
    PROMPTS_TABLE,
    RESPONSES_TABLE,
    SCORES_TABLE,
)

KEY_HEX = "00112233445566778899aabbccddeeff" * 2
INTERNAL_SECRET = "internal-shared-secret"
TOKEN = "user-token"
AUTH = {"Authorization": f"Bearer {TOKEN}"}


def _backend(**subscriber) -> InMemoryBackend:
    backend = InMemoryBackend(
        tables={PROMPTS_TABLE: [], RESPONSES_TABLE: [], SCORES_TABLE: []},
        tokens={TOKEN: AuthenticatedUser(id="user-1", email="jane@acme.com")},
    )
    if subscriber:
        backend.add_subscriber("user-1", **subscriber)
    return backend


def _make_client(
    backend: InMemoryBackend | None = None,
    cms_encryption_key: str = KEY_HEX,
    internal_secret: str = INTERNAL_SECRET,
) -> TestClient:
    config = EdgeConfig(
        cms_encryption_key=cms_encryption_key,
        internal_secret=internal_secret,
    )
    app = create_app(config, backend=backend or _backend())
    return TestClient(app)


# --- Health and catalog ---


class TestHealth:
    def test_health(self):
        resp = _make_client().get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": __version__}

    def test_docs_disabled_outside_dev_mode(self):
        assert _make_client().get("/docs").status_code == 404


class TestCatalog:
    def test_list_tiers(self):
        resp = _make_client().get("/tiers")
        assert resp.status_code == 200
        data = resp.json()
        assert [entry["tier"] for entry in data] == ["free", "starter", "growth", "pro", "agency"]
        free = data[0]
        assert free["quotas"]["max_prompts"] == 5
        assert free["price"] is None
        assert free["local_authority_eligible"] is False
        assert free["local_authority_limits"]["models_allowed"] == []

    def test_get_tier_normalizes(self):
        resp = _make_client().get("/tiers/Growth")
        assert resp.status_code == 200
        data = resp.json()
        assert data["tier"] == "growth"
        assert data["price"] == {"monthly": 99, "yearly": 990}
        assert data["local_authority_limits"]["max_profiles"] == 3

    def test_unknown_tier_is_404(self):
        resp = _make_client().get("/tiers/enterprise")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Unknown tier: enterprise"}

    def test_validate_domain(self):
        resp = _make_client().post("/validate-domain", json={"domain": "https://www.Acme.com/x"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_valid"] is True
        assert data["cleaned_domain"] == "acme.com"

    def test_validate_domain_missing(self):
        resp = _make_client().post("/validate-domain", json={})
        assert resp.status_code == 200
        assert resp.json()["is_valid"] is False
        assert resp.json()["error_type"] == "too_short"


# --- CMS encrypt ---


class TestCmsEncrypt:
    def test_requires_auth(self):
        resp = _make_client().post("/cms-encrypt", json={"password": "x"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized"}

    def test_bad_token(self):
        resp = _make_client().post(
            "/cms-encrypt", json={"password": "x"}, headers={"Authorization": "Bearer nope"},
        )
        assert resp.status_code == 401

    def test_internal_secret_not_enough(self):
        resp = _make_client().post(
            "/cms-encrypt", json={"password": "x"},
            headers={"x-internal-secret": INTERNAL_SECRET},
        )
        assert resp.status_code == 401

    def test_missing_password(self):
        resp = _make_client().post("/cms-encrypt", json={}, headers=AUTH)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Password is required"}

    def test_invalid_json_body(self):
        resp = _make_client().post("/cms-encrypt", content=b"not json", headers=AUTH)
        assert resp.status_code == 400

    def test_encrypts(self):
        resp = _make_client().post("/cms-encrypt", json={"password": "hunter2"}, headers=AUTH)
        assert resp.status_code == 200
        encrypted = resp.json()["encrypted"]
        assert encrypted.startswith("enc:")
        assert CmsCipher.from_hex(KEY_HEX).decrypt(encrypted) == "hunter2"

    def test_lone_surrogate_is_replaced(self):
        resp = _make_client().post(
            "/cms-encrypt",
            content=b'{"password": "\\ud800abc"}',
            headers={**AUTH, "Content-Type": "application/json"},
        )
        assert resp.status_code == 200
        encrypted = resp.json()["encrypted"]
        assert CmsCipher.from_hex(KEY_HEX).decrypt(encrypted) == "?abc"

    def test_missing_key_is_generic_500(self):
        client = _make_client(cms_encryption_key="")
        resp = client.post("/cms-encrypt", json={"password": "x"}, headers=AUTH)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Encryption failed"}


# --- CMS decrypt ---


class TestCmsDecrypt:
    def _encrypted(self) -> str:
        return CmsCipher.from_hex(KEY_HEX).encrypt("s3cret")

    def test_internal_caller(self):
        resp = _make_client().post(
            "/cms-decrypt", json={"encrypted": self._encrypted()},
            headers={"x-internal-secret": INTERNAL_SECRET},
        )
        assert resp.status_code == 200
        assert resp.json() == {"decrypted": "s3cret"}

    def test_user_caller(self):
        resp = _make_client().post(
            "/cms-decrypt", json={"encrypted": self._encrypted()}, headers=AUTH,
        )
        assert resp.status_code == 200
        assert resp.json() == {"decrypted": "s3cret"}

    def test_wrong_internal_secret(self):
        resp = _make_client().post(
            "/cms-decrypt", json={"encrypted": self._encrypted()},
            headers={"x-internal-secret": "guess"},
        )
        assert resp.status_code == 401

    def test_no_secret_configured_never_matches(self):
        client = _make_client(internal_secret="")
        resp = client.post(
            "/cms-decrypt", json={"encrypted": self._encrypted()},
            headers={"x-internal-secret": ""},
        )
        assert resp.status_code == 401

    def test_missing_value(self):
        resp = _make_client().post("/cms-decrypt", json={}, headers=AUTH)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Encrypted value is required"}

    def test_legacy_plaintext_without_key(self):
        client = _make_client(cms_encryption_key="")
        resp = client.post("/cms-decrypt", json={"encrypted": "plain-old"}, headers=AUTH)
        assert resp.status_code == 200
        assert resp.json() == {"decrypted": "plain-old"}

    def test_tampered_is_generic_500(self):
        resp = _make_client().post(
            "/cms-decrypt", json={"encrypted": "enc:AAAAAAAAAAAAAAAAAAAAAAAAAAAA"},
            headers=AUTH,
        )
        assert resp.status_code == 500
        assert resp.json() == {"error": "Decryption failed"}


# --- Local AI Authority ---


class TestLocalAuthorityAccess:
    def test_requires_auth(self):
        assert _make_client().get("/local-authority/access").status_code == 401

    def test_allowed(self):
        backend = _backend(subscription_tier="pro", subscribed=True, payment_collected=True)
        resp = _make_client(backend).get("/local-authority/access", headers=AUTH)
        assert resp.status_code == 200
        data = resp.json()
        assert data["allowed"] is True
        assert data["tier"] == "pro"
        assert data["limits"]["max_runs_per_day"] == 10

    def test_ineligible_envelope(self):
        backend = _backend(subscription_tier="starter", subscribed=True, payment_collected=True)
        resp = _make_client(backend).get("/local-authority/access", headers=AUTH)
        assert resp.status_code == 403
        assert resp.headers["content-type"].startswith("application/json")
        data = resp.json()
        assert data["error"] == "subscription_required"
        assert data["current_tier"] == "starter"
        assert data["required_tier"] == "growth"
        assert "Growth plan or higher" in data["message"]

    def test_no_subscriber(self):
        resp = _make_client().get("/local-authority/access", headers=AUTH)
        assert resp.status_code == 403
        assert resp.json()["current_tier"] is None

    def test_inactive(self):
        backend = _backend(subscription_tier="agency", subscribed=True, payment_collected=False)
        resp = _make_client(backend).get("/local-authority/access", headers=AUTH)
        assert resp.status_code == 403
        assert "not active" in resp.json()["message"]


# --- Onboarding ---


class TestOnboardingChecklist:
    def test_requires_auth(self):
        resp = _make_client().post("/onboarding/checklist", json={"org_id": "org-1"})
        assert resp.status_code == 401

    def test_missing_org(self):
        resp = _make_client().post("/onboarding/checklist", json={}, headers=AUTH)
        assert resp.status_code == 400
        assert resp.json() == {"error": "org_id is required"}

    def test_status(self):
        backend = _backend()
        backend.insert(PROMPTS_TABLE, {"org_id": "org-1"})
        resp = _make_client(backend).post(
            "/onboarding/checklist",
            json={
                "org_id": "org-1",
                "verified_at": "2025-01-02T00:00:00Z",
                "competitors": [],
                "report_downloaded": False,
            },
            headers=AUTH,
        )
        assert resp.status_code == 200
        data = resp.json()
        done = {item["id"]: item["completed"] for item in data["items"]}
        assert done == {
            "domain": True, "competitor": False, "scan": False,
            "score": False, "prompts": True, "report": False,
        }
        assert data["completed_count"] == 2
        assert data["total"] == 6
        assert data["all_completed"] is False

    @pytest.mark.parametrize("payload, message", [
        ({"org_id": ""}, "org_id is required"),
        ({"org_id": "org-1", "competitors": "rival.com"}, "Invalid competitors"),
        ({"org_id": "org-1", "verified_at": "yesterday-ish"}, "Invalid verified_at"),
        ({"org_id": "org-1", "report_downloaded": "maybe"}, "Invalid report_downloaded"),
    ])
    def test_names_the_bad_field(self, payload, message):
        resp = _make_client().post("/onboarding/checklist", json=payload, headers=AUTH)
        assert resp.status_code == 400
        assert resp.json() == {"error": message}

    def test_backend_failure_is_502(self):
        backend = InMemoryBackend(tokens={TOKEN: AuthenticatedUser(id="user-1")})
        resp = _make_client(backend).post(
            "/onboarding/checklist", json={"org_id": "org-1"}, headers=AUTH,
        )
        assert resp.status_code == 502
        assert resp.json() == {"error": "Failed to load onboarding status"}


# --- CORS ---


class TestCors:
    def test_preflight_allows_internal_secret_header(self):
        resp = _make_client().options(
            "/cms-decrypt",
            headers={
                "Origin": "https://app.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "x-internal-secret",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"


# --- Config from the environment ---


class TestEnvConfig:
    def test_lowercase_log_level(self, monkeypatch):
        monkeypatch.setenv("LLUMOS_EDGE_LOG_LEVEL", "info")
        monkeypatch.setenv("LLUMOS_EDGE_INTERNAL_SECRET", INTERNAL_SECRET)
        app = create_app(EdgeConfig.from_env(), backend=_backend())
        resp = TestClient(app).get("/health")
        assert resp.status_code == 200

    def test_dev_mode_flag(self, monkeypatch):
        monkeypatch.setenv("LLUMOS_EDGE_DEV_MODE", "true")
        config = EdgeConfig.from_env()
        assert config.dev_mode is True
        app = create_app(config, backend=_backend())
        assert TestClient(app).get("/docs").status_code == 200
