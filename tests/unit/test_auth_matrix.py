"""Parametrized auth-contract tests for every protected endpoint.

Each row defines:
  - method, path, request kwargs
  - auth_type: 'bearer' | 'public'

Unauthenticated requests to bearer endpoints MUST return 401 with a
WWW-Authenticate challenge. Public endpoints MUST NOT return 401.
"""
import pytest

ZERO = "00000000-0000-0000-0000-000000000000"

# (method, path, auth_type, kwargs)
AUTH_MATRIX = [
    # --- Auth ---
    ("GET", "/api/v1/auth/me", "bearer", {}),
    ("POST", "/api/v1/auth/logout", "bearer", {}),
    # --- Users ---
    ("GET", "/api/v1/users", "bearer", {}),
    ("GET", f"/api/v1/users/{ZERO}", "bearer", {}),
    ("POST", "/api/v1/users", "bearer",
     {"json": {"username": "newbie", "email": "newbie@accessguard.io",
               "password": "Secret@123", "full_name": "New User"}}),
    ("PUT", f"/api/v1/users/{ZERO}", "bearer", {"json": {"full_name": "X"}}),
    ("DELETE", f"/api/v1/users/{ZERO}", "bearer", {}),
    # --- Roles ---
    ("GET", "/api/v1/roles", "bearer", {}),
    ("POST", "/api/v1/roles", "bearer", {"json": {"name": "Auditor"}}),
    ("DELETE", f"/api/v1/roles/{ZERO}", "bearer", {}),
    # --- Permissions ---
    ("GET", "/api/v1/permissions", "bearer", {}),
    ("POST", "/api/v1/permissions", "bearer",
     {"json": {"name": "read:x", "action": "read", "resource": "x"}}),
    # --- Resources (role policy) ---
    ("GET", "/api/v1/resources", "bearer", {}),
    ("POST", "/api/v1/resources", "bearer", {"json": {"name": "x", "type": "page"}}),
    # --- Audit ---
    ("GET", "/api/v1/audit", "bearer", {}),
    ("GET", "/api/v1/audit/stats", "bearer", {}),
    # --- Public endpoints ---
    ("GET", "/api/v1/health", "public", {}),
    ("GET", "/", "public", {}),
    ("POST", "/api/v1/auth/register", "public",
     {"json": {"username": "public1", "email": "public1@accessguard.io",
               "password": "Secret@123", "full_name": "Public One"}}),
]

_IDS = [f"{m} {p} [{a}]" for m, p, a, _ in AUTH_MATRIX]


@pytest.mark.parametrize("method,path,auth_type,kwargs", AUTH_MATRIX, ids=_IDS)
def test_auth_contract(client, method, path, auth_type, kwargs):
    resp = client.request(method, path, **kwargs)

    if auth_type == "bearer":
        assert resp.status_code == 401, (
            f"{method} {path} should require a bearer token, got {resp.status_code}"
        )
        assert resp.json()["detail"] == "No credential supplied."
        assert resp.headers["WWW-Authenticate"] == "Bearer"
    else:
        assert resp.status_code != 401, f"{method} {path} is public but returned 401"


@pytest.mark.parametrize("method,path,auth_type,kwargs", AUTH_MATRIX, ids=_IDS)
def test_garbage_token_rejected(client, method, path, auth_type, kwargs):
    if auth_type != "bearer":
        pytest.skip("public endpoint")

    resp = client.request(
        method, path, headers={"Authorization": "Bearer not.a.jwt"}, **kwargs
    )

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token."
