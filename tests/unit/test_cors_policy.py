"""Tests for the CORS policy."""


class TestCorsPolicy:
    def test_preflight_from_default_dev_origin(self, client):
        resp = client.request(
            "OPTIONS",
            "/api/v1/users",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "Authorization",
            },
        )

        assert resp.status_code in (200, 204), f"Preflight failed: {resp.status_code}"
        assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_preflight_from_unknown_origin_rejected(self, client):
        resp = client.request(
            "OPTIONS",
            "/api/v1/users",
            headers={
                "Origin": "https://evil.example",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert resp.status_code == 400
        assert "access-control-allow-origin" not in resp.headers
