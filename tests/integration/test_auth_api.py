from app.config import Settings, get_settings
from app.main import app


def test_jwt_sets_http_only_strict_cookie(client):
    r = client.post("/jwt", json={"userEmail": "u@x.com"})

    assert r.status_code == 200
    assert r.json() == {"message": "Token issued"}
    cookie = r.headers["set-cookie"]
    assert cookie.startswith("token=")
    assert "HttpOnly" in cookie
    assert "SameSite=strict" in cookie
    assert "Secure" not in cookie


def test_jwt_cookie_in_production_is_secure_and_cross_site(client):
    app.dependency_overrides[get_settings] = lambda: Settings(
        environment="production", token_secret="prod-secret"
    )

    r = client.post("/jwt", json={"email": "u@x.com"})

    assert r.status_code == 200
    cookie = r.headers["set-cookie"]
    assert "HttpOnly" in cookie
    assert "Secure" in cookie
    assert "SameSite=none" in cookie


def test_jwt_requires_an_email(client):
    r = client.post("/jwt", json={"name": "nobody"})
    assert r.status_code == 422


def test_jwt_rejects_malformed_email(client):
    r = client.post("/jwt", json={"email": "not-an-email"})
    assert r.status_code == 422


def test_logout_clears_cookie(client):
    r = client.post("/logout")

    assert r.status_code == 200
    assert r.json() == {"message": "Logged out"}
    cookie = r.headers["set-cookie"]
    assert cookie.startswith("token=")
    assert "Max-Age=0" in cookie
    assert "SameSite=strict" in cookie


def test_logout_then_protected_route_is_unauthorized(client, login):
    login("u@x.com")
    assert client.get("/job-application", params={"email": "u@x.com"}).status_code == 200

    client.post("/logout")

    r = client.get("/job-application", params={"email": "u@x.com"})
    assert r.status_code == 401
