from accessguard.models import User

API = "/api/v1"


def test_login_returns_token_and_profile(client, seeded, audit_records, user_by_name):
    resp = client.post(f"{API}/auth/login", json={"username": "manager", "password": "Manager@123"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == 24 * 60 * 60
    assert body["user"]["username"] == "manager"
    assert "password_hash" not in body["user"]
    assert [r["name"] for r in body["user"]["roles"]] == ["Manager"]
    assert "read:audit" in body["user"]["permissions"]

    records = audit_records("login")
    assert len(records) == 1
    assert records[0].status == "success"
    assert records[0].user_id == user_by_name("manager").id
    assert user_by_name("manager").last_login_at is not None


def test_unknown_user_and_wrong_password_look_identical(client, seeded, audit_records, user_by_name):
    unknown = client.post(f"{API}/auth/login", json={"username": "ghost", "password": "x"})
    wrong = client.post(f"{API}/auth/login", json={"username": "admin", "password": "nope"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"detail": "Invalid credentials"}

    records = {r.details["reason"]: r for r in audit_records("login_failed")}
    assert set(records) == {"user_not_found", "wrong_password"}
    assert records["user_not_found"].user_id is None
    assert records["user_not_found"].status == "failed"
    assert records["wrong_password"].user_id == user_by_name("admin").id


def test_inactive_account_cannot_log_in(client, seeded, db_session, audit_records, user_by_name):
    user_by_name("employee").is_active = False
    db_session.commit()

    resp = client.post(f"{API}/auth/login", json={"username": "employee", "password": "Employee@123"})

    assert resp.status_code == 403
    assert resp.json() == {"detail": "Account is inactive"}
    assert audit_records("login_failed")[0].details["reason"] == "inactive_account"


def test_register_assigns_default_role(client, seeded, db_session, audit_records):
    resp = client.post(
        f"{API}/auth/register",
        json={
            "username": "newhire",
            "email": "newhire@accessguard.io",
            "password": "Welcome@1",
            "full_name": "New Hire",
        },
    )

    assert resp.status_code == 201
    assert [r["name"] for r in resp.json()["user"]["roles"]] == ["Employee"]
    assert db_session.query(User).filter(User.username == "newhire").count() == 1
    assert audit_records("register")[0].status == "success"


def test_register_duplicate_is_conflict(client, seeded):
    resp = client.post(
        f"{API}/auth/register",
        json={
            "username": "admin",
            "email": "other@accessguard.io",
            "password": "Welcome@1",
            "full_name": "Copycat",
        },
    )

    assert resp.status_code == 409
    assert resp.json() == {"detail": "Username or email already exists"}


def test_me_returns_effective_permissions(client, employee_headers):
    resp = client.get(f"{API}/auth/me", headers=employee_headers)

    assert resp.status_code == 200
    assert resp.json()["username"] == "employee"
    assert resp.json()["permissions"] == ["read:dashboard", "read:users"]


def test_logout_is_audited(client, employee_headers, audit_records, user_by_name):
    resp = client.post(f"{API}/auth/logout", headers=employee_headers)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Logged out successfully"}
    record = audit_records("logout")[0]
    assert record.status == "success"
    assert record.user_id == user_by_name("employee").id


def test_deactivation_revokes_issued_tokens(client, admin_headers, employee_headers, audit_records, user_by_name):
    employee_id = user_by_name("employee").id
    assert client.get(f"{API}/auth/me", headers=employee_headers).status_code == 200

    resp = client.put(
        f"{API}/users/{employee_id}", json={"is_active": False}, headers=admin_headers
    )
    assert resp.status_code == 200

    resp = client.get(f"{API}/auth/me", headers=employee_headers)
    assert resp.status_code == 403
    assert resp.json() == {"detail": "Account deactivated. Contact administrator."}

    denied = [r for r in audit_records("view_profile") if r.status == "denied"]
    assert len(denied) == 1
    assert denied[0].user_id is None
    assert denied[0].details["reason"] == "account_deactivated"


def test_token_for_deleted_user_is_rejected(client, admin_headers, login, user_by_name):
    hr_headers = login("hruser", "HR@123")
    hr_id = user_by_name("hruser").id

    assert client.delete(f"{API}/users/{hr_id}", headers=admin_headers).status_code == 200

    resp = client.get(f"{API}/auth/me", headers=hr_headers)
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Principal no longer exists."}
