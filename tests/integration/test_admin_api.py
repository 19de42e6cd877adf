from uuid import uuid4

from accessguard.models import Permission, Role, User

API = "/api/v1"


class TestUsers:
    def test_admin_creates_user_with_roles(self, client, admin_headers, db_session):
        hr_role = db_session.query(Role).filter(Role.name == "HR").one()

        resp = client.post(
            f"{API}/users",
            json={
                "username": "recruiter",
                "email": "recruiter@accessguard.io",
                "password": "Recruit@1",
                "full_name": "Rita Recruiter",
                "role_ids": [str(hr_role.id)],
            },
            headers=admin_headers,
        )

        assert resp.status_code == 201
        assert [r["name"] for r in resp.json()["roles"]] == ["HR"]

    def test_unknown_role_id_rejects_create(self, client, admin_headers, db_session):
        hr_role = db_session.query(Role).filter(Role.name == "HR").one()

        resp = client.post(
            f"{API}/users",
            json={
                "username": "ghost",
                "email": "ghost@accessguard.io",
                "password": "Ghost@123",
                "full_name": "Gus Ghost",
                "role_ids": [str(hr_role.id), str(uuid4())],
            },
            headers=admin_headers,
        )

        assert resp.status_code == 404
        assert resp.json() == {"detail": "Role not found"}
        assert db_session.query(User).filter(User.username == "ghost").count() == 0

    def test_update_replaces_roles(self, client, admin_headers, db_session, user_by_name):
        manager_role = db_session.query(Role).filter(Role.name == "Manager").one()
        employee = user_by_name("employee")

        resp = client.put(
            f"{API}/users/{employee.id}",
            json={"role_ids": [str(manager_role.id)], "full_name": "Mike Promoted"},
            headers=admin_headers,
        )

        assert resp.status_code == 200
        assert resp.json()["full_name"] == "Mike Promoted"
        assert [r["name"] for r in resp.json()["roles"]] == ["Manager"]

    def test_email_conflict(self, client, admin_headers, user_by_name):
        employee = user_by_name("employee")

        resp = client.put(
            f"{API}/users/{employee.id}",
            json={"email": "admin@accessguard.io"},
            headers=admin_headers,
        )

        assert resp.status_code == 409

    def test_cannot_delete_own_account(self, client, admin_headers, audit_records, user_by_name):
        admin = user_by_name("admin")

        resp = client.delete(f"{API}/users/{admin.id}", headers=admin_headers)

        assert resp.status_code == 400
        assert resp.json() == {"detail": "Cannot delete your own account"}
        records = audit_records("delete_user")
        assert [r.status for r in records] == ["failed"]
        assert records[0].details["status_code"] == 400

    def test_delete_other_user(self, client, admin_headers, user_by_name):
        employee_id = user_by_name("employee").id

        resp = client.delete(f"{API}/users/{employee_id}", headers=admin_headers)

        assert resp.status_code == 200
        assert resp.json() == {"message": "User deleted successfully"}
        assert client.get(f"{API}/users/{employee_id}", headers=admin_headers).status_code == 404

    def test_audit_history_outlives_deleted_user(
        self, client, admin_headers, employee_headers, audit_records, user_by_name
    ):
        employee_id = user_by_name("employee").id

        resp = client.delete(f"{API}/users/{employee_id}", headers=admin_headers)

        assert resp.status_code == 200
        assert employee_id in {r.user_id for r in audit_records("login")}


class TestRoles:
    def test_list_roles_by_level(self, client, manager_headers):
        resp = client.get(f"{API}/roles", headers=manager_headers)

        assert resp.status_code == 200
        assert [r["name"] for r in resp.json()["roles"]] == ["Admin", "Manager", "HR", "Employee"]

    def test_role_detail_lists_members(self, client, admin_headers, db_session):
        hr_role = db_session.query(Role).filter(Role.name == "HR").one()

        resp = client.get(f"{API}/roles/{hr_role.id}", headers=admin_headers)

        assert resp.status_code == 200
        assert [u["username"] for u in resp.json()["users"]] == ["hruser"]
        assert "create:users" in {p["key"] for p in resp.json()["permissions"]}

    def test_create_update_delete_role(self, client, admin_headers, db_session):
        read_reports = db_session.query(Permission).filter(Permission.name == "read:reports").one()

        created = client.post(
            f"{API}/roles",
            json={"name": "Auditor", "level": 30, "permission_ids": [str(read_reports.id)]},
            headers=admin_headers,
        )
        assert created.status_code == 201
        role_id = created.json()["id"]
        assert [p["key"] for p in created.json()["permissions"]] == ["read:reports"]

        updated = client.put(
            f"{API}/roles/{role_id}", json={"description": "Reads reports"}, headers=admin_headers
        )
        assert updated.status_code == 200
        assert updated.json()["description"] == "Reads reports"

        deleted = client.delete(f"{API}/roles/{role_id}", headers=admin_headers)
        assert deleted.status_code == 200

    def test_unknown_permission_id_rejects_update(self, client, admin_headers, db_session):
        hr_role = db_session.query(Role).filter(Role.name == "HR").one()
        before = sorted(p.name for p in hr_role.permissions)

        resp = client.put(
            f"{API}/roles/{hr_role.id}",
            json={"permission_ids": [str(uuid4())], "description": "Changed"},
            headers=admin_headers,
        )

        assert resp.status_code == 404
        assert resp.json() == {"detail": "Permission not found"}
        db_session.expire_all()
        assert sorted(p.name for p in hr_role.permissions) == before
        assert hr_role.description != "Changed"

    def test_duplicate_role_name(self, client, admin_headers):
        resp = client.post(f"{API}/roles", json={"name": "Admin"}, headers=admin_headers)

        assert resp.status_code == 409
        assert resp.json() == {"detail": "Role 'Admin' already exists"}

    def test_manager_cannot_create_roles(self, client, manager_headers):
        resp = client.post(f"{API}/roles", json={"name": "Shadow"}, headers=manager_headers)

        assert resp.status_code == 403
        assert resp.json()["required"] == ["create:roles"]


class TestPermissions:
    def test_list_permissions(self, client, admin_headers):
        resp = client.get(f"{API}/permissions", headers=admin_headers)

        assert resp.status_code == 200
        assert resp.json()["count"] == 15

    def test_create_permission_for_unknown_resource(self, client, admin_headers):
        resp = client.post(
            f"{API}/permissions",
            json={
                "name": "export:reports",
                "action": "export",
                "resource": "reports",
                "resource_id": "00000000-0000-0000-0000-000000000000",
            },
            headers=admin_headers,
        )

        assert resp.status_code == 404

    def test_new_permission_takes_effect_through_role(self, client, admin_headers, login, db_session):
        created = client.post(
            f"{API}/permissions",
            json={"name": "read:permissions-2", "action": "read", "resource": "permissions"},
            headers=admin_headers,
        )
        assert created.status_code == 201

        employee_role = db_session.query(Role).filter(Role.name == "Employee").one()
        ids = [str(p.id) for p in employee_role.permissions] + [created.json()["id"]]
        assert client.put(
            f"{API}/roles/{employee_role.id}", json={"permission_ids": ids}, headers=admin_headers
        ).status_code == 200

        employee_headers = login("employee", "Employee@123")
        assert client.get(f"{API}/permissions", headers=employee_headers).status_code == 200


class TestResources:
    def test_update_and_delete_resource(self, client, admin_headers):
        listing = client.get(f"{API}/resources", headers=admin_headers).json()
        reports = next(r for r in listing["resources"] if r["name"] == "reports")

        updated = client.put(
            f"{API}/resources/{reports['id']}", json={"is_active": False}, headers=admin_headers
        )
        assert updated.status_code == 200
        assert updated.json()["is_active"] is False

        assert client.delete(f"{API}/resources/{reports['id']}", headers=admin_headers).status_code == 200
        assert client.get(f"{API}/resources/{reports['id']}", headers=admin_headers).status_code == 404
