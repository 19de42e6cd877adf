from accessguard.core.security import verify_password
from accessguard.db.seed import seed_database
from accessguard.models import Permission, Resource, Role, User
from accessguard.services.permissions import aggregate_permissions


def test_seed_creates_default_data(db_session):
    assert seed_database(db_session) is True

    assert db_session.query(Resource).count() == 7
    assert db_session.query(Permission).count() == 15
    assert db_session.query(Role).count() == 4
    assert db_session.query(User).count() == 4


def test_seeded_role_permissions(db_session):
    seed_database(db_session)
    roles = {role.name: role for role in db_session.query(Role).all()}

    assert len(roles["Admin"].permissions) == 15
    assert {p.name for p in roles["Manager"].permissions} == {
        "read:users",
        "update:users",
        "read:roles",
        "read:audit",
        "read:dashboard",
        "read:reports",
    }
    assert {p.name for p in roles["Employee"].permissions} == {"read:users", "read:dashboard"}
    assert roles["Admin"].level > roles["Manager"].level > roles["HR"].level > roles["Employee"].level


def test_seeded_users_can_log_in(db_session):
    seed_database(db_session)
    hr = db_session.query(User).filter(User.username == "hruser").one()

    assert verify_password("HR@123", hr.password_hash)
    assert [role.name for role in hr.roles] == ["HR"]
    assert "create:users" in aggregate_permissions(hr)


def test_permissions_link_to_resources(db_session):
    seed_database(db_session)
    permission = db_session.query(Permission).filter(Permission.name == "read:audit").one()

    assert permission.resource_detail.name == "audit"


def test_seed_is_skipped_when_roles_exist(db_session):
    seed_database(db_session)

    assert seed_database(db_session) is False
    assert db_session.query(User).count() == 4
