import pytest

from therapy_ai.config import ADMIN_DASHBOARD_PATH, LOGIN_PATH, THERAPIST_DASHBOARD_PATH
from therapy_ai.services.auth_service import (
    ANONYMOUS, can_access_child, dashboard_path, load_session, login, logout,
    require_admin, require_auth, require_therapist,
)
from therapy_ai.services.results import InvalidCredentialsError
from therapy_ai.services.user_service import find_user_by_email


class RecordingNavigator:
    def __init__(self):
        self.visited = []

    def __call__(self, path):
        self.visited.append(path)


def test_login_sets_current_user(seeded_store):
    ctx = login(seeded_store, "admin@demo.com", "admin123")

    assert ctx.role == "admin"
    assert load_session(seeded_store).user == ctx.user


@pytest.mark.parametrize("email,password", [
    ("admin@demo.com", "wrong"),
    ("ADMIN@demo.com", "admin123"),
    ("nobody@demo.com", "admin123"),
])
def test_login_mismatch_fails_without_session(seeded_store, email, password):
    with pytest.raises(InvalidCredentialsError, match="Invalid email or password"):
        login(seeded_store, email, password)
    assert load_session(seeded_store).user is None


def test_logout_clears_session(seeded_store):
    login(seeded_store, "therapist@demo.com", "therapist123")
    assert logout(seeded_store) == ANONYMOUS
    assert load_session(seeded_store).state == "anonymous"


def test_guards_navigate_to_login_when_unsatisfied(seeded_store):
    therapist_ctx = login(seeded_store, "therapist@demo.com", "therapist123")
    nav = RecordingNavigator()

    assert require_therapist(therapist_ctx, nav) is True
    assert require_auth(therapist_ctx, nav) is True
    assert nav.visited == []

    assert require_admin(therapist_ctx, nav) is False
    assert require_auth(ANONYMOUS, nav) is False
    assert require_therapist(ANONYMOUS, nav) is False
    assert nav.visited == [LOGIN_PATH] * 3


def test_can_access_child(seeded_store):
    from therapy_ai.services.child_service import list_children

    sarah = find_user_by_email(seeded_store, "therapist@demo.com")
    own = next(c for c in list_children(seeded_store) if c.therapist_id == sarah.id)
    foreign = next(c for c in list_children(seeded_store) if c.therapist_id != sarah.id)

    admin_ctx = login(seeded_store, "admin@demo.com", "admin123")
    sarah_ctx = login(seeded_store, "therapist@demo.com", "therapist123")

    assert can_access_child(admin_ctx, seeded_store, foreign.id)
    assert can_access_child(sarah_ctx, seeded_store, own.id)
    assert not can_access_child(sarah_ctx, seeded_store, foreign.id)
    assert not can_access_child(sarah_ctx, seeded_store, "missing")
    assert not can_access_child(ANONYMOUS, seeded_store, own.id)


def test_dashboard_path_by_role(seeded_store):
    assert dashboard_path(ANONYMOUS) == LOGIN_PATH
    assert dashboard_path(login(seeded_store, "admin@demo.com", "admin123")) == ADMIN_DASHBOARD_PATH
    assert dashboard_path(login(seeded_store, "michael.chen@demo.com", "therapist456")) == THERAPIST_DASHBOARD_PATH
