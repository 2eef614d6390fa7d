import pytest
from pydantic import ValidationError

from therapy_ai.schemas import TherapistCreate, TherapistUpdate
from therapy_ai.services import user_service
from therapy_ai.services.auth_service import login
from therapy_ai.services.results import InvalidOperationError, NotFoundError
from therapy_ai.services.therapist_service import (
    create_therapist_account, delete_therapist, edit_therapist_account, get_therapist,
    list_therapist_rows, list_therapists, remove_therapist_account, reset_therapist_password,
    update_therapist,
)


def test_account_creates_paired_user_with_same_id(store, therapist):
    user = user_service.get_user(store, therapist.id)

    assert user is not None
    assert user.role == "therapist"
    assert user.email == therapist.email
    assert user.password == "pw-nora"


def test_duplicate_email_is_rejected(store, therapist):
    result = create_therapist_account(
        store, TherapistCreate(name="Other Nora", email="nora@example.com", password="pw")
    )

    assert result.status == "invalid"
    assert "already exists" in result.error
    assert len(list_therapists(store)) == 1
    assert len(user_service.list_users(store)) == 1
    with pytest.raises(InvalidOperationError):
        result.unwrap()


def test_update_unknown_therapist_leaves_table_unchanged(store, therapist):
    before = store.get("therapists")
    result = update_therapist(store, "nonexistent-id", {"name": "Ghost"})

    assert result.is_not_found
    assert store.get("therapists") == before
    with pytest.raises(NotFoundError):
        result.unwrap()


def test_edit_account_mirrors_name_and_email_on_user(store, therapist):
    result = edit_therapist_account(
        store, therapist.id, TherapistUpdate(name="Nora Q. Quinn", email="nq@example.com")
    )

    assert result.ok
    assert get_therapist(store, therapist.id).email == "nq@example.com"
    user = user_service.get_user(store, therapist.id)
    assert (user.name, user.email) == ("Nora Q. Quinn", "nq@example.com")


def test_edit_account_rejects_email_of_another_user(store, therapist):
    other = create_therapist_account(
        store, TherapistCreate(name="Max", email="max@example.com", password="pw")
    ).unwrap()

    result = edit_therapist_account(store, other.id, TherapistUpdate(email="nora@example.com"))
    assert result.status == "invalid"
    assert get_therapist(store, other.id).email == "max@example.com"


def test_edit_unknown_account_is_not_found(store):
    assert edit_therapist_account(store, "missing", TherapistUpdate(name="X")).is_not_found


def test_reset_password_changes_login_password(store, therapist):
    new_password = reset_therapist_password(store, therapist.id).unwrap()

    assert new_password != "pw-nora"
    assert user_service.get_user(store, therapist.id).password == new_password
    assert reset_therapist_password(store, "missing").is_not_found


def test_remove_account_refused_while_children_assigned(store, therapist, child):
    result = remove_therapist_account(store, therapist.id)

    assert result.status == "invalid"
    assert "1 assigned client." in result.error
    assert get_therapist(store, therapist.id) is not None


def test_remove_account_deletes_therapist_and_user(store, therapist):
    assert remove_therapist_account(store, therapist.id).ok
    assert get_therapist(store, therapist.id) is None
    assert user_service.get_user(store, therapist.id) is None
    assert remove_therapist_account(store, therapist.id).is_not_found


def test_delete_therapist_record_alone_keeps_user(store, therapist):
    delete_therapist(store, therapist.id)
    assert get_therapist(store, therapist.id) is None
    assert user_service.get_user(store, therapist.id) is not None


def test_rows_count_clients(store, therapist, child):
    rows = list_therapist_rows(store)
    assert [(r.id, r.client_count) for r in rows] == [(therapist.id, 1)]


def test_reset_password_ignores_non_therapist_users(seeded_store):
    admin = user_service.find_user_by_email(seeded_store, "admin@demo.com")

    result = reset_therapist_password(seeded_store, admin.id)

    assert result.is_not_found
    assert user_service.get_user(seeded_store, admin.id).password == "admin123"


def test_account_email_is_stored_as_typed(store):
    therapist = create_therapist_account(
        store, TherapistCreate(name="Priya", email="Priya@Example.COM", password="pw")
    ).unwrap()

    assert therapist.email == "Priya@Example.COM"
    assert user_service.get_user(store, therapist.id).email == "Priya@Example.COM"
    assert login(store, "Priya@Example.COM", "pw").user.id == therapist.id


def test_account_email_must_be_well_formed():
    with pytest.raises(ValidationError):
        TherapistCreate(name="Priya", email="not-an-email", password="pw")
    with pytest.raises(ValidationError):
        TherapistUpdate(email="priya@")
