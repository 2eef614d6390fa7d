# backend/therapy_ai/services/therapist_service.py
from __future__ import annotations
import logging
from typing import Any, List, Mapping, Optional

from therapy_ai.schemas import Therapist, TherapistCreate, TherapistRow, TherapistUpdate
from therapy_ai.store import KeyValueStore, THERAPISTS_KEY
from therapy_ai.services import user_service
from therapy_ai.services.child_service import list_children, list_children_by_therapist
from therapy_ai.services.results import OpResult
from therapy_ai.services.utils import gen_id, generate_random_password, now_iso

logger = logging.getLogger(__name__)


# --- therapist table --------------------------------------------------------

def list_therapists(store: KeyValueStore) -> List[Therapist]:
    return store.load_table(THERAPISTS_KEY, Therapist)


def save_therapists(store: KeyValueStore, therapists: List[Therapist]) -> None:
    store.save_table(THERAPISTS_KEY, therapists)


def get_therapist(store: KeyValueStore, therapist_id: str) -> Optional[Therapist]:
    return next((t for t in list_therapists(store) if t.id == therapist_id), None)


def add_therapist(store: KeyValueStore, attrs: Mapping[str, Any]) -> Therapist:
    """Append a therapist record only. The paired user is not created here."""
    therapists = list_therapists(store)
    data = dict(attrs)
    data["id"] = gen_id()
    data["created_at"] = now_iso()
    therapist = Therapist.model_validate(data)
    therapists.append(therapist)
    save_therapists(store, therapists)
    return therapist


def update_therapist(store: KeyValueStore, therapist_id: str, changes: Mapping[str, Any]) -> OpResult:
    therapists = list_therapists(store)
    for i, therapist in enumerate(therapists):
        if therapist.id == therapist_id:
            therapists[i] = Therapist.model_validate({**therapist.model_dump(), **dict(changes)})
            save_therapists(store, therapists)
            return OpResult.success(therapists[i])
    return OpResult.not_found(f"Therapist {therapist_id} not found")


def delete_therapist(store: KeyValueStore, therapist_id: str) -> None:
    """Remove the therapist record only; its user and children are left alone."""
    therapists = list_therapists(store)
    save_therapists(store, [t for t in therapists if t.id != therapist_id])


def list_therapist_rows(store: KeyValueStore) -> List[TherapistRow]:
    children = list_children(store)
    rows = []
    for therapist in list_therapists(store):
        count = sum(1 for c in children if c.therapist_id == therapist.id)
        rows.append(TherapistRow(**therapist.model_dump(), client_count=count))
    return rows


# --- therapist account (therapist + paired user) ----------------------------

def create_therapist_account(store: KeyValueStore, data: TherapistCreate) -> OpResult:
    if user_service.find_user_by_email(store, data.email):
        return OpResult.invalid("A user with this email already exists")

    with store.atomic():
        therapist = add_therapist(store, {"name": data.name, "email": data.email})
        user_service.add_user(store, {
            "id": therapist.id,
            "role": "therapist",
            "name": data.name,
            "email": data.email,
            "password": data.password,
        })
    logger.info("Created therapist account %s <%s>", therapist.id, therapist.email)
    return OpResult.success(therapist)


def edit_therapist_account(store: KeyValueStore, therapist_id: str, changes: TherapistUpdate) -> OpResult:
    update_data = changes.model_dump(exclude_unset=True, exclude_none=True)

    new_email = update_data.get("email")
    if new_email:
        owner = user_service.find_user_by_email(store, new_email)
        if owner and owner.id != therapist_id:
            return OpResult.invalid("A user with this email already exists")

    with store.atomic():
        result = update_therapist(store, therapist_id, update_data)
        if not result.ok:
            return result
        # paired user may be missing in hand-edited data; the therapist record still wins
        user_service.update_user(store, therapist_id, update_data)
    return result


def reset_therapist_password(store: KeyValueStore, therapist_id: str) -> OpResult:
    if get_therapist(store, therapist_id) is None:
        return OpResult.not_found("Unable to reset password")

    new_password = generate_random_password()
    result = user_service.update_user(store, therapist_id, {"password": new_password})
    if not result.ok:
        return OpResult.not_found("Unable to reset password")
    logger.info("Password reset for therapist %s", therapist_id)
    return OpResult.success(new_password)


def remove_therapist_account(store: KeyValueStore, therapist_id: str) -> OpResult:
    therapist = get_therapist(store, therapist_id)
    if therapist is None:
        return OpResult.not_found(f"Therapist {therapist_id} not found")

    client_count = len(list_children_by_therapist(store, therapist_id))
    if client_count > 0:
        return OpResult.invalid(
            f"Cannot delete {therapist.name}. This therapist has {client_count} "
            f"assigned client{'' if client_count == 1 else 's'}."
        )

    with store.atomic():
        delete_therapist(store, therapist_id)
        user_service.delete_user(store, therapist_id)
    logger.info("Removed therapist account %s", therapist_id)
    return OpResult.success(therapist)
