# backend/therapy_ai/services/child_service.py
from __future__ import annotations
import logging
from typing import Any, List, Mapping, Optional

from therapy_ai.schemas import Child, ChildCreate
from therapy_ai.store import KeyValueStore, CHILDREN_KEY
from therapy_ai.services.chat_service import delete_messages
from therapy_ai.services.results import OpResult
from therapy_ai.services.utils import calc_age_years, gen_id, now_iso

logger = logging.getLogger(__name__)


def list_children(store: KeyValueStore) -> List[Child]:
    return store.load_table(CHILDREN_KEY, Child)


def save_children(store: KeyValueStore, children: List[Child]) -> None:
    store.save_table(CHILDREN_KEY, children)


def get_child(store: KeyValueStore, child_id: str) -> Optional[Child]:
    return next((c for c in list_children(store) if c.id == child_id), None)


def list_children_by_therapist(store: KeyValueStore, therapist_id: str) -> List[Child]:
    return [c for c in list_children(store) if c.therapist_id == therapist_id]


def add_child(store: KeyValueStore, therapist_id: str, data: ChildCreate) -> Child:
    """
    Create a child for ``therapist_id``.
    The therapist id must come from the caller's session, never from user input.
    """
    children = list_children(store)
    child = Child(
        id=gen_id(),
        therapist_id=therapist_id,
        age_years=calc_age_years(data.dob),
        updated_at=now_iso(),
        **data.model_dump(),
    )
    children.append(child)
    save_children(store, children)
    return child


def update_child(store: KeyValueStore, child_id: str, changes: Mapping[str, Any]) -> OpResult:
    changes = dict(changes)
    # ownership and derived fields are not caller-editable
    for key in ("id", "therapist_id", "age_years", "updated_at"):
        changes.pop(key, None)

    children = list_children(store)
    for i, child in enumerate(children):
        if child.id != child_id:
            continue
        merged = {**child.model_dump(), **changes}
        if "dob" in changes:
            merged["age_years"] = calc_age_years(changes["dob"])
        merged["updated_at"] = now_iso()
        children[i] = Child.model_validate(merged)
        save_children(store, children)
        return OpResult.success(children[i])
    return OpResult.not_found(f"Child {child_id} not found")


def delete_child(store: KeyValueStore, child_id: str) -> None:
    """Remove the child and its chat log together."""
    children = list_children(store)
    remaining = [c for c in children if c.id != child_id]
    with store.atomic():
        save_children(store, remaining)
        delete_messages(store, child_id)
    if len(remaining) < len(children):
        logger.info("Deleted child %s and its chat log", child_id)
