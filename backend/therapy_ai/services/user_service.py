from __future__ import annotations
from typing import List, Mapping, Optional, Any

from therapy_ai.schemas import User
from therapy_ai.store import KeyValueStore, USERS_KEY
from therapy_ai.services.results import OpResult
from therapy_ai.services.utils import gen_id, now_iso


def list_users(store: KeyValueStore) -> List[User]:
    return store.load_table(USERS_KEY, User)


def save_users(store: KeyValueStore, users: List[User]) -> None:
    store.save_table(USERS_KEY, users)


def get_user(store: KeyValueStore, user_id: str) -> Optional[User]:
    return next((u for u in list_users(store) if u.id == user_id), None)


def find_user_by_email(store: KeyValueStore, email: str) -> Optional[User]:
    return next((u for u in list_users(store) if u.email == email), None)


def add_user(store: KeyValueStore, attrs: Mapping[str, Any]) -> User:
    """
    Append a user. ``id`` and ``created_at`` are generated unless given
    (a therapist's user reuses the therapist id).
    """
    users = list_users(store)
    data = dict(attrs)
    data.setdefault("id", gen_id())
    data.setdefault("created_at", now_iso())
    user = User.model_validate(data)
    users.append(user)
    save_users(store, users)
    return user


def update_user(store: KeyValueStore, user_id: str, changes: Mapping[str, Any]) -> OpResult:
    users = list_users(store)
    for i, user in enumerate(users):
        if user.id == user_id:
            users[i] = User.model_validate({**user.model_dump(), **dict(changes)})
            save_users(store, users)
            return OpResult.success(users[i])
    return OpResult.not_found(f"User {user_id} not found")


def delete_user(store: KeyValueStore, user_id: str) -> None:
    users = list_users(store)
    save_users(store, [u for u in users if u.id != user_id])
