# backend/therapy_ai/store.py
from __future__ import annotations
import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import Engine, select
from sqlalchemy.orm import Session, sessionmaker

from therapy_ai.db import SessionLocal
from therapy_ai.models import StoreEntry

logger = logging.getLogger(__name__)

USERS_KEY = "users"
THERAPISTS_KEY = "therapists"
CHILDREN_KEY = "children"
CURRENT_USER_KEY = "current_user"
CHAT_PREFIX = "chats:"

RecordT = TypeVar("RecordT", bound=BaseModel)


def chat_key(child_id: str) -> str:
    return f"{CHAT_PREFIX}{child_id}"


class KeyValueStore:
    """
    Synchronous key-value store, one JSON document per key.

    Reads deserialize the whole value and writes overwrite it. Each write is
    committed right away unless it happens inside ``atomic()``, in which case
    the block commits once at the end or rolls back entirely.
    """

    def __init__(self, session: Session):
        self.session = session
        self._atomic_depth = 0

    # --- raw access -------------------------------------------------------

    def get(self, key: str) -> Any:
        entry = self.session.get(StoreEntry, key, populate_existing=True)
        if entry is None:
            return None
        # no defensive parsing: corrupted JSON fails the whole read
        return json.loads(entry.value)

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        entry = self.session.get(StoreEntry, key, populate_existing=True)
        if entry is None:
            self.session.add(StoreEntry(key=key, value=payload))
        else:
            entry.value = payload
        self._write_done()

    def remove(self, key: str) -> None:
        entry = self.session.get(StoreEntry, key, populate_existing=True)
        if entry is None:
            return
        self.session.delete(entry)
        self._write_done()

    def keys(self, prefix: str = "") -> List[str]:
        q = select(StoreEntry.key).order_by(StoreEntry.key)
        if prefix:
            q = q.where(StoreEntry.key.startswith(prefix))
        return list(self.session.execute(q).scalars())

    @contextmanager
    def atomic(self) -> Iterator["KeyValueStore"]:
        self._atomic_depth += 1
        try:
            yield self
        except Exception:
            self._atomic_depth -= 1
            if self._atomic_depth == 0:
                logger.warning("Rolling back store transaction")
                self.session.rollback()
            raise
        else:
            self._atomic_depth -= 1
            if self._atomic_depth == 0:
                self.session.commit()

    def _write_done(self) -> None:
        self.session.flush()
        if self._atomic_depth == 0:
            self.session.commit()

    # --- typed tables -----------------------------------------------------

    def load_table(self, key: str, model: Type[RecordT]) -> List[RecordT]:
        rows = self.get(key) or []
        return [model.model_validate(row) for row in rows]

    def save_table(self, key: str, records: Sequence[BaseModel]) -> None:
        self.set(key, [r.model_dump(mode="json", by_alias=True) for r in records])

    def load_record(self, key: str, model: Type[RecordT]) -> Optional[RecordT]:
        raw = self.get(key)
        if raw is None:
            return None
        return model.model_validate(raw)

    def save_record(self, key: str, record: BaseModel) -> None:
        self.set(key, record.model_dump(mode="json", by_alias=True))


_session_factory: sessionmaker = SessionLocal


def configure_store(engine: Engine) -> None:
    """Point every store opened from now on at ``engine``."""
    global _session_factory
    _session_factory = sessionmaker(engine, expire_on_commit=False)


def store_engine() -> Engine:
    return _session_factory.kw["bind"]


@contextmanager
def open_store() -> Iterator[KeyValueStore]:
    with _session_factory() as session:
        yield KeyValueStore(session)


def get_store():
    with open_store() as store:
        yield store
