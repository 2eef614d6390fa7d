from __future__ import annotations
import logging
from typing import Callable, Optional

from fastapi import Depends
from pydantic import BaseModel

from therapy_ai.config import ADMIN_DASHBOARD_PATH, LOGIN_PATH, THERAPIST_DASHBOARD_PATH
from therapy_ai.schemas import User
from therapy_ai.store import KeyValueStore, CURRENT_USER_KEY, get_store
from therapy_ai.services import user_service
from therapy_ai.services.child_service import get_child
from therapy_ai.services.results import InvalidCredentialsError

logger = logging.getLogger(__name__)

Navigate = Callable[[str], None]


class SessionContext(BaseModel):
    """
    Who is calling. Passed explicitly to guards and services instead of
    being read from a global.
    """
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> Optional[str]:
        return self.user.role if self.user else None

    @property
    def state(self) -> str:
        return self.role or "anonymous"


ANONYMOUS = SessionContext()


def load_session(store: KeyValueStore) -> SessionContext:
    return SessionContext(user=store.load_record(CURRENT_USER_KEY, User))


def login(store: KeyValueStore, email: str, password: str) -> SessionContext:
    user = next(
        (u for u in user_service.list_users(store) if u.email == email and u.password == password),
        None,
    )
    if user is None:
        logger.warning("Failed login for %s", email)
        raise InvalidCredentialsError()

    store.save_record(CURRENT_USER_KEY, user)
    logger.info("User %s logged in as %s", user.id, user.role)
    return SessionContext(user=user)


def logout(store: KeyValueStore) -> SessionContext:
    store.remove(CURRENT_USER_KEY)
    return ANONYMOUS


# --- guards -----------------------------------------------------------------
# Guards never raise: a failed guard navigates to the login page and returns
# False, and the caller must stop.

def _guard(ctx: SessionContext, navigate: Navigate, allowed: Optional[str]) -> bool:
    if ctx.user is None or (allowed is not None and ctx.user.role != allowed):
        logger.info("Guard rejected %s session (needs %s)", ctx.state, allowed or "login")
        navigate(LOGIN_PATH)
        return False
    return True


def require_admin(ctx: SessionContext, navigate: Navigate) -> bool:
    return _guard(ctx, navigate, "admin")


def require_therapist(ctx: SessionContext, navigate: Navigate) -> bool:
    return _guard(ctx, navigate, "therapist")


def require_auth(ctx: SessionContext, navigate: Navigate) -> bool:
    return _guard(ctx, navigate, None)


def can_access_child(ctx: SessionContext, store: KeyValueStore, child_id: str) -> bool:
    if ctx.user is None:
        return False
    if ctx.user.role == "admin":
        return True
    if ctx.user.role == "therapist":
        child = get_child(store, child_id)
        return child is not None and child.therapist_id == ctx.user.id
    return False


def dashboard_path(ctx: SessionContext) -> str:
    if ctx.role == "admin":
        return ADMIN_DASHBOARD_PATH
    if ctx.role == "therapist":
        return THERAPIST_DASHBOARD_PATH
    return LOGIN_PATH


def get_session_context(store: KeyValueStore = Depends(get_store)) -> SessionContext:
    """FastAPI dependency: the session stored under ``current_user``."""
    return load_session(store)
