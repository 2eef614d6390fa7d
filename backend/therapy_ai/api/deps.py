# backend/therapy_ai/api/deps.py
from __future__ import annotations
from typing import Optional

from fastapi import Depends, HTTPException, status

from therapy_ai.schemas import Child
from therapy_ai.store import KeyValueStore, get_store
from therapy_ai.services.auth_service import (
    SessionContext, can_access_child, get_session_context,
    require_admin, require_auth, require_therapist,
)
from therapy_ai.services.child_service import get_child


class GuardRedirect(Exception):
    """Raised by route dependencies when a guard navigated away."""

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


class Navigator:
    def __init__(self):
        self.location: Optional[str] = None

    def __call__(self, path: str) -> None:
        self.location = path


def _enforce(guard, ctx: SessionContext) -> SessionContext:
    navigate = Navigator()
    if not guard(ctx, navigate):
        raise GuardRedirect(navigate.location)
    return ctx


def admin_session(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
    return _enforce(require_admin, ctx)


def therapist_session(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
    return _enforce(require_therapist, ctx)


def authenticated_session(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
    return _enforce(require_auth, ctx)


def workspace_child(
    child_id: str,
    ctx: SessionContext = Depends(therapist_session),
    store: KeyValueStore = Depends(get_store),
) -> Child:
    """Child opened in the workspace, checked against the session."""
    child = get_child(store, child_id)
    if child is None:
        raise HTTPException(status_code=404, detail="Child not found")
    if not can_access_child(ctx, store, child_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have access to this child",
        )
    return child

