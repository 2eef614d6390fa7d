from typing import List

from fastapi import APIRouter, Depends, status

from therapy_ai.store import KeyValueStore, get_store
from therapy_ai.api.deps import therapist_session
from therapy_ai.schemas import Child, ChildForm, ChatSummary
from therapy_ai.services.auth_service import SessionContext
from therapy_ai.services.chat_service import chat_summaries
from therapy_ai.services.child_service import add_child, list_children_by_therapist

router = APIRouter(prefix="/therapist", tags=["therapist"])


@router.get("", response_model=List[Child])
@router.get("/children", response_model=List[Child])
def my_children(
    ctx: SessionContext = Depends(therapist_session),
    store: KeyValueStore = Depends(get_store),
):
    return list_children_by_therapist(store, ctx.user.id)


@router.post("/children", response_model=Child, status_code=status.HTTP_201_CREATED)
def create_child(
    form: ChildForm,
    ctx: SessionContext = Depends(therapist_session),
    store: KeyValueStore = Depends(get_store),
):
    # owner always comes from the session
    return add_child(store, ctx.user.id, form.to_child_create())


@router.get("/chat-history", response_model=List[ChatSummary])
def chat_history(
    ctx: SessionContext = Depends(therapist_session),
    store: KeyValueStore = Depends(get_store),
):
    """Children of the therapist that have at least one chat message."""
    return chat_summaries(store, list_children_by_therapist(store, ctx.user.id))
