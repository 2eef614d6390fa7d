# backend/therapy_ai/api/routers/children.py
from __future__ import annotations
import logging
import time
from typing import Literal

from fastapi import APIRouter, BackgroundTasks, Depends, status

from therapy_ai import config
from therapy_ai.store import KeyValueStore, get_store, open_store
from therapy_ai.api.deps import workspace_child
from therapy_ai.schemas import ChatHistoryResp, ChatMessage, ChatSendReq, Child, ChildForm
from therapy_ai.services.assistant_replies import generate_reply, pick_suggestions
from therapy_ai.services.chat_service import append_message, list_messages
from therapy_ai.services.child_service import delete_child, get_child, update_child

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/children", tags=["children"])


@router.get("/{child_id}", response_model=Child)
def get_child_workspace(child: Child = Depends(workspace_child)):
    return child


@router.put("/{child_id}", response_model=Child)
def edit_child(
    form: ChildForm,
    child: Child = Depends(workspace_child),
    store: KeyValueStore = Depends(get_store),
):
    changes = form.to_child_update().model_dump(exclude_unset=True)
    return update_child(store, child.id, changes).unwrap()


@router.delete("/{child_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_child(child: Child = Depends(workspace_child), store: KeyValueStore = Depends(get_store)):
    """Deletes the child together with its whole chat history."""
    delete_child(store, child.id)
    return


@router.post("/{child_id}/regenerate/{kind}", response_model=Child)
def regenerate_suggestions(
    kind: Literal["milestones", "strategies"],
    child: Child = Depends(workspace_child),
    store: KeyValueStore = Depends(get_store),
):
    return update_child(store, child.id, {kind: pick_suggestions(kind)}).unwrap()


# --- assistant chat ---------------------------------------------------------

def deliver_ai_reply(child_id: str, message: str) -> None:
    """Background task: answer a therapist message after a short pause."""
    time.sleep(config.AI_REPLY_DELAY_S)
    with open_store() as store:
        child = get_child(store, child_id)
        if child is None:
            # deleted while the reply was pending
            logger.info("Dropping assistant reply for deleted child %s", child_id)
            return
        append_message(store, child_id, "ai", generate_reply(message, child))


@router.get("/{child_id}/chat", response_model=ChatHistoryResp)
def get_chat_history(child: Child = Depends(workspace_child), store: KeyValueStore = Depends(get_store)):
    return ChatHistoryResp(child_id=child.id, history=list_messages(store, child.id))


@router.post("/{child_id}/chat", response_model=ChatMessage, status_code=status.HTTP_201_CREATED)
def send_chat_message(
    req: ChatSendReq,
    background_tasks: BackgroundTasks,
    child: Child = Depends(workspace_child),
    store: KeyValueStore = Depends(get_store),
):
    message = append_message(store, child.id, "therapist", req.message)
    background_tasks.add_task(deliver_ai_reply, child.id, req.message)
    return message
