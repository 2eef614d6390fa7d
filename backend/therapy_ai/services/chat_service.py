from __future__ import annotations
from typing import Iterable, List

from therapy_ai.schemas import Child, ChatMessage, ChatSummary
from therapy_ai.store import KeyValueStore, chat_key
from therapy_ai.services.utils import gen_id, now_iso


def list_messages(store: KeyValueStore, child_id: str) -> List[ChatMessage]:
    return store.load_table(chat_key(child_id), ChatMessage)


def save_messages(store: KeyValueStore, child_id: str, messages: List[ChatMessage]) -> None:
    store.save_table(chat_key(child_id), messages)


def append_message(store: KeyValueStore, child_id: str, sender: str, text: str) -> ChatMessage:
    messages = list_messages(store, child_id)
    message = ChatMessage(id=gen_id(), sender=sender, text=text, ts=now_iso())
    messages.append(message)
    save_messages(store, child_id, messages)
    return message


def delete_messages(store: KeyValueStore, child_id: str) -> None:
    store.remove(chat_key(child_id))


def chat_summaries(store: KeyValueStore, children: Iterable[Child]) -> List[ChatSummary]:
    """Message count and last message for every child that has a conversation."""
    summaries = []
    for child in children:
        messages = list_messages(store, child.id)
        if not messages:
            continue
        summaries.append(ChatSummary(
            child=child, message_count=len(messages), last_message=messages[-1]
        ))
    return summaries
