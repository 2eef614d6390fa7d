from therapy_ai.services.chat_service import (
    append_message, chat_summaries, delete_messages, list_messages,
)


def test_list_is_empty_without_log(store):
    assert list_messages(store, "nobody") == []


def test_append_keeps_order(store, child):
    first = append_message(store, child.id, "therapist", "How do I start?")
    second = append_message(store, child.id, "ai", "Start small.")

    messages = list_messages(store, child.id)
    assert [m.id for m in messages] == [first.id, second.id]
    assert [m.sender for m in messages] == ["therapist", "ai"]
    assert messages[1].text == "Start small."


def test_delete_messages(store, child):
    append_message(store, child.id, "therapist", "hi")
    delete_messages(store, child.id)
    assert list_messages(store, child.id) == []


def test_summaries_skip_children_without_messages(seeded_store):
    from therapy_ai.services.child_service import list_children

    children = list_children(seeded_store)
    summaries = chat_summaries(seeded_store, children)

    assert len(summaries) == 4
    emma = next(s for s in summaries if s.child.name == "Emma Johnson")
    assert emma.message_count == 10
    assert emma.last_message.sender == "ai"
