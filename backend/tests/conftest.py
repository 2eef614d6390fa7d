import pytest
from fastapi.testclient import TestClient

from therapy_ai import config
from therapy_ai.db import init_db, make_engine
from therapy_ai.main import app
from therapy_ai.schemas import ChildCreate, TherapistCreate
from therapy_ai.services.child_service import add_child
from therapy_ai.services.seed import seed_if_empty
from therapy_ai.services.therapist_service import create_therapist_account
from therapy_ai.store import configure_store, open_store


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    init_db(engine)
    configure_store(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    with open_store() as store:
        yield store


@pytest.fixture
def seeded_store(store):
    seed_if_empty(store)
    return store


@pytest.fixture
def therapist(store):
    return create_therapist_account(
        store, TherapistCreate(name="Nora Quinn", email="nora@example.com", password="pw-nora")
    ).unwrap()


@pytest.fixture
def child(store, therapist):
    return add_child(
        store,
        therapist.id,
        ChildCreate(name="Leo Brooks", dob="2019-05-20", category="Communication", concern="Lisp"),
    )


@pytest.fixture
def client(engine, monkeypatch):
    monkeypatch.setattr(config, "AI_REPLY_DELAY_S", 0)
    return TestClient(app)
