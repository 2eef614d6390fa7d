from therapy_ai.config import LOGIN_PATH
from therapy_ai.services.chat_service import list_messages
from therapy_ai.services.child_service import list_children
from therapy_ai.services.user_service import find_user_by_email


def _login(client, email, password):
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_anonymous_is_redirected_to_login(client, seeded_store):
    for path in ("/admin/therapists", "/therapist/children", "/auth/me", "/"):
        resp = client.get(path, follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == LOGIN_PATH


def test_bad_credentials_return_401(client, seeded_store):
    resp = client.post("/auth/login", json={"email": "admin@demo.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password"


def test_admin_manages_therapists(client, seeded_store):
    body = _login(client, "admin@demo.com", "admin123")
    assert body["redirect_to"] == "/admin"
    assert "password" not in body["user"]

    resp = client.post("/admin/therapists", json={
        "name": "Priya Shah", "email": "priya@example.com", "password": "priya-pw",
    })
    assert resp.status_code == 201
    new_id = resp.json()["id"]
    assert resp.json()["createdAt"]

    dup = client.post("/admin/therapists", json={
        "name": "Priya Again", "email": "priya@example.com", "password": "x",
    })
    assert dup.status_code == 400

    resp = client.put(f"/admin/therapists/{new_id}", json={"name": "Priya S."})
    assert resp.status_code == 200 and resp.json()["name"] == "Priya S."
    assert client.put("/admin/therapists/missing", json={"name": "X"}).status_code == 404

    resp = client.post(f"/admin/therapists/{new_id}/reset-password")
    assert resp.status_code == 200
    new_password = resp.json()["password"]
    admin_id = body["user"]["id"]
    assert client.post(f"/admin/therapists/{admin_id}/reset-password").status_code == 404

    rows = client.get("/admin/therapists").json()
    assert len(rows) == 4
    assert next(r for r in rows if r["id"] == new_id)["clientCount"] == 0

    sarah = find_user_by_email(seeded_store, "therapist@demo.com")
    assert client.delete(f"/admin/therapists/{sarah.id}").status_code == 400
    assert client.delete(f"/admin/therapists/{new_id}").status_code == 204

    resp = client.post("/auth/login", json={"email": "priya@example.com", "password": new_password})
    assert resp.status_code == 401


def test_therapist_cannot_use_admin_routes(client, seeded_store):
    _login(client, "therapist@demo.com", "therapist123")
    resp = client.get("/admin/therapists", follow_redirects=False)
    assert resp.status_code == 303


def test_therapist_child_workspace_flow(client, seeded_store):
    body = _login(client, "therapist@demo.com", "therapist123")
    assert body["redirect_to"] == "/therapist"
    me = body["user"]["id"]

    assert len(client.get("/therapist/children").json()) == 3

    resp = client.post("/therapist/children", json={
        "name": "Noah Green", "year_of_birth": 2019, "category": "Social",
        "concern": "Limited eye contact", "notes": "Loves trains",
    })
    assert resp.status_code == 201
    child = resp.json()
    assert child["therapistId"] == me
    assert child["dob"] == "2019-01-01"

    resp = client.put(f"/children/{child['id']}", json={
        "name": "Noah Green", "year_of_birth": 2018, "concern": "Limited eye contact",
    })
    assert resp.status_code == 200
    assert resp.json()["dob"] == "2018-01-01"
    assert resp.json()["ageYears"] == child["ageYears"] + 1

    resp = client.post(f"/children/{child['id']}/chat", json={"message": "  Any speech tips?  "})
    assert resp.status_code == 201
    assert resp.json()["from"] == "therapist"
    assert resp.json()["text"] == "Any speech tips?"

    history = client.get(f"/children/{child['id']}/chat").json()["history"]
    assert [m["from"] for m in history] == ["therapist", "ai"]
    assert history[1]["text"].startswith("For articulation work with Noah Green")

    assert client.post(f"/children/{child['id']}/chat", json={"message": "   "}).status_code == 422

    resp = client.post(f"/children/{child['id']}/regenerate/strategies")
    assert resp.status_code == 200
    assert len(resp.json()["strategies"]) == 3
    assert client.post(f"/children/{child['id']}/regenerate/goals").status_code == 422

    summaries = client.get("/therapist/chat-history").json()
    assert {s["child"]["name"] for s in summaries} >= {"Noah Green", "Emma Johnson"}

    assert client.delete(f"/children/{child['id']}").status_code == 204
    assert client.get(f"/children/{child['id']}").status_code == 404
    assert list_messages(seeded_store, child["id"]) == []


def test_therapist_cannot_open_other_therapists_child(client, seeded_store):
    sarah = find_user_by_email(seeded_store, "therapist@demo.com")
    foreign = next(c for c in list_children(seeded_store) if c.therapist_id != sarah.id)

    _login(client, "therapist@demo.com", "therapist123")
    assert client.get(f"/children/{foreign.id}").status_code == 403
    assert client.post(f"/children/{foreign.id}/chat", json={"message": "hi"}).status_code == 403


def test_logout_then_login_page(client, seeded_store):
    _login(client, "admin@demo.com", "admin123")
    resp = client.get("/auth/login", follow_redirects=False)
    assert resp.status_code == 303 and resp.headers["location"] == "/admin"

    assert client.post("/auth/logout").json() == {"redirect_to": LOGIN_PATH}
    assert client.get("/auth/login").json() == {"detail": "Login required"}
