from flatchat.main import app
from flatchat.routers.dependencies import get_conversation_service, get_user_service


def register(client, email, password):
    return client.post("/register", json={"email": email, "password": password})


def test_register_and_login(client, read_users):
    assert register(client, "a@x.com", "pw1").status_code == 201
    second = register(client, "a@x.com", "pw1")
    assert second.status_code == 409
    assert "error" in second.json()
    assert len(read_users()) == 1

    ok = client.post("/login", json={"email": "a@x.com", "password": "pw1"})
    assert ok.status_code == 200
    assert ok.json()["userEmail"] == "a@x.com"
    assert client.post("/login", json={"email": "a@x.com", "password": "bad"}).status_code == 401
    assert client.post("/login", json={"email": "a@x.com"}).status_code == 400


def test_register_requires_both_fields(client):
    response = client.post("/register", json={"email": "a@x.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Email and password are required."}


def test_malformed_body_answers_400(client):
    response = client.post("/register", content="not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_get_user_hides_password(client):
    register(client, "a@x.com", "pw1")

    body = client.get("/user/a@x.com").json()
    assert body["email"] == "a@x.com"
    assert "password" not in body
    assert client.get("/user/ghost@x.com").status_code == 404


def test_put_user_replaces_fields(client, read_users):
    register(client, "a@x.com", "pw1")
    conversations = [{"id": "chat_1", "displayName": "Kept", "isGroup": False, "participants": ["a@x.com"]}]

    response = client.put("/user/a@x.com", json={"contacts": [{"name": "B", "email": "b@x.com"}], "conversations": conversations})

    assert response.status_code == 200
    stored = read_users()[0]
    assert stored["contacts"] == [{"name": "B", "email": "b@x.com"}]
    assert [c["id"] for c in stored["conversations"]] == ["chat_1"]
    assert client.put("/user/ghost@x.com", json={"contacts": []}).status_code == 404


def test_end_to_end_chat_and_message(client):
    register(client, "a@x.com", "pw1")
    register(client, "b@x.com", "pw2")

    created = client.post("/chats", json={"userId": "a@x.com", "name": "B", "contactEmail": "b@x.com"})
    assert created.status_code == 201
    chat_id = created.json()["newChat"]["id"]

    a_convs = client.get("/user/a@x.com").json()["conversations"]
    b_convs = client.get("/user/b@x.com").json()["conversations"]
    assert len(a_convs) == 1 and len(b_convs) == 1
    assert a_convs[0]["participants"] == ["a@x.com", "b@x.com"]
    assert b_convs[0]["id"] == chat_id

    sent = client.post("/messages", json={"conversationId": chat_id, "senderEmail": "a@x.com", "content": "hi"})
    assert sent.status_code == 201
    assert sent.json()["deliveredCopies"] == 2

    a_conv = client.get("/user/a@x.com").json()["conversations"][0]
    b_conv = client.get("/user/b@x.com").json()["conversations"][0]
    assert a_conv["lastMessagePreview"] == b_conv["lastMessagePreview"] == "hi"
    assert a_conv["messages"] == b_conv["messages"]


def test_duplicate_chat_conflicts(client):
    register(client, "a@x.com", "pw1")
    register(client, "b@x.com", "pw2")
    payload = {"userId": "a@x.com", "name": "B", "identifier": "b@x.com"}

    assert client.post("/chats", json=payload).status_code == 201
    assert client.post("/chats", json=payload).status_code == 409


def test_chat_validation_and_unknown_contact(client):
    register(client, "a@x.com", "pw1")

    assert client.post("/chats", json={"userId": "a@x.com", "name": "B"}).status_code == 400
    assert client.post("/chats", json={"userId": "a@x.com", "name": "B", "contactEmail": "ghost@x.com"}).status_code == 404


def test_group_creation(client, read_users):
    register(client, "a@x.com", "pw1")
    register(client, "b@x.com", "pw2")

    created = client.post(
        "/groups",
        json={"userId": "a@x.com", "name": "Trip", "members": ["b@x.com", "ghost@x.com"], "endDate": "2026-12-01"},
    )

    assert created.status_code == 201
    group_id = created.json()["newGroup"]["id"]
    holders = [u["email"] for u in read_users() if any(c["id"] == group_id for c in u["conversations"])]
    assert holders == ["a@x.com", "b@x.com"]

    bad = client.post("/groups", json={"userId": "a@x.com", "name": "Trip", "members": "b@x.com", "endDate": "x"})
    assert bad.status_code == 400
    missing = client.post("/groups", json={"userId": "ghost@x.com", "name": "T", "members": ["a@x.com"], "endDate": "x"})
    assert missing.status_code == 404


def test_add_contact_by_email(client, read_users):
    register(client, "a@x.com", "pw1")
    register(client, "b@x.com", "pw2")
    payload = {"adderEmail": "a@x.com", "contactEmail": "b@x.com", "contactName": "Bobby"}

    response = client.post("/contacts/add-by-email", json=payload)

    assert response.status_code == 201
    assert response.json()["newChat"]["displayName"] == "Bobby"
    assert client.post("/contacts/add-by-email", json=payload).status_code == 409
    self_add = {"adderEmail": "a@x.com", "contactEmail": "a@x.com", "contactName": "Me"}
    assert client.post("/contacts/add-by-email", json=self_add).status_code == 400


def test_message_accepts_legacy_message_object(client, store):
    register(client, "a@x.com", "pw1")
    register(client, "b@x.com", "pw2")
    chat_id = client.post("/chats", json={"userId": "a@x.com", "name": "B", "contactEmail": "b@x.com"}).json()["newChat"]["id"]

    response = client.post("/messages", json={"conversationId": chat_id, "message": {"text": "yo", "sender": "b@x.com"}})

    assert response.status_code == 201
    new_message = response.json()["newMessage"]
    assert new_message["content"] == "yo"
    assert new_message["sender"] == "b@x.com"


def test_message_errors(client, store):
    register(client, "a@x.com", "pw1")

    assert client.post("/messages", json={"conversationId": "chat_x"}).status_code == 400
    assert client.post("/messages", json={"conversationId": "chat_x", "content": "hi"}).status_code == 404


def test_corrupt_store_does_not_break_requests(client, store):
    store.path.write_text("{broken", encoding="utf-8")

    assert client.get("/user/a@x.com").status_code == 404
    assert register(client, "a@x.com", "pw1").status_code == 201


def test_cors_allows_configured_origin(client):
    from flatchat.config import get_settings

    origin = get_settings().frontend_origin
    response = client.options(
        "/register",
        headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
    )

    assert response.headers["access-control-allow-origin"] == origin
    assert response.headers["access-control-allow-credentials"] == "true"


def test_health_reports_backend(client):
    assert client.get("/").json()["backend"] == "json"


def test_invalid_utf8_store_does_not_break_requests(client, store):
    store.path.write_bytes(b"\xff\xfe garbage")

    assert register(client, "a@x.com", "pw1").status_code == 201


def test_chat_with_self_is_rejected(client):
    register(client, "a@x.com", "pw1")

    response = client.post("/chats", json={"userId": "a@x.com", "name": "Me", "contactEmail": "a@x.com"})

    assert response.status_code == 400
    assert client.get("/user/a@x.com").json()["conversations"] == []


def test_add_contact_unknown_parties(client):
    register(client, "a@x.com", "pw1")

    unknown_adder = {"adderEmail": "ghost@x.com", "contactEmail": "a@x.com", "contactName": "A"}
    unknown_contact = {"adderEmail": "a@x.com", "contactEmail": "ghost@x.com", "contactName": "Ghost"}
    assert client.post("/contacts/add-by-email", json=unknown_adder).status_code == 404
    assert client.post("/contacts/add-by-email", json=unknown_contact).status_code == 404


class ExplodingService:

    async def add_contact_by_email(self, *args):
        raise RuntimeError("boom")

    async def update_user(self, *args):
        raise RuntimeError("boom")


def test_add_contact_unexpected_failure_answers_500(client):
    app.dependency_overrides[get_conversation_service] = ExplodingService
    payload = {"adderEmail": "a@x.com", "contactEmail": "b@x.com", "contactName": "B"}

    response = client.post("/contacts/add-by-email", json=payload)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to add contact."}


def test_update_user_unexpected_failure_answers_500(client):
    app.dependency_overrides[get_user_service] = ExplodingService

    response = client.put("/user/a@x.com", json={"contacts": []})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to update user data."}
