from fastapi.testclient import TestClient

from main import create_app
from routers import settings as settings_router
from services.config import KEY_ENV, URL_ENV, FunctionsConfig
from services.summary_form import ENV_MISSING


def test_health(client):
    assert client.get("/api/health").json() == {"status": "healthy"}


def test_initial_state(client):
    state = client.get("/api/state").json()
    assert state["transcript"] == ""
    assert state["prompt"] == "Summarize the key points and action items from this meeting"
    assert state["email_subject"] == "Meeting Summary"
    assert state["status"] is None
    assert state["summary_visible"] is False
    assert state["email_visible"] is False
    assert state["can_generate"] is False


def test_public_config_hides_key(client):
    assert client.get("/api/config").json() == {
        "supabase_url": "https://demo-project.supabase.co",
        "key_configured": True,
    }


def test_paste_transcript(client):
    state = client.put("/api/transcript", json={"text": "Alice: hi"}).json()
    assert state["transcript"] == "Alice: hi"
    assert state["can_generate"] is True


def test_upload_replaces_transcript(client):
    client.put("/api/transcript", json={"text": "old text"})
    response = client.post(
        "/api/transcript/upload",
        files={"file": ("meeting.txt", "Bob: new text".encode(), "text/plain")},
    )
    assert response.status_code == 200
    assert response.json()["transcript"] == "Bob: new text"


def test_upload_rejects_other_types(client):
    client.put("/api/transcript", json={"text": "keep me"})
    response = client.post(
        "/api/transcript/upload",
        files={"file": ("meeting.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert response.status_code == 415
    assert response.json()["status"] == "error"
    assert client.get("/api/state").json()["transcript"] == "keep me"


def test_generate_edit_and_send(client, functions):
    functions.respond("summarize", json={"summary": "Ship on Friday."})
    client.put("/api/transcript", json={"text": "Alice: let's ship Friday."})
    client.put("/api/summary/prompt", json={"text": ""})

    state = client.post("/api/summary/generate").json()
    assert state["summary"] == "Ship on Friday."
    assert state["edited_summary"] == "Ship on Friday."
    assert state["summary_visible"] is True
    assert state["email_visible"] is True
    assert state["status"] == {"kind": "success", "text": "Summary generated successfully!"}
    assert functions.payload()["prompt"] == (
        "Summarize the key points and action items from this meeting"
    )

    state = client.put("/api/summary", json={"text": "Ship on Monday."}).json()
    assert state["summary"] == "Ship on Friday."
    assert state["edited_summary"] == "Ship on Monday."

    state = client.put("/api/email", json={"recipients": "a@x.com, b@y.com"}).json()
    assert state["can_send"] is True

    state = client.post("/api/email/send").json()
    assert state["status"] == {"kind": "success", "text": "Email sent successfully!"}
    assert state["email_recipients"] == ""
    assert state["email_subject"] == "Meeting Summary"
    assert functions.payload() == {
        "to": ["a@x.com", "b@y.com"],
        "subject": "Meeting Summary",
        "summary": "Ship on Monday.",
    }


def test_server_error_reaches_status(client, functions):
    functions.respond("summarize", status=500, text="internal error")
    client.put("/api/transcript", json={"text": "Alice: hi"})

    response = client.post("/api/summary/generate")

    assert response.status_code == 200
    status = response.json()["status"]
    assert status["kind"] == "error"
    assert "500" in status["text"] and "internal error" in status["text"]
    assert response.json()["is_generating"] is False


def test_generate_refused_while_busy(client, form, functions):
    client.put("/api/transcript", json={"text": "Alice: hi"})
    form.is_generating = True

    response = client.post("/api/summary/generate")

    assert response.status_code == 409
    assert functions.requests == []
    assert form.status is None


def test_send_refused_while_busy(client, form, functions):
    form.is_sending = True
    response = client.post("/api/email/send")
    assert response.status_code == 409
    assert functions.requests == []


def test_edit_before_summary_is_refused(client):
    response = client.put("/api/summary", json={"text": "early"})
    assert response.status_code == 409
    assert client.get("/api/state").json()["edited_summary"] == ""


def test_dismiss_status(client):
    client.post("/api/summary/generate")
    assert client.get("/api/state").json()["status"]["kind"] == "error"

    state = client.delete("/api/state/status").json()
    assert state["status"] is None


def test_missing_config_reported_at_startup(functions):
    app = create_app(config=FunctionsConfig(), transport=functions.transport)
    with TestClient(app) as test_client:
        state = test_client.get("/api/state").json()
        assert state["status"] == {"kind": "error", "text": ENV_MISSING}

        test_client.put("/api/transcript", json={"text": "Alice: hi"})
        state = test_client.post("/api/summary/generate").json()
        assert state["status"]["text"] == "SUPABASE_URL is not set in environment variables"
        assert functions.requests == []


def test_settings_update_rebuilds_config(tmp_path, monkeypatch, functions):
    monkeypatch.setattr(settings_router, "ENV_PATH", str(tmp_path / ".env"))
    monkeypatch.setenv(URL_ENV, "")
    monkeypatch.setenv(KEY_ENV, "")
    app = create_app(config=FunctionsConfig(), transport=functions.transport)

    with TestClient(app) as test_client:
        assert test_client.get("/api/settings/setup-status").json()["ready"] is False

        response = test_client.post(
            "/api/settings",
            json={URL_ENV: "https://new.supabase.co/", KEY_ENV: "secret-abcd"},
        )
        assert response.json() == {"status": "ok", "missing": []}

        assert test_client.get("/api/settings/setup-status").json() == {
            "ready": True,
            "url_configured": True,
            "key_configured": True,
        }
        assert test_client.get("/api/settings").json() == {
            URL_ENV: "https://new.supabase.co/",
            KEY_ENV: "****abcd",
        }
        form = test_client.app.state.form
        assert form.config.base_url == "https://new.supabase.co"
        assert form.status is None

    written = (tmp_path / ".env").read_text()
    assert f"{KEY_ENV}=secret-abcd" in written


def test_settings_reject_multiline_values(tmp_path, monkeypatch, functions):
    env_path = tmp_path / ".env"
    monkeypatch.setattr(settings_router, "ENV_PATH", str(env_path))
    monkeypatch.setenv(KEY_ENV, "")
    app = create_app(config=FunctionsConfig(), transport=functions.transport)

    with TestClient(app) as test_client:
        response = test_client.post(
            "/api/settings",
            json={KEY_ENV: "secret\nLOG_DIR=/tmp/elsewhere"},
        )

        assert response.status_code == 400
        assert response.json()["status"] == "error"
        assert test_client.app.state.form.config.anon_key == ""

    assert not env_path.exists()
