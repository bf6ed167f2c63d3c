"""Tests for the Flask application factory and its routes."""

import json
import logging
from pathlib import Path
import sys
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover
    sys.path.insert(0, str(ROOT))

import app as app_module  # noqa: E402
from poll_action import background, config, security  # noqa: E402


ENV_VARS = (
    "ACTION_SIGNING_SECRET",
    "INTERACTION_RETENTION_SECONDS",
    "SUPPORTED_ENVS",
    "POLLS_API_KEY",
    "LOG_LEVEL",
    "BACKGROUND_WORKERS",
)


@pytest.fixture
def settings_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    config.get_settings.cache_clear()
    yield monkeypatch
    config.get_settings.cache_clear()


@pytest.fixture
def client(settings_env):
    flask_app = app_module.create_app()
    return flask_app.test_client()


def _signed_headers(secret: str, body: str, timestamp: str) -> dict[str, str]:
    signature = security.compute_signature(secret, timestamp, body)
    return {
        security.SIGNATURE_HEADER: signature,
        security.TIMESTAMP_HEADER: timestamp,
    }


COMMAND = {"id": "I1", "type": 2, "data": {"name": "poll"}, "guild_id": "G1"}
SUBMISSION = {
    "id": "I2",
    "type": 5,
    "data": {
        "custom_id": "poll:modal:modal",
        "components": [
            {"type": 1, "components": [{"type": 4, "custom_id": "poll:text:description", "value": "Favorite color?"}]},
            {"type": 1, "components": [{"type": 4, "custom_id": "poll:text:options", "value": "Red\nGreen\nBlue"}]},
        ],
    },
}


def test_metadata_lists_patterns_and_commands(client):
    response = client.get("/poll-action/metadata")

    assert response.status_code == 200
    data = response.get_json()
    assert data["manifest"]["appId"] == "poll-action"
    assert data["manifest"]["shortName"] == "poll-action"
    assert data["supportedInteractions"] == [
        {"type": 2, "names": ["poll*"]},
        {"type": 4, "names": ["poll*"]},
        {"type": 3, "ids": ["poll:*"]},
        {"type": 5, "ids": ["poll:*"]},
    ]
    command = data["applicationCommands"][0]
    assert command["name"] == "poll"
    assert command["type"] == 1
    assert command["metadata"] == {
        "name": "PollAction",
        "shortName": "poll-action",
        "supportedEnvs": ["poll", "qa", "staging"],
    }


def test_metadata_uses_configured_envs(settings_env):
    settings_env.setenv("SUPPORTED_ENVS", "prod")
    client = app_module.create_app().test_client()

    data = client.get("/poll-action/metadata").get_json()

    assert data["applicationCommands"][0]["metadata"]["supportedEnvs"] == ["prod"]


def test_command_returns_modal(client):
    response = client.post("/poll-action/interactions", json=COMMAND)

    assert response.status_code == 200
    data = response.get_json()
    assert data["type"] == 9
    assert data["data"]["custom_id"] == "poll:modal:modal"


def test_unmatched_interaction_returns_no_content(client):
    response = client.post("/poll-action/interactions", json={"id": "X", "type": 2, "data": {"name": "other"}})

    assert response.status_code == 204
    assert response.data == b""


def test_malformed_interaction_is_rejected(client):
    response = client.post("/poll-action/interactions", json={"id": "X", "type": 3, "data": {}})

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_interaction"


@pytest.mark.parametrize(
    "components",
    [
        5,
        "rows",
        {"type": 1},
        [7],
        [{"type": 1, "components": "text"}],
    ],
)
def test_modal_submission_with_malformed_components_is_rejected(client, components):
    payload = {"id": "X", "type": 5, "data": {"custom_id": "poll:modal:modal", "components": components}}

    response = client.post("/poll-action/interactions", json=payload)

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_interaction"
    assert client.get("/poll-action/interactions/X").status_code == 404


def test_non_json_body_is_rejected(client):
    response = client.post("/poll-action/interactions", data="not json", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_json"


def test_lookup_returns_recorded_request_and_response(client):
    posted = client.post("/poll-action/interactions", json=SUBMISSION).get_json()

    response = client.get("/poll-action/interactions/I2")

    assert response.status_code == 200
    data = response.get_json()
    assert data["request"] == SUBMISSION
    assert data["response"] == posted
    assert isinstance(data["timestamp"], int)


def test_lookup_of_unknown_interaction_is_not_found(client):
    response = client.get("/poll-action/interactions/missing")

    assert response.status_code == 404
    assert response.get_json() == {"error": "not_found", "message": "Interaction missing does not exist"}


def test_unknown_route_stays_404(client):
    assert client.get("/nowhere").status_code == 404


def test_signed_request_is_accepted(settings_env):
    settings_env.setenv("ACTION_SIGNING_SECRET", "secret")
    flask_app = app_module.create_app()
    body = json.dumps(COMMAND)
    timestamp = "1700000000"
    settings_env.setattr(security, "time", SimpleNamespace(time=lambda: int(timestamp)))

    response = flask_app.test_client().post(
        "/poll-action/interactions",
        data=body,
        content_type="application/json",
        headers=_signed_headers("secret", body, timestamp),
    )

    assert response.status_code == 200


def test_invalid_signature_returns_unauthorised(settings_env):
    settings_env.setenv("ACTION_SIGNING_SECRET", "secret")
    flask_app = app_module.create_app()
    timestamp = "1700000000"
    settings_env.setattr(security, "time", SimpleNamespace(time=lambda: int(timestamp)))

    response = flask_app.test_client().post(
        "/poll-action/interactions",
        data=json.dumps(COMMAND),
        content_type="application/json",
        headers={security.SIGNATURE_HEADER: "v1=invalid", security.TIMESTAMP_HEADER: timestamp},
    )

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_signature"
    assert len(flask_app.extensions["correlation_store"]) == 0


def test_stale_timestamp_rejected(settings_env):
    settings_env.setenv("ACTION_SIGNING_SECRET", "secret")
    flask_app = app_module.create_app()
    body = json.dumps(COMMAND)
    settings_env.setattr(security, "time", SimpleNamespace(time=lambda: 2000))

    response = flask_app.test_client().post(
        "/poll-action/interactions",
        data=body,
        content_type="application/json",
        headers=_signed_headers("secret", body, "100"),
    )

    assert response.status_code == 401


def test_unexpected_errors_return_trace_id(client, monkeypatch):
    dispatcher = client.application.extensions["dispatcher"]

    def explode(_envelope):
        raise RuntimeError("boom")

    monkeypatch.setattr(dispatcher, "dispatch", explode)

    response = client.post("/poll-action/interactions", json=COMMAND)

    assert response.status_code == 500
    data = response.get_json()
    assert data["error"] == "internal_server_error"
    assert data["trace_id"]


def test_health_endpoint_returns_ok(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.get_json()
    assert data["ok"] is True
    assert data["config"] == "valid"
    assert data["interactions_held"] == 0
    assert "version" in data


def test_log_level_and_worker_pool_follow_settings(settings_env):
    settings_env.setenv("LOG_LEVEL", "warning")
    settings_env.setenv("BACKGROUND_WORKERS", "2")

    flask_app = app_module.create_app()

    assert flask_app.logger.level == logging.WARNING
    assert logging.getLogger().level == logging.WARNING
    assert background.pool_size() == 2

    settings_env.delenv("LOG_LEVEL")
    settings_env.delenv("BACKGROUND_WORKERS")
    config.get_settings.cache_clear()
    app_module.create_app()

    assert logging.getLogger().level == logging.INFO
    assert background.pool_size() == 4
