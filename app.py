"""Application entry point for the poll action service."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from uuid import uuid4

from flask import Flask, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException
import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars

from poll_action.background import configure_executor
from poll_action.config import AppSettings, get_settings
from poll_action.interactions import CorrelationStore, InteractionEnvelope, NotFoundError
from poll_action.logging_config import configure_logging
from poll_action.polls import PollsApiClient, build_action_metadata, build_poll_dispatcher
from poll_action.security import SIGNATURE_HEADER, TIMESTAMP_HEADER, is_valid_request


BASE_PATH = "/poll-action"


def _create_polls_api(settings: AppSettings) -> PollsApiClient | None:
    if not settings.polls_api_key:
        return None
    return PollsApiClient(
        api_key=settings.polls_api_key,
        base_url=settings.polls_api_base_url,
        timeout=settings.polls_api_timeout,
    )


def _register_error_handlers(flask_app: Flask) -> None:
    """Register JSON error handlers; unexpected errors carry a trace identifier."""

    @flask_app.errorhandler(NotFoundError)
    def handle_not_found(error: NotFoundError):
        response = jsonify({"error": "not_found", "message": str(error)})
        response.status_code = 404
        return response

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):  # type: ignore[override]
        if isinstance(error, HTTPException):
            return error
        trace_id = str(uuid4())
        flask_app.logger.exception(
            "Unhandled application error", extra={"trace_id": trace_id}, exc_info=error
        )
        response = jsonify({"error": "internal_server_error", "trace_id": trace_id})
        response.status_code = 500
        return response


_CONFIGURED_LOG_LEVEL: str | None = None


def _load_version() -> str:
    version_file = Path(__file__).resolve().parent / "VERSION"
    if version_file.exists():
        return version_file.read_text(encoding="utf-8").strip()
    return "unknown"


def create_app() -> Flask:
    """Create and configure the Flask application."""

    global _CONFIGURED_LOG_LEVEL
    settings = get_settings()
    if _CONFIGURED_LOG_LEVEL != settings.log_level:
        configure_logging(settings.log_level)
        _CONFIGURED_LOG_LEVEL = settings.log_level
    configure_executor(settings.background_workers)

    store = CorrelationStore(retention=timedelta(seconds=settings.interaction_retention_seconds))
    dispatcher = build_poll_dispatcher(store, polls_api=_create_polls_api(settings))

    flask_app = Flask(__name__)
    flask_app.config["APP_VERSION"] = _load_version()
    flask_app.extensions["correlation_store"] = store
    flask_app.extensions["dispatcher"] = dispatcher
    flask_app.logger.setLevel(settings.log_level)

    _register_error_handlers(flask_app)

    @flask_app.route(f"{BASE_PATH}/metadata", methods=["GET"])
    def action_metadata():
        metadata = build_action_metadata(settings.supported_envs)
        return jsonify(metadata.to_payload())

    @flask_app.route(f"{BASE_PATH}/interactions", methods=["POST"])
    def handle_interaction():
        raw_body = request.get_data(as_text=True)

        if settings.signing_secret and not is_valid_request(
            signing_secret=settings.signing_secret,
            timestamp=request.headers.get(TIMESTAMP_HEADER, ""),
            body=raw_body,
            signature=request.headers.get(SIGNATURE_HEADER, ""),
        ):
            response = jsonify({"error": "invalid_signature"})
            response.status_code = 401
            return response

        trace_id = str(uuid4())
        bind_contextvars(trace_id=trace_id)
        log = structlog.get_logger().bind(trace_id=trace_id)
        try:
            payload = request.get_json(silent=True)
            if not isinstance(payload, dict):
                log.warning("interaction_rejected", reason="invalid_json")
                return jsonify({"error": "invalid_json"}), 400

            try:
                envelope = InteractionEnvelope.model_validate(payload)
            except ValidationError as exc:
                log.warning("interaction_rejected", reason="invalid_interaction", error_count=exc.error_count())
                return jsonify({"error": "invalid_interaction"}), 400

            log.info("interaction_received", interaction_id=envelope.id, interaction_type=envelope.type.name)
            result = dispatcher.dispatch(envelope)
            if result is None:
                return "", 204
            return jsonify(result.to_payload())
        finally:
            unbind_contextvars("trace_id")

    @flask_app.route(f"{BASE_PATH}/interactions/<interaction_id>", methods=["GET"])
    def get_interaction(interaction_id: str):
        record = store.lookup(interaction_id)
        return jsonify(record.to_dict())

    @flask_app.route("/healthz", methods=["GET"])
    def healthz():
        health: dict[str, object] = {"ok": True}
        health["version"] = flask_app.config.get("APP_VERSION", "unknown")
        try:
            get_settings()
            health["config"] = "valid"
        except Exception as exc:  # pragma: no cover
            health["config"] = "invalid"
            health["config_error"] = str(exc)
            health["ok"] = False
        health["interactions_held"] = len(store)
        status = 200 if health["ok"] else 503
        return jsonify(health), status

    return flask_app


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    application = create_app()
    application.run(host="0.0.0.0", port=3000, debug=True)
