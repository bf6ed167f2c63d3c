"""Thin client for the third-party polls REST API."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import requests
from pydantic import BaseModel, Field, ValidationError


DEFAULT_BASE_URL = "https://api.pollsapi.com/v1"
DEFAULT_TIMEOUT = 10.0


class PollsApiError(Exception):
    def __init__(self, code: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class PollOption(BaseModel):
    id: str
    text: str
    votes_count: int = 0
    poll_id: str | None = None
    data: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class Poll(BaseModel):
    id: str
    question: str
    options: List[PollOption] = Field(default_factory=list)
    identifier: str | None = None
    data: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class PollsApiClient:
    """Create and fetch polls; every call is bounded by *timeout* seconds."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("A polls API key is required.")
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"api-key": api_key, "Accept": "application/json"})

    def create_poll(self, question: str, options: Sequence[str]) -> Poll:
        body = {"question": question, "options": [{"text": option} for option in options]}
        return self._parse_poll(self._request("post", "/create/poll", json=body))

    def get_poll(self, poll_id: str) -> Poll:
        return self._parse_poll(self._request("get", f"/get/poll/{poll_id}"))

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            raise PollsApiError("network_error", f"Request to {path} failed: {exc}") from exc

        if response.status_code >= 400:
            raise PollsApiError(
                "http_error",
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise PollsApiError("invalid_json", "Polls API returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise PollsApiError("invalid_response", "Polls API returned an unexpected payload")
        return payload

    @staticmethod
    def _parse_poll(payload: Dict[str, Any]) -> Poll:
        # Responses are wrapped: {"status": "success", "statusCode": 200, "data": {...}}
        data = payload.get("data", payload)
        try:
            return Poll.model_validate(data)
        except ValidationError as exc:
            raise PollsApiError("invalid_response", "Polls API returned an unexpected poll") from exc
