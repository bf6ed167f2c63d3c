"""Publication of submitted polls to the polls API."""

from __future__ import annotations

from typing import Sequence

import structlog

from .api import PollsApiClient, PollsApiError


def publish_poll(
    *,
    client: PollsApiClient,
    question: str,
    options: Sequence[str],
    interaction_id: str,
) -> str | None:
    """Create the poll remotely and return its id, or None when the API call fails."""

    log = structlog.get_logger().bind(interaction_id=interaction_id, option_count=len(options))
    try:
        poll = client.create_poll(question, list(options))
    except PollsApiError as exc:
        log.error(
            "polls_api_failed",
            operation="create_poll",
            error=exc.code,
            status_code=exc.status_code,
            detail=str(exc),
        )
        return None

    log.info("poll_published", poll_id=poll.id)
    return poll.id
