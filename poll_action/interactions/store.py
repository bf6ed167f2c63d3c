"""In-memory audit trail pairing each interaction with the response we sent."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Dict, List

from .models import InteractionEnvelope, InteractionResponse


DEFAULT_RETENTION = timedelta(seconds=900)


class NotFoundError(LookupError):
    """Raised when no live record exists for an interaction id."""

    def __init__(self, interaction_id: str) -> None:
        super().__init__(f"Interaction {interaction_id} does not exist")
        self.interaction_id = interaction_id


@dataclass(frozen=True)
class CorrelationRecord:
    request: InteractionEnvelope
    response: InteractionResponse
    timestamp: float
    # Monotonic reading used for expiry; ``timestamp`` is wall-clock epoch seconds.
    recorded_at: float = field(default=0.0, repr=False, compare=False)

    def snapshot(self) -> "CorrelationRecord":
        """Return a copy whose envelopes share no mutable state with this one."""

        return CorrelationRecord(
            request=self.request.model_copy(deep=True),
            response=self.response.model_copy(deep=True),
            timestamp=self.timestamp,
            recorded_at=self.recorded_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request": self.request.to_payload(),
            "response": self.response.to_payload(),
            "timestamp": int(self.timestamp * 1000),
        }


class CorrelationStore:
    """Keep request/response pairs for a bounded retention window.

    There is no capacity cap and no background timer: expired records are
    swept from the whole collection every time ``lookup`` runs. Records are
    copied on the way in and on the way out, so later changes to a handler's
    response (or to a looked-up record) never reach the stored pair.
    """

    def __init__(
        self,
        *,
        retention: timedelta = DEFAULT_RETENTION,
        timer: Callable[[], float] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if retention.total_seconds() <= 0:
            raise ValueError("Retention window must be greater than zero seconds.")
        self._retention = retention
        self._timer = timer or time.monotonic
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self._records: List[CorrelationRecord] = []

    @property
    def retention(self) -> timedelta:
        return self._retention

    def record(self, request: InteractionEnvelope, response: InteractionResponse) -> CorrelationRecord:
        entry = CorrelationRecord(
            request=request,
            response=response,
            timestamp=self._clock(),
            recorded_at=self._timer(),
        ).snapshot()
        with self._lock:
            self._records.append(entry)
        return entry.snapshot()

    def lookup(self, interaction_id: str) -> CorrelationRecord:
        """Return the live record for *interaction_id*, evicting every expired record first."""

        threshold = self._retention.total_seconds()
        with self._lock:
            now = self._timer()
            self._records = [entry for entry in self._records if now - entry.recorded_at < threshold]
            for entry in reversed(self._records):
                if entry.request.id == interaction_id:
                    return entry.snapshot()
        raise NotFoundError(interaction_id)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
