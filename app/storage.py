from collections import OrderedDict
from typing import NamedTuple, Optional, Tuple

from .models import RouteDecision, RouteRequest, RoutingMode

RequestKey = Tuple[str, str, str, RoutingMode]


class IdempotencyConflict(Exception):
    """An idempotency key was reused for a different payment."""


class StoredDecision(NamedTuple):
    request: RequestKey
    decision: RouteDecision


def request_key(req: RouteRequest, mode: RoutingMode) -> RequestKey:
    return (req.business_id, req.country, req.currency, mode)


class IdempotencyStore:
    """Remembers route decisions so a retried request gets the same MID back.

    Keeps at most ``max_entries`` decisions, dropping the oldest first.
    """

    def __init__(self, max_entries: int = 10_000) -> None:
        self._max_entries = max_entries
        self._entries: "OrderedDict[str, StoredDecision]" = OrderedDict()

    def get(self, key: str, request: RequestKey) -> Optional[RouteDecision]:
        stored = self._entries.get(key)
        if stored is None:
            return None
        if stored.request != request:
            raise IdempotencyConflict(f"Idempotency key {key!r} was already used for a different request")
        return stored.decision

    def put(self, key: str, request: RequestKey, decision: RouteDecision) -> None:
        if key in self._entries:
            return
        self._entries[key] = StoredDecision(request, decision)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
