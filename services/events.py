from collections.abc import Callable
from dataclasses import dataclass, field

from utils.logging_setup import get_logger

logger = get_logger("events")

CREATED = "created"
UPDATED = "updated"
DELETED = "deleted"


@dataclass(frozen=True)
class TransactionEvent:
    kind: str                   # 'created' | 'updated' | 'deleted'
    user_id: str
    transaction_ids: tuple[int, ...] = field(default_factory=tuple)


Subscriber = Callable[[TransactionEvent], None]


class TransactionEvents:
    """Change notifications for views that cache transaction aggregates.

    Services publish only after a write has committed, so subscribers can
    re-query and see the new state.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register callback; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: TransactionEvent):
        # Subscriber failures are logged, never raised to the publisher.
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("Subscriber %r failed on %s event", callback, event.kind)
