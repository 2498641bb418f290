from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Tuple

from nbinputs.bridge.base import CLEAR_TOPIC

Subscriber = Callable[[Any], None]

CLEARED_HISTORY = 256


class SubscriptionBus:
    """In-process stand-in for the subscription manager.

    Topics are keyed by reference; a ``("clear_topic", ref)`` message drops
    every subscriber of that topic.
    """

    def __init__(self, address: str) -> None:
        self.address = address
        self._topics: Dict[str, List[Subscriber]] = {}
        self._cleared: Deque[str] = deque(maxlen=CLEARED_HISTORY)
        self._lock = threading.Lock()

    def subscribe(self, topic: str, subscriber: Subscriber) -> Callable[[], None]:
        with self._lock:
            self._topics.setdefault(topic, []).append(subscriber)

        def _unsubscribe() -> None:
            with self._lock:
                subs = self._topics.get(topic, [])
                if subscriber in subs:
                    subs.remove(subscriber)

        return _unsubscribe

    def publish(self, topic: str, event: Any) -> int:
        with self._lock:
            subs = list(self._topics.get(topic, []))
        for subscriber in subs:
            subscriber(event)
        return len(subs)

    def subscribers(self, topic: str) -> int:
        with self._lock:
            return len(self._topics.get(topic, []))

    def handle(self, message: Tuple[str, str]) -> None:
        kind, topic = message
        if kind != CLEAR_TOPIC:
            raise ValueError(f"unsupported bus message: {kind}")
        with self._lock:
            self._topics.pop(topic, None)
            self._cleared.append(topic)

    @property
    def cleared_topics(self) -> List[str]:
        with self._lock:
            return list(self._cleared)


__all__ = ["SubscriptionBus", "Subscriber", "CLEARED_HISTORY"]
