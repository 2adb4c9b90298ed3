"""
TTL-gated holder for the last published standings snapshot.
"""

import logging
import time
from typing import Callable, List, Optional, Tuple

from .models import StandingsSnapshot


logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600.0

SnapshotListener = Callable[[StandingsSnapshot], None]


class StandingsCache:
    """
    Holds exactly one snapshot plus the monotonic time it was committed.

    The snapshot and its timestamp live in a single tuple that is replaced
    in one assignment, so a reader always sees a matching pair. Nothing
    here ever publishes an empty snapshot over a good one.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._state: Tuple[StandingsSnapshot, Optional[float]] = (StandingsSnapshot.empty(), None)
        self._listeners: List[SnapshotListener] = []

    @property
    def snapshot(self) -> StandingsSnapshot:
        return self._state[0]

    @property
    def committed_at(self) -> Optional[float]:
        return self._state[1]

    def age(self) -> Optional[float]:
        """Seconds since the last commit, or None if nothing was committed."""
        committed_at = self._state[1]
        if committed_at is None:
            return None
        return self._clock() - committed_at

    def is_fresh(self) -> bool:
        """True if a non-empty snapshot was committed within the TTL."""
        snapshot, committed_at = self._state
        if committed_at is None or snapshot.is_empty:
            return False
        return self._clock() - committed_at < self.ttl_seconds

    def commit(self, snapshot: StandingsSnapshot) -> bool:
        """
        Publish a new snapshot and notify listeners.

        Returns:
            False if the snapshot was empty and the old one was kept
        """
        if snapshot.is_empty:
            logger.warning("Refusing to publish an empty standings snapshot")
            return False

        self._state = (snapshot, self._clock())
        self._notify(snapshot)
        return True

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a callback for every committed snapshot.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, snapshot: StandingsSnapshot) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Standings listener %r failed", listener)
