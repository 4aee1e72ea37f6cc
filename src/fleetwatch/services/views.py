import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LoadTicket:
    view: str
    generation: int


@dataclass
class ViewState:
    generation: int = 0
    applied_generation: int = 0
    payload: Optional[Any] = None
    loaded_at: Optional[datetime] = None


@dataclass
class ViewLoader:
    """
    Tracks overlapping loads per view. Each load takes a ticket; only the newest
    ticket for a view may publish its payload, whatever order loads finish in.
    """

    views: Dict[str, ViewState] = field(default_factory=dict)
    refreshed_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def begin(self, view: str) -> LoadTicket:
        with self._lock:
            state = self.views.setdefault(view, ViewState())
            state.generation += 1
            return LoadTicket(view=view, generation=state.generation)

    def complete(self, ticket: LoadTicket, payload: Any) -> bool:
        """Publish payload if ticket is still current. Returns False for stale loads."""
        with self._lock:
            state = self.views.setdefault(ticket.view, ViewState())
            if ticket.generation != state.generation:
                return False
            state.payload = payload
            state.applied_generation = ticket.generation
            state.loaded_at = datetime.now(UTC)
            return True

    def latest(self, view: str) -> Optional[Any]:
        with self._lock:
            state = self.views.get(view)
            return state.payload if state else None

    def refresh(self) -> datetime:
        """Bump the shared refresh timestamp; in-flight loads become stale."""
        with self._lock:
            self.refreshed_at = datetime.now(UTC)
            for state in self.views.values():
                state.generation += 1
                state.payload = None
            return self.refreshed_at
