"""Typed events emitted by the engines, with a DEBUG logging trace."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Everything an engine can report."""

    # Flow
    GAME_STARTED = auto()
    GAME_ENDED = auto()
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()
    TURN_ADVANCED = auto()

    # Cards
    CARD_DRAWN = auto()
    CARD_DEALT = auto()
    CARD_REVEALED = auto()
    DECK_SHUFFLED = auto()
    DECK_EXHAUSTED = auto()

    # Borderland contest events
    CONTEST_STARTED = auto()
    CONTEST_ESCALATED = auto()
    CONTEST_RESOLVED = auto()
    CONTEST_CANCELLED = auto()
    PLAYER_TOGGLED = auto()

    # Blackjack events
    BET_PLACED = auto()
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()

    # 99 events
    CARD_PLAYED = auto()
    DIRECTION_REVERSED = auto()
    TOTAL_RESET = auto()
    LIFE_LOST = auto()
    PLAYER_ELIMINATED = auto()

    # Horse race / palm tree events
    BET_REMOVED = auto()
    RACE_STARTED = auto()
    HORSE_ADVANCED = auto()
    RACE_WON = auto()
    TRUNK_REVEALED = auto()

    # Rejected calls
    INVALID_ACTION = auto()


@dataclass(frozen=True)
class GameEvent:
    """Something an engine reports to whoever renders the table."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Per-engine event bus.

    Handlers registered for a type run before catch-all handlers (registered
    with ``event_type=None``). Everything emitted is kept in ``history`` and
    traced at DEBUG under this module's logger, prefixed with the game name.
    """

    def __init__(self, source: str = "game") -> None:
        self._source = source
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._history: list[GameEvent] = []

    def subscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """Call ``handler`` for ``event_type``, or for every event when it is None."""
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """Remove a handler; unknown handlers are ignored."""
        registered = self._handlers.get(event_type, [])
        if handler in registered:
            registered.remove(handler)

    def emit(self, event: GameEvent) -> None:
        self._history.append(event)
        logger.debug("[%s] %s", self._source, event)

        listeners = self._handlers.get(event.event_type, []) + self._handlers.get(None, [])
        for handler in listeners:
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build a ``GameEvent`` from keyword data, emit it and return it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Copy of every event emitted so far, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
