"""Shared plumbing for the state-machine driven game engines."""

from enum import Enum
from typing import Any, Callable, ClassVar, NoReturn

from transitions import Machine

from blackout.errors import InvalidOperationError
from blackout.events import EventEmitter, EventType, GameEvent


class GameEngine:
    """
    Base class wiring a ``transitions`` state machine onto an engine.

    Subclasses declare ``PHASES`` (an Enum whose lower-cased member names are
    the machine states), ``TRANSITIONS`` and ``INITIAL``. Public actions check
    the phase themselves and then fire a trigger.
    """

    PHASES: ClassVar[type[Enum]]
    TRANSITIONS: ClassVar[list[dict[str, Any]]]
    INITIAL: ClassVar[str]
    NAME: ClassVar[str] = "game"

    def __init__(self) -> None:
        self.events = EventEmitter(source=self.NAME)
        self.machine = Machine(
            model=self,
            states=[p.name.lower() for p in self.PHASES],
            transitions=self.TRANSITIONS,
            initial=self.INITIAL,
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> Any:
        """Get current phase as enum."""
        return self.PHASES[self._machine_state.upper()]  # type: ignore[attr-defined]

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def _reject(self, message: str, **data: Any) -> NoReturn:
        """Report an invalid call and raise."""
        self.events.emit_new(
            EventType.INVALID_ACTION,
            message=message,
            state=self.state.name,
            **data,
        )
        raise InvalidOperationError(message)

    def _require(self, *phases: Enum, action: str) -> None:
        """Reject ``action`` unless the engine is in one of ``phases``."""
        if self.state not in phases:
            self._reject(f"Cannot {action} in state {self.state}")
