"""Structured penalty results handed to the presentation layer."""

from dataclasses import dataclass
from enum import Enum

from blackout.cards import Unit


class PenaltyKind(Enum):
    """Whether the recipient drinks or hands out the amount."""

    DRINK = "drink"
    GIVE = "give"


@dataclass(frozen=True)
class PenaltyResult:
    """
    Outcome of a resolving operation.

    Attributes:
        amount: Number of units
        unit: Sips or shot
        kind: Drink it yourself or give it away
        recipient: Id of the player concerned, if any
        displayable: False when there is nothing to show (e.g. a push)
    """

    amount: int
    unit: Unit
    kind: PenaltyKind = PenaltyKind.DRINK
    recipient: str | None = None
    displayable: bool = True

    @property
    def display_text(self) -> str:
        """Neutral label such as '40 sips' or '2 shots'. Localized copy lives elsewhere."""
        if self.unit == Unit.SHOT:
            label = "shot" if self.amount == 1 else "shots"
        else:
            label = "sip" if self.amount == 1 else "sips"
        return f"{self.amount} {label}"

    def __str__(self) -> str:
        return f"{self.kind.value} {self.display_text}"
