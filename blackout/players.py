"""Player records and roster validation."""

from dataclasses import dataclass
from typing import Sequence

from pydantic import BaseModel, ValidationInfo, field_validator

# Seats any engine can handle; a session may narrow them through config
MIN_PLAYERS = 2
MAX_PLAYERS = 8


class Roster(BaseModel):
    """
    The list of display names supplied once per session.

    Validate with ``context={"min_players": ..., "max_players": ...}`` to
    apply narrower limits than the table maximum.
    """

    names: list[str]

    @field_validator("names")
    @classmethod
    def names_fit_table(cls, names: list[str], info: ValidationInfo) -> list[str]:
        context = info.context or {}
        low = context.get("min_players", MIN_PLAYERS)
        high = context.get("max_players", MAX_PLAYERS)
        if not low <= len(names) <= high:
            raise ValueError(f"Need between {low} and {high} players, got {len(names)}")

        cleaned = [name.strip() for name in names]
        for i, name in enumerate(cleaned):
            if not name:
                raise ValueError(f"Player name at index {i} is empty")
        return cleaned


@dataclass
class Player:
    """A player seated in a game."""

    id: str
    name: str
    active: bool = True


def validate_roster(
    names: Sequence[str],
    min_players: int = MIN_PLAYERS,
    max_players: int = MAX_PLAYERS,
) -> list[str]:
    """Validate the player count and non-empty names, returning them stripped."""
    roster = Roster.model_validate(
        {"names": list(names)},
        context={"min_players": min_players, "max_players": max_players},
    )
    return roster.names


def create_players(names: Sequence[str]) -> list[Player]:
    """Map roster names onto fresh player records with ids ``player-{i}``."""
    return [
        Player(id=f"player-{index}", name=name)
        for index, name in enumerate(validate_roster(names))
    ]
