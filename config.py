"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


@dataclass(frozen=True)
class BorderlandConfig:
    """Borderland configuration."""

    num_decks: int = field(default_factory=lambda: _env_int("BLACKOUT_BORDERLAND_DECKS", 1))


@dataclass(frozen=True)
class BlackjackConfig:
    """Blackjack table defaults."""

    num_decks: int = field(default_factory=lambda: _env_int("BLACKOUT_BLACKJACK_DECKS", 6))
    min_bet: int = field(default_factory=lambda: _env_int("BLACKOUT_BLACKJACK_MIN_BET", 1))
    max_bet: int = field(default_factory=lambda: _env_int("BLACKOUT_BLACKJACK_MAX_BET", 10))
    reshuffle_threshold: int = 52
    blackjack_multiplier: int = 3
    dealer_stand_value: int = 17


@dataclass(frozen=True)
class NinetyNineConfig:
    """99 game defaults."""

    starting_lives: int = field(default_factory=lambda: _env_int("BLACKOUT_99_LIVES", 3))
    hand_size: int = 3
    limit: int = 99


@dataclass(frozen=True)
class HorseRaceConfig:
    """Horse race defaults."""

    finish_position: int = field(default_factory=lambda: _env_int("BLACKOUT_HORSE_FINISH", 7))


@dataclass(frozen=True)
class PalmTreeConfig:
    """Palm tree defaults."""

    circle_cards: int = field(default_factory=lambda: _env_int("BLACKOUT_PALM_TREE_CARDS", 10))


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    min_players: int = field(default_factory=lambda: _env_int("BLACKOUT_MIN_PLAYERS", 2))
    max_players: int = field(default_factory=lambda: _env_int("BLACKOUT_MAX_PLAYERS", 8))

    borderland: BorderlandConfig = field(default_factory=BorderlandConfig)
    blackjack: BlackjackConfig = field(default_factory=BlackjackConfig)
    ninety_nine: NinetyNineConfig = field(default_factory=NinetyNineConfig)
    horse_race: HorseRaceConfig = field(default_factory=HorseRaceConfig)
    palm_tree: PalmTreeConfig = field(default_factory=PalmTreeConfig)

    def __post_init__(self) -> None:
        # Engines seat at most 2-8 players; config may only narrow that
        if not 2 <= self.min_players <= self.max_players <= 8:
            raise ValueError(
                f"Player limits must satisfy 2 <= min <= max <= 8, got {self.min_players}-{self.max_players}"
            )


# Global configuration instance
config = AppConfig()
