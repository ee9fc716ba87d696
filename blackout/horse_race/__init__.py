"""Horse race betting game."""

from blackout.horse_race.engine import HorseBet, HorseRaceGame, HorseRacePhase, race_deck

__all__ = ["HorseBet", "HorseRaceGame", "HorseRacePhase", "race_deck"]
