"""Palm tree reveal game."""

from blackout.palm_tree.engine import CircleSlot, PalmTreeGame, PalmTreePhase, action_for, is_red

__all__ = ["CircleSlot", "PalmTreeGame", "PalmTreePhase", "action_for", "is_red"]
