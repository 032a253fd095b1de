# tactician/models/__init__.py
from __future__ import annotations

from .core import Element, EffectType, MoveClass, MoveTag, Phase
from .moves import Move, StatusEffect, find_move
from .actors import ActiveEffect, CombatantSnapshot
from .events import EntryType, LogEntry

__all__ = [
    "Element",
    "EffectType",
    "MoveClass",
    "MoveTag",
    "Phase",
    "Move",
    "StatusEffect",
    "find_move",
    "ActiveEffect",
    "CombatantSnapshot",
    "EntryType",
    "LogEntry",
]
