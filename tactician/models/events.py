# tactician/models/events.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional

EntryType = Literal[
    "turn_start",
    "move",
    "damage",
    "effect",
    "system",
    "battle_end",
]


@dataclass(frozen=True)
class LogEntry:
    """
    Immutable record of one thing that happened in the duel.

    The battle log is append-only and written by resolution. The tactical AI reads
    a recent window of it (damage totals, game phase by length).
    """
    turn: int
    actor: Optional[str]
    action: str = ""
    type: EntryType = "move"
    target: Optional[str] = None
    damage: int = 0
    message: str = ""
    data: Mapping[str, object] = field(default_factory=dict)
