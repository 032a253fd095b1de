# tactician/systems/ai/interface.py
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ...models import CombatantSnapshot, LogEntry, Move, Phase
from .controller import Decision, DecisionState


class MoveController(Protocol):
    """
    A controller picks the move a combatant attempts this turn.

    - TacticalController: context, intent and scoring
    - Future: scripted or human controllers (still return a Decision, never outcomes)
    """

    def decide(
        self,
        me: CombatantSnapshot,
        enemy: CombatantSnapshot,
        turn: int,
        log: Sequence[LogEntry],
        catalog: Sequence[Move],
        phase: Phase = Phase.NORMAL,
        previous_state: Optional[DecisionState] = None,
    ) -> Decision: ...
