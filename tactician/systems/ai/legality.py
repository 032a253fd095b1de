# tactician/systems/ai/legality.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ...config import DEFAULT_CONFIG, TacticalConfig
from ...models import CombatantSnapshot, Move, MoveTag, Phase
from .context import stale_move_names


@dataclass(frozen=True)
class LegalMoves:
    """
    Outcome of the legality pass.

    forced:
      - set only in desperation, where the move is not up for scoring
    no_move_reason:
      - why the set is empty, when it is
    """
    moves: List[Move] = field(default_factory=list)
    forced: Optional[Move] = None
    notes: List[str] = field(default_factory=list)
    no_move_reason: Optional[str] = None

    @property
    def empty(self) -> bool:
        return not self.moves


def available_moves(catalog: Sequence[Move], me: CombatantSnapshot) -> List[Move]:
    """
    Moves the combatant can physically attempt this turn: off cooldown and with
    uses remaining. Chi cost is left to the scorer.
    """
    return [m for m in catalog if not me.on_cooldown(m.name) and not me.exhausted(m)]


def _strongest(moves: Sequence[Move]) -> Move:
    # max() keeps the first of equal keys, so ties go to catalog order.
    return max(moves, key=lambda m: m.power)


def _desperation(moves: List[Move], notes: List[str]) -> LegalMoves:
    candidates = [m for m in moves if m.has_tag(MoveTag.DESPERATION, MoveTag.FINISHER)]
    if not candidates:
        return LegalMoves(notes=notes, no_move_reason="Desperation phase: no desperation or finisher move available")

    finishers = [m for m in candidates if m.has_tag(MoveTag.FINISHER)]
    if finishers:
        candidates = finishers
        notes.append("Desperation phase: finishers only")

    forced = _strongest(candidates)
    notes.append(f"Desperation phase: forced {forced.name}")
    return LegalMoves(moves=candidates, forced=forced, notes=notes)


def _escalation(moves: List[Move], notes: List[str]) -> LegalMoves:
    kept = [m for m in moves if m.has_tag(MoveTag.ESCALATION) or not m.is_basic]
    if not kept:
        return LegalMoves(notes=notes, no_move_reason="Escalation phase: only basic moves remain")
    dropped = len(moves) - len(kept)
    if dropped:
        notes.append(f"Escalation phase: dropped {dropped} basic move(s)")
    return LegalMoves(moves=kept, notes=notes)


def _normal(moves: List[Move], me: CombatantSnapshot, window: int, notes: List[str]) -> LegalMoves:
    stale = stale_move_names(me.move_history, window)
    fresh = [m for m in moves if m.name not in stale]
    if not fresh:
        if stale & {m.name for m in moves}:
            notes.append("Every move is stale; staleness filter skipped")
        return LegalMoves(moves=moves, notes=notes)
    for m in moves:
        if m.name in stale:
            notes.append(f"Dropped stale move {m.name}")
    return LegalMoves(moves=fresh, notes=notes)


def filter_legal_moves(
    catalog: Sequence[Move],
    me: CombatantSnapshot,
    phase: Phase,
    config: TacticalConfig = DEFAULT_CONFIG,
) -> LegalMoves:
    """
    Apply availability, then exactly one phase rule.

    An empty result is a game state, not an error: the caller gets no_move_reason.
    """
    notes: List[str] = []
    moves = available_moves(catalog, me)
    unavailable = len(catalog) - len(moves)
    if unavailable:
        notes.append(f"{unavailable} move(s) on cooldown or out of uses")
    if not moves:
        return LegalMoves(notes=notes, no_move_reason="No move is off cooldown with uses remaining")

    match phase:
        case Phase.DESPERATION:
            return _desperation(moves, notes)
        case Phase.ESCALATION:
            return _escalation(moves, notes)
        case _:
            return _normal(moves, me, config.stale_window, notes)
