# tactician/systems/ai/controller.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ...config import DEFAULT_CONFIG, TacticalConfig
from ...dice import Dice
from ...models import CombatantSnapshot, LogEntry, Move, Phase
from .context import TacticalContext, extract_context, summarize_context
from .intents import Intent, IntentType, choose_intent, should_maintain_intent
from .legality import filter_legal_moves
from .scoring import MoveScore, score_moves, top_moves

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecisionState:
    """
    What one agent carries from one turn to the next. Replaced wholesale by every
    decision; the caller holds it for the length of a battle.
    """
    intent: Intent
    intent_turn_count: int
    last_intent_change: int
    context: TacticalContext


@dataclass(frozen=True)
class DecisionTrace:
    """
    Why a move was (or was not) chosen. Stable enough to assert on in tests.
    """
    turn: int
    agent: str
    phase: Phase
    chosen: Optional[str]
    intent: IntentType
    intent_description: str
    intent_turns: int
    alternatives: List[MoveScore] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    forced: bool = False
    no_move_reason: Optional[str] = None

    def summary(self) -> str:
        head = f"Turn {self.turn} {self.agent} [{self.phase.value}]"
        if self.chosen is None:
            return f"{head}: no move ({self.no_move_reason})"

        lines = [
            f"{head}: {self.chosen}{' (forced)' if self.forced else ''}",
            f"  Intent: {self.intent} for {self.intent_turns} turn(s) - {self.intent_description}",
        ]
        for i, alt in enumerate(self.alternatives, start=1):
            lines.append(f"  {i}. {alt.describe()}")
        for note in self.notes:
            lines.append(f"  note: {note}")
        return "\n".join(lines)


@dataclass(frozen=True)
class Decision:
    move: Optional[Move]
    trace: DecisionTrace
    state: DecisionState


def _check_inputs(
    me: object,
    enemy: object,
    turn: object,
    log: object,
    catalog: object,
    phase: object,
    previous_state: object,
) -> Tuple[Phase, List[LogEntry], List[Move]]:
    if not isinstance(me, CombatantSnapshot):
        raise TypeError(f"me must be a CombatantSnapshot, got {type(me).__name__}")
    if not isinstance(enemy, CombatantSnapshot):
        raise TypeError(f"enemy must be a CombatantSnapshot, got {type(enemy).__name__}")
    if isinstance(turn, bool) or not isinstance(turn, int):
        raise TypeError("turn must be an int")
    if turn < 0:
        raise ValueError("turn must be >= 0")
    if isinstance(log, (str, bytes)) or isinstance(catalog, (str, bytes)):
        raise TypeError("log and catalog must be sequences, not strings")
    # Materialized once so one-shot iterables survive the checks below.
    entries, moves = list(log), list(catalog)  # type: ignore[call-overload]
    if not all(isinstance(e, LogEntry) for e in entries):
        raise TypeError("log must be a sequence of LogEntry")
    if not all(isinstance(m, Move) for m in moves):
        raise TypeError("catalog must be a sequence of Move")
    if previous_state is not None and not isinstance(previous_state, DecisionState):
        raise TypeError("previous_state must be a DecisionState or None")
    # Strings are accepted for convenience; unknown names raise ValueError.
    return (phase if isinstance(phase, Phase) else Phase(phase)), entries, moves


@dataclass
class TacticalController:
    """
    Picks one move per turn for one agent:
      - read the situation (context)
      - keep or replace the multi-turn intent
      - drop moves the phase or repetition rules forbid
      - score what is left and take the best

    Holds no per-battle state; that lives in the DecisionState the caller passes back.
    """
    config: TacticalConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    dice: Dice = field(default_factory=Dice)

    def _next_intent(
        self, context: TacticalContext, turn: int, previous: Optional[DecisionState]
    ) -> tuple[Intent, int, int]:
        if previous is not None and should_maintain_intent(previous.intent, context):
            return previous.intent, previous.intent_turn_count + 1, previous.last_intent_change

        intent = choose_intent(context, self.config)
        if previous is None or previous.intent.type != intent.type:
            logger.info(
                "turn %d: intent %s -> %s (%s)",
                turn,
                previous.intent.type if previous else None,
                intent.type,
                intent.description,
            )
        return intent, 1, turn

    def decide(
        self,
        me: CombatantSnapshot,
        enemy: CombatantSnapshot,
        turn: int,
        log: Sequence[LogEntry],
        catalog: Sequence[Move],
        phase: Phase = Phase.NORMAL,
        previous_state: Optional[DecisionState] = None,
    ) -> Decision:
        phase, log, catalog = _check_inputs(me, enemy, turn, log, catalog, phase, previous_state)

        context = extract_context(me, enemy, log, self.config, own_moves=catalog)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("turn %d context for %s:\n%s", turn, me.name, summarize_context(context))
        intent, held, changed = self._next_intent(context, turn, previous_state)
        state = DecisionState(intent=intent, intent_turn_count=held, last_intent_change=changed, context=context)

        legal = filter_legal_moves(catalog, me, phase, self.config)

        if legal.empty:
            logger.debug("turn %d: %s has no legal move (%s)", turn, me.name, legal.no_move_reason)
            trace = DecisionTrace(
                turn=turn,
                agent=me.name,
                phase=phase,
                chosen=None,
                intent=intent.type,
                intent_description=intent.description,
                intent_turns=held,
                notes=list(legal.notes),
                no_move_reason=legal.no_move_reason,
            )
            return Decision(move=None, trace=trace, state=state)

        ranked = score_moves(legal.moves, me, enemy, context, intent, self.dice, self.config)
        chosen = legal.forced if legal.forced is not None else ranked[0].move

        trace = DecisionTrace(
            turn=turn,
            agent=me.name,
            phase=phase,
            chosen=chosen.name,
            intent=intent.type,
            intent_description=intent.description,
            intent_turns=held,
            alternatives=top_moves(ranked, self.config.trace_depth),
            notes=list(legal.notes),
            forced=legal.forced is not None,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", trace.summary())
        return Decision(move=chosen, trace=trace, state=state)
