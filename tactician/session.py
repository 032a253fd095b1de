# tactician/session.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .config import DEFAULT_CONFIG, DuelConfig, TacticalConfig
from .dice import Dice
from .models import CombatantSnapshot, LogEntry, Move, MoveTag, Phase
from .rules import DuelRules
from .systems.ai.controller import DecisionState, DecisionTrace, TacticalController
from .systems.ai.interface import MoveController

logger = logging.getLogger(__name__)

EntrySink = Callable[[LogEntry], None]

# What a fighter does when the controller reports no legal move.
STRUGGLE = Move(name="Struggle", move_class="attack", power=5, tags=frozenset({MoveTag.BASIC}))


@dataclass(frozen=True)
class DuelResult:
    winner: Optional[str]
    turns: int
    log: List[LogEntry]
    traces: List[DecisionTrace]


@dataclass
class DuelSession:
    """
    Runs one AI-vs-AI duel to completion.

    Owns the caller-side concerns the AI does not: phase tracking, per-agent
    DecisionState, resolving a "no move" decision, and the battle log.
    """
    dice: Dice = field(default_factory=Dice)
    config: DuelConfig = field(default_factory=DuelConfig)
    tactical: TacticalConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    rules: DuelRules = field(init=False)

    def __post_init__(self) -> None:
        self.rules = DuelRules(self.dice, self.config)

    def _emit(self, entries: List[LogEntry], sink: Optional[EntrySink]) -> None:
        if sink is None:
            return
        for e in entries:
            sink(e)

    def phase_for(self, actor: CombatantSnapshot, turn: int, quiet_turns: int) -> Phase:
        if actor.health <= actor.max_health * self.config.desperation_fraction:
            return Phase.DESPERATION
        if turn > self.config.escalation_turn or quiet_turns >= self.config.stalemate_turns:
            return Phase.ESCALATION
        return Phase.NORMAL

    def run(
        self,
        a: CombatantSnapshot,
        b: CombatantSnapshot,
        *,
        controllers: Optional[Dict[str, MoveController]] = None,
        max_turns: Optional[int] = None,
        on_entry: Optional[EntrySink] = None,
    ) -> DuelResult:
        if a.name == b.name:
            raise ValueError("Duelists need distinct names.")

        controllers = dict(controllers or {})
        for c in (a, b):
            controllers.setdefault(c.name, TacticalController(config=self.tactical, dice=self.dice.spawn()))

        limit = max_turns if max_turns is not None else self.config.max_turns
        log: List[LogEntry] = []
        traces: List[DecisionTrace] = []
        states: Dict[str, Optional[DecisionState]] = {a.name: None, b.name: None}
        quiet_turns = 0
        turn = 0

        while a.alive and b.alive and turn < limit:
            turn += 1
            actor, target = (a, b) if turn % 2 == 1 else (b, a)

            turn_entry = LogEntry(
                turn=turn,
                actor=actor.name,
                type="turn_start",
                message=f"--- Turn {turn}, {actor.name} ---",
            )
            log.append(turn_entry)
            self._emit([turn_entry], on_entry)

            effect_entries, stunned = self.rules.start_turn(actor, turn)
            log.extend(effect_entries)
            self._emit(effect_entries, on_entry)
            if not actor.alive:
                break

            if stunned:
                self.rules.tick_cooldowns(actor)
                e = LogEntry(turn=turn, actor=actor.name, type="system", message=f"{actor.name} is stunned and loses the turn.")
                log.append(e)
                self._emit([e], on_entry)
                quiet_turns += 1
                continue

            phase = self.phase_for(actor, turn, quiet_turns)
            # The AI reasons over actions only; bookkeeping entries would skew its turn count.
            moves_log = [e for e in log if e.type == "move"]
            decision = controllers[actor.name].decide(
                actor, target, turn, moves_log, actor.moves, phase, states[actor.name]
            )
            states[actor.name] = decision.state
            traces.append(decision.trace)

            move = decision.move
            if move is None:
                logger.info("turn %d: %s has no legal move (%s), struggling", turn, actor.name, decision.trace.no_move_reason)
                move = STRUGGLE

            resolved = self.rules.resolve_move(turn, actor, target, move)
            log.extend(resolved)
            self._emit(resolved, on_entry)

            quiet_turns = 0 if any(e.damage > 0 for e in resolved) else quiet_turns + 1

        winner: Optional[str] = None
        if a.alive != b.alive:
            winner = a.name if a.alive else b.name

        end_msg = f"Duel ends. Winner: {winner}" if winner is not None else "Duel ends. No winner (turn limit or double knockout)."
        end_entry = LogEntry(turn=turn, actor=None, type="battle_end", message=end_msg, data={"winner": winner})
        log.append(end_entry)
        self._emit([end_entry], on_entry)
        logger.info("%s after %d turns", end_msg, turn)

        return DuelResult(winner=winner, turns=turn, log=log, traces=traces)
