# tactician/systems/ai/scoring.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ...config import DEFAULT_CONFIG, TacticalConfig
from ...dice import Dice
from ...models import CombatantSnapshot, Move, MoveTag
from .alignment import alignment_reasons, calculate_intent_alignment
from .context import TacticalContext
from .intents import Intent

# Intents under which a defensive move is close to worthless.
_DEFENSE_SUPPRESSED = frozenset({"go_for_finish", "pressure_enemy"})


@dataclass(frozen=True)
class MoveScore:
    """
    One scored candidate with the explanations that produced the number.
    reasons/context_factors are for debugging and traces only.
    """
    move: Move
    score: float
    reasons: Tuple[str, ...] = ()
    context_factors: Tuple[str, ...] = ()
    intent_alignment: int = 0

    def describe(self) -> str:
        parts = " - ".join(self.reasons)
        factors = ", ".join(self.context_factors)
        return f"{self.move.name} ({self.score:.2f}): {parts} [Intent: {self.intent_alignment}/10] [Context: {factors}]"


@dataclass
class _Tally:
    score: float = 0.0
    reasons: List[str] = field(default_factory=list)
    factors: List[str] = field(default_factory=list)

    def add(self, amount: float, reason: str = "") -> None:
        self.score += amount
        if reason:
            self.reasons.append(reason)


# --- Base class value ------------------------------------------------------


def _score_attack(t: _Tally, move: Move, enemy: CombatantSnapshot, context: TacticalContext,
                  intent: Intent, config: TacticalConfig) -> None:
    net = max(1, move.power - enemy.defense)
    t.add(net * config.attack_damage_multiplier, f"Base attack ({net} damage)")

    if move.effect_is("BURN", "STUN"):
        t.add(15, f"Applies {move.applies_effect.type} effect")
    elif move.applies_effect is not None:
        t.reasons.append(f"Applies {move.applies_effect.type} effect")

    if enemy.has_effect("STUN"):
        t.reasons.append("Enemy is stunned - perfect opportunity")
    if enemy.has_effect("DEFENSE_DOWN"):
        t.reasons.append("Enemy has reduced defense")

    match intent.type:
        case "go_for_finish":
            if move.power > 10:
                t.add(80, "High base damage for finishing blow")
            if context.enemy_vulnerable:
                t.add(50, "Enemy vulnerable - perfect for finish")
        case "break_defense":
            if move.has_tag(MoveTag.PIERCING):
                t.add(100, "Piercing move for defense breaking")
        case "pressure_enemy":
            t.add(move.power * 1.5, "Pressure enemy with damage")
            if move.effect_is("BURN"):
                t.add(20, "Burn effect for sustained pressure")
        case "desperate_attack":
            t.add(move.power * 2, "Desperate situation - maximize damage")
        case "build_momentum":
            if context.has_momentum:
                t.reasons.append("Build on existing momentum")
        case "counter_attack":
            if context.enemy_pattern == "aggressive":
                t.reasons.append("Counter aggressive enemy")

    if context.enemy_vulnerable:
        t.factors.append("Enemy vulnerable")
    if context.enemy_is_turtling:
        t.factors.append("Enemy turtling")
    if context.health_pressure and move.has_tag(MoveTag.DESPERATE):
        t.factors.append("Desperate situation - use desperate move")
    if context.enemy_defense > 15 and move.has_tag(MoveTag.PIERCING):
        t.factors.append("Enemy has high defense - use piercing")
    if context.chi_pressure and move.chi_cost > 3:
        t.factors.append("Chi pressure - avoid expensive attacks")


def _score_defense(t: _Tally, move: Move, me: CombatantSnapshot, context: TacticalContext,
                   intent: Intent, config: TacticalConfig) -> None:
    d = _Tally()
    d.add(move.power * config.defense_power_multiplier, f"Base defense ({move.power} defense)")

    effect = move.applies_effect
    if effect is not None:
        d.add(6, f"Applies {effect.type} effect")
        if effect.type == "DEFENSE_UP":
            d.add(8)
        elif effect.type == "HEAL_OVER_TIME":
            d.add(10)
        elif effect.type == "ATTACK_UP":
            d.add(4)
        if effect.duration >= 3:
            d.add(4, f"Long duration effect ({effect.duration} turns)")

    if me.has_effect("DEFENSE_DOWN"):
        d.add(12, "We have reduced defense - need protection")
        if move.effect_is("DEFENSE_UP"):
            d.add(8, "Defense-up effect counters our defense down")
    if me.has_effect("BURN"):
        d.add(8, "We are burning - need recovery")
        if move.effect_is("HEAL_OVER_TIME"):
            d.add(10, "Healing effect counters our burn")
    if me.has_effect("STUN"):
        d.add(6, "We are stunned - need recovery")

    match intent.type:
        case "defend":
            d.add(100, "Defensive intent - prioritize protection")
            if move.effect_is("DEFENSE_UP"):
                d.add(50, "Defense-up effect for defensive intent")
        case "stall":
            d.add(80, "Stalling intent - buy time")
            if move.has_tag(MoveTag.REST):
                d.add(40, "Rest effect for stalling")
        case "restore_chi":
            if move.has_tag(MoveTag.REST):
                d.add(120, "Rest effect for chi restoration")
        case "desperate_attack":
            d.add(-50, "Desperate situation - less value for defense")

    if context.health_pressure:
        d.add(30)
        d.factors.append("Under health pressure")
        if move.effect_is("HEAL_OVER_TIME"):
            d.add(8)
            d.factors.append("Healing effect needed for health pressure")
    if context.chi_pressure:
        d.add(8)
        d.factors.append("Under chi pressure")
        if move.has_tag(MoveTag.REST):
            d.add(6)
            d.factors.append("Rest effect needed for chi pressure")
        if move.chi_cost > 2:
            d.add(-8)
            d.factors.append("Chi pressure - avoid expensive defense moves")
    if context.enemy_is_turtling:
        d.add(4)
        d.factors.append("Enemy turtling - less need for defense")
    if context.is_late_game:
        d.add(6)
        d.factors.append("Late game - defense more valuable")

    if intent.type in _DEFENSE_SUPPRESSED:
        d.score *= config.defense_suppression
        d.reasons.append(f"Defense suppressed while intent is {intent.label}")

    t.score += d.score
    t.reasons.extend(d.reasons)
    t.factors.extend(d.factors)


# --- Contextual adjustments -------------------------------------------------


def _context_bonuses(t: _Tally, move: Move, context: TacticalContext) -> None:
    if context.is_early_game and move.is_defense:
        t.score += 2
        t.factors.append("Early game defense building")
    if context.is_late_game and move.is_attack and move.power > 35:
        t.score += 3
        t.factors.append("Late game high damage")
    if context.enemy_pattern == "defensive" and move.has_tag(MoveTag.PIERCING):
        t.score += 4
        t.factors.append("Counter defensive enemy")
    if context.my_pattern == "aggressive" and move.is_attack:
        t.score += 2
        t.factors.append("Maintain aggressive pattern")
    if context.chi_pressure and move.chi_cost == 0:
        t.score += 3
        t.factors.append("Free move during chi pressure")
    if not context.my_cooldown_pressure and move.cooldown > 0:
        t.score += 1
        t.factors.append("No cooldown pressure")


def _evasion_adjustments(t: _Tally, move: Move, context: TacticalContext, config: TacticalConfig) -> None:
    if not context.enemy_evasive:
        return
    homing = move.has_tag(MoveTag.AOE, MoveTag.TRACKING)
    if move.move_class == "attack" and not homing:
        t.add(-config.evasive_penalty, "Penalty: Opponent is evasive, standard attacks likely to miss.")
    if homing:
        t.add(20, "Bonus: AoE or tracking move counters evasive opponent.")
    if move.has_tag(MoveTag.GATHER):
        t.add(15, "Bonus: Gathering power is a smart response to evasive opponent.")


# --- Public API -------------------------------------------------------------


def score_move(
    move: Move,
    me: CombatantSnapshot,
    enemy: CombatantSnapshot,
    context: TacticalContext,
    intent: Intent,
    dice: Dice,
    config: TacticalConfig = DEFAULT_CONFIG,
) -> MoveScore:
    t = _Tally()

    if move.is_attack:
        _score_attack(t, move, enemy, context, intent, config)
    elif move.is_defense:
        _score_defense(t, move, me, context, intent, config)

    if move.chi_cost > me.chi:
        t.add(-config.chi_penalty, f"Cannot afford chi cost ({move.chi_cost})")
    if me.on_cooldown(move.name):
        t.add(-config.cooldown_penalty, f"Move on cooldown ({me.cooldown_for(move.name)} turns)")

    alignment = calculate_intent_alignment(move, intent)
    t.add(alignment * config.alignment_weight)
    t.reasons.extend(alignment_reasons(move, intent))

    _context_bonuses(t, move, context)
    _evasion_adjustments(t, move, context, config)

    nudge = dice.nudge(config.noise_spread)
    t.score += nudge
    if abs(nudge) > 0.3:
        t.reasons.append(f"Random nudge ({nudge:+.1f})")

    return MoveScore(
        move=move,
        score=t.score,
        reasons=tuple(t.reasons),
        context_factors=tuple(t.factors),
        intent_alignment=alignment,
    )


def score_moves(
    moves: Sequence[Move],
    me: CombatantSnapshot,
    enemy: CombatantSnapshot,
    context: TacticalContext,
    intent: Intent,
    dice: Dice,
    config: TacticalConfig = DEFAULT_CONFIG,
) -> List[MoveScore]:
    """
    Score every move and sort best-first. sorted() is stable, so equal scores keep
    catalog order.
    """
    scored = [score_move(m, me, enemy, context, intent, dice, config) for m in moves]
    return sorted(scored, key=lambda s: s.score, reverse=True)


def top_moves(scores: Sequence[MoveScore], count: int = 3) -> List[MoveScore]:
    return list(scores[:count])
