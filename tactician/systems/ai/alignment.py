# tactician/systems/ai/alignment.py
from __future__ import annotations

from typing import List

from ...models import Move, MoveTag
from .intents import Intent

ALIGNMENT_FLOOR = 0
ALIGNMENT_CEILING = 10
NEUTRAL_ALIGNMENT = 5


def calculate_intent_alignment(move: Move, intent: Intent) -> int:
    """
    How well `move` serves `intent`, clamped to 0..10 (5 is neutral).

    Moves that actively work against the intent lose alignment rather than just
    missing out on bonuses.
    """
    a = NEUTRAL_ALIGNMENT

    match intent.type:
        case "break_defense":
            if move.has_tag(MoveTag.PIERCING) or move.power > 15:
                a += 4
            if move.is_attack:
                a += 2
            if move.is_defense:
                a -= 3
        case "go_for_finish":
            if move.power > 10:
                a += 5
            if move.is_attack:
                a += 3
            if move.is_defense:
                a -= 4
        case "defend":
            if move.is_defense:
                a += 5
            if move.move_class == "parry_retaliate":
                a += 3
            if move.has_tag(MoveTag.HEALING):
                a += 2
        case "stall":
            if move.is_defense:
                a += 4
            if move.has_tag(MoveTag.REST):
                a += 3
        case "restore_chi":
            if move.has_tag(MoveTag.REST):
                a += 5
            if move.chi_cost <= 1:
                a += 3
            elif move.chi_cost > 3:
                a -= 3
        case "pressure_enemy":
            if move.is_attack:
                a += 4
            if move.effect_is("BURN"):
                a += 3
            if move.is_defense:
                a -= 3
        case "desperate_attack":
            if move.is_attack:
                a += 5
            if move.power > 10:
                a += 3
            if move.is_defense:
                a -= 3
        case "counter_attack":
            if move.has_tag(MoveTag.COUNTER):
                a += 4
            if move.is_attack:
                a += 2
        case "build_momentum":
            if move.is_attack:
                a += 3
            if move.power > 25:
                a += 2
            if move.is_defense:
                a -= 2
        case "conservative_play":
            if move.chi_cost <= 2:
                a += 2
            if move.is_defense:
                a += 2
        case "standard_attack":
            if move.is_attack:
                a += 2
        case "wait_and_see":
            if move.chi_cost <= 1:
                a += 2
            if move.has_tag(MoveTag.REST):
                a += 2

    return max(ALIGNMENT_FLOOR, min(ALIGNMENT_CEILING, a))


def alignment_reasons(move: Move, intent: Intent) -> List[str]:
    reasons: List[str] = []

    match intent.type:
        case "break_defense":
            if move.has_tag(MoveTag.PIERCING):
                reasons.append("Piercing move for defense breaking")
            if move.power > 30:
                reasons.append("High power for defense breaking")
            if move.is_defense:
                reasons.append("Defensive move does nothing to break defense")
        case "go_for_finish":
            if move.power > 40:
                reasons.append("High power for finishing")
            if move.has_tag(MoveTag.HIGH_DAMAGE, MoveTag.FINISHER):
                reasons.append("High damage move for finishing")
            if move.is_defense:
                reasons.append("Defensive move wastes the finishing window")
        case "defend":
            if move.is_defense:
                reasons.append("Defense move for defending")
            if move.move_class == "parry_retaliate":
                reasons.append("Parry retaliate move for defending")
            if move.has_tag(MoveTag.HEALING):
                reasons.append("Healing move for defending")
        case "stall":
            if move.is_defense:
                reasons.append("Defense move for stalling")
            if move.has_tag(MoveTag.REST):
                reasons.append("Rest move for stalling")
        case "restore_chi":
            if move.has_tag(MoveTag.REST):
                reasons.append("Rest move for chi restoration")
            if move.chi_cost <= 1:
                reasons.append("Low cost move for chi restoration")
            elif move.chi_cost > 3:
                reasons.append("Expensive move drains chi further")
        case "pressure_enemy":
            if move.is_attack:
                reasons.append("Attack move for pressure")
            if move.effect_is("BURN"):
                reasons.append("Burn keeps the pressure on")
        case "desperate_attack":
            if move.is_attack:
                reasons.append("Attack move for desperate situation")
            if move.has_tag(MoveTag.DESPERATE, MoveTag.DESPERATION):
                reasons.append("Desperate move for desperate situation")
        case "counter_attack":
            if move.has_tag(MoveTag.COUNTER):
                reasons.append("Counter move for counter-attacking")
        case "build_momentum":
            if move.power > 25:
                reasons.append("Good power for momentum")
        case "conservative_play":
            if move.chi_cost <= 2:
                reasons.append("Low cost move for conservative play")
            if move.is_defense:
                reasons.append("Defensive move for conservative play")
        case "standard_attack":
            if move.is_attack:
                reasons.append("Attack move for standard play")
        case "wait_and_see":
            if move.has_tag(MoveTag.REST):
                reasons.append("Rest move for waiting")

    return reasons
