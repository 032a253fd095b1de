# tactician/systems/ai/intents.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Literal, TypeAlias

from ...config import DEFAULT_CONFIG, TacticalConfig
from .context import TacticalContext

IntentType: TypeAlias = Literal[
    "break_defense",
    "go_for_finish",
    "defend",
    "stall",
    "restore_chi",
    "standard_attack",
    "wait_and_see",
    "pressure_enemy",
    "counter_attack",
    "build_momentum",
    "desperate_attack",
    "conservative_play",
]


@dataclass(frozen=True)
class Intent:
    """
    A multi-turn tactical goal.

    priority is 1..10 (higher is more urgent); expected_duration is a hint in turns.
    """
    type: IntentType
    description: str
    priority: int
    expected_duration: int = 1

    @property
    def label(self) -> str:
        return self.type.replace("_", " ")


def choose_intent(context: TacticalContext, config: TacticalConfig = DEFAULT_CONFIG) -> Intent:
    """
    Ordered decision table: the first matching rule wins.
    """
    c = context

    # Emergencies
    if c.health_pressure and c.enemy_burst_threat:
        return Intent("defend", "Critical health and enemy has burst threat. Defend at all costs.", 10, 2)
    if c.health_pressure and c.is_losing:
        return Intent("desperate_attack", "Low health and losing. Go for broke with maximum damage.", 9, 1)

    # Resources
    if c.chi_pressure:
        return Intent("restore_chi", "Low on chi. Use low-cost moves and stall to recover.", 8, 2)

    # Openings
    if c.enemy_is_turtling and c.burst_available:
        return Intent("break_defense", "Enemy is turtling and we have burst. Break through their defense.", 7, 2)
    if c.enemy_vulnerable and c.burst_available:
        return Intent("go_for_finish", "Enemy is vulnerable and we have finishing power. End the fight!", 7, 1)
    if c.enemy_vulnerable and not c.burst_available:
        return Intent("pressure_enemy", "Enemy is vulnerable. Apply pressure with available moves.", 6, 2)

    # Momentum
    if c.has_momentum and c.burst_available:
        return Intent("build_momentum", "We have momentum and burst. Keep the pressure on.", 6, 2)
    if c.is_dominating and not c.enemy_burst_threat:
        return Intent("standard_attack", "We are dominating. Continue with standard attacks.", 4, 3)

    # Defensive
    if c.enemy_burst_threat and not c.health_pressure:
        return Intent("defend", "Enemy has burst threat. Prepare defensive stance.", 6, 2)
    if c.is_losing and not c.health_pressure:
        return Intent("stall", "Currently losing. Play defensively and look for opportunities.", 5, 3)

    if c.enemy_pattern == "aggressive" and c.my_defense > config.counter_defense_threshold:
        return Intent("counter_attack", "Enemy is aggressive and we have defense. Counter-attack.", 5, 2)

    if c.is_early_game and not c.has_momentum:
        return Intent("conservative_play", "Early game, no momentum. Play conservatively and gather information.", 3, 3)

    return Intent("standard_attack", "Proceed with standard attacks.", 3, 2)


# Continuation predicates over the *new* context. Intents missing here are always kept.
_STILL_VALID: Dict[str, Callable[[TacticalContext], bool]] = {
    "defend": lambda c: c.health_pressure or c.enemy_burst_threat,
    "restore_chi": lambda c: c.chi_pressure,
    "break_defense": lambda c: c.enemy_is_turtling,
    "go_for_finish": lambda c: c.enemy_vulnerable,
    "pressure_enemy": lambda c: c.enemy_vulnerable,
    "build_momentum": lambda c: c.has_momentum,
    "stall": lambda c: c.is_losing,
    "desperate_attack": lambda c: c.health_pressure and c.is_losing,
    "counter_attack": lambda c: c.enemy_pattern == "aggressive",
    "conservative_play": lambda c: c.is_early_game,
}


def should_maintain_intent(intent: Intent, context: TacticalContext) -> bool:
    check = _STILL_VALID.get(intent.type)
    if check is None:
        return True
    return bool(check(context))


def intent_priority(intent_type: IntentType, context: TacticalContext) -> int:
    """
    How urgent an intent would be right now (0..10), whether or not it is active.
    """
    c = context
    match intent_type:
        case "defend":
            return 10 if c.health_pressure else 6
        case "desperate_attack":
            return 9 if c.health_pressure and c.is_losing else 4
        case "restore_chi":
            return 8 if c.chi_pressure else 2
        case "break_defense":
            return 7 if c.enemy_is_turtling else 3
        case "go_for_finish":
            return 7 if c.enemy_vulnerable else 3
        case "pressure_enemy":
            return 6 if c.enemy_vulnerable else 3
        case "build_momentum":
            return 6 if c.has_momentum else 3
        case "counter_attack":
            return 5 if c.enemy_pattern == "aggressive" else 2
        case "stall":
            return 5 if c.is_losing else 2
        case "conservative_play":
            return 3 if c.is_early_game else 1
        case "wait_and_see":
            return 2
        case _:
            return 3
