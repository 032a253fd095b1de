"""Shared builders for tactician tests."""

from dataclasses import replace
from typing import Any, Dict, Iterable, Optional

import pytest

from tactician.config import DEFAULT_CONFIG
from tactician.dice import Dice
from tactician.models import CombatantSnapshot, LogEntry, Move
from tactician.systems.ai.context import TacticalContext

# Scores without jitter, for exact arithmetic.
QUIET_CONFIG = replace(DEFAULT_CONFIG, noise_spread=0.0)


def build_move(name: str, move_class: str = "attack", **kw: Any) -> Move:
    return Move(name=name, move_class=move_class, **kw)


def build_fighter(
    name: str,
    *,
    health: int = 100,
    defense: int = 5,
    chi: int = 5,
    moves: Iterable[Move] = (),
    history: Iterable[str] = (),
    cooldowns: Optional[Dict[str, int]] = None,
    **kw: Any,
) -> CombatantSnapshot:
    return CombatantSnapshot(
        name=name,
        health=health,
        defense=defense,
        resources={"chi": chi},
        moves=list(moves),
        move_history=list(history),
        cooldowns=dict(cooldowns or {}),
        **kw,
    )


def build_log(*rows: tuple) -> list[LogEntry]:
    """rows are (actor, damage) pairs, one move entry each."""
    return [LogEntry(turn=i + 1, actor=actor, action="hit", damage=dmg) for i, (actor, dmg) in enumerate(rows)]


_NEUTRAL_CONTEXT: Dict[str, Any] = dict(
    my_health=100,
    my_defense=10,
    my_chi=5,
    enemy_health=100,
    enemy_defense=10,
    enemy_chi=5,
    last_my_move=None,
    last_enemy_move=None,
    enemy_defense_streak=0,
    my_attack_streak=0,
    is_losing=False,
    is_dominating=False,
    enemy_is_turtling=False,
    enemy_vulnerable=False,
    has_momentum=False,
    burst_available=False,
    enemy_burst_threat=False,
    chi_pressure=False,
    health_pressure=False,
    enemy_pattern="unknown",
    my_pattern="unknown",
    turn_count=8,
    is_early_game=False,
    is_mid_game=True,
    is_late_game=False,
    my_recent_damage=0,
    enemy_recent_damage=0,
    damage_ratio=1.0,
    my_cooldown_pressure=False,
    enemy_cooldown_pressure=False,
    enemy_evasive=False,
)


def build_context(**overrides: Any) -> TacticalContext:
    """Mid-game, even fight, no pressure anywhere unless overridden."""
    return TacticalContext(**{**_NEUTRAL_CONTEXT, **overrides})


@pytest.fixture
def dice() -> Dice:
    return Dice(seed=1234)


@pytest.fixture
def make_move():
    return build_move


@pytest.fixture
def make_fighter():
    return build_fighter


@pytest.fixture
def make_context():
    return build_context


@pytest.fixture
def make_log():
    return build_log


@pytest.fixture
def quiet_config():
    return QUIET_CONFIG
