# tactician/systems/ai/context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Mapping, Optional, Sequence, TypeAlias

from ...config import DEFAULT_CONFIG, TacticalConfig
from ...models import CombatantSnapshot, LogEntry, Move

Pattern: TypeAlias = Literal["aggressive", "defensive", "mixed", "unknown"]
MoveKind: TypeAlias = Literal["attack", "defense"]

# Substring fallback for history entries that don't name a known move.
_DEFENSE_WORDS = ("defend", "defense", "shield", "guard")
_ATTACK_WORDS = ("attack", "strike")


@dataclass(frozen=True)
class TacticalContext:
    """
    Flat snapshot of everything the intent selector and scorer look at.

    Derived fresh every turn from (me, enemy, log) and never persisted beyond the
    decision state that records it. Same inputs, same context.
    """
    my_health: int
    my_defense: int
    my_chi: int
    enemy_health: int
    enemy_defense: int
    enemy_chi: int

    last_my_move: Optional[str]
    last_enemy_move: Optional[str]
    enemy_defense_streak: int
    my_attack_streak: int

    is_losing: bool
    is_dominating: bool
    enemy_is_turtling: bool
    enemy_vulnerable: bool
    has_momentum: bool

    burst_available: bool
    enemy_burst_threat: bool
    chi_pressure: bool
    health_pressure: bool

    enemy_pattern: Pattern
    my_pattern: Pattern

    turn_count: int
    is_early_game: bool
    is_mid_game: bool
    is_late_game: bool

    my_recent_damage: int
    enemy_recent_damage: int
    damage_ratio: float

    my_cooldown_pressure: bool
    enemy_cooldown_pressure: bool
    enemy_evasive: bool = False

    @property
    def game_phase(self) -> str:
        if self.is_early_game:
            return "early"
        if self.is_mid_game:
            return "mid"
        return "late"


@dataclass(frozen=True)
class MovePattern:
    """
    Usage stats for one move name inside a history window.
    """
    name: str
    frequency: int
    last_index: int
    consecutive_uses: int
    is_spam: bool


def _moves_by_name(moves: Sequence[Move]) -> Dict[str, Move]:
    return {m.name: m for m in moves}


def classify_history_entry(name: str, known: Mapping[str, Move]) -> Optional[MoveKind]:
    """
    Attack / defense / neither for one history entry.
    Known moves go by their class; unknown names fall back to keywords.
    """
    move = known.get(name)
    if move is not None:
        if move.is_attack:
            return "attack"
        if move.is_defense:
            return "defense"
        return None

    lowered = (name or "").lower()
    if any(w in lowered for w in _DEFENSE_WORDS):
        return "defense"
    if any(w in lowered for w in _ATTACK_WORDS):
        return "attack"
    return None


def count_streak(history: Sequence[str], kind: MoveKind, known: Mapping[str, Move]) -> int:
    count = 0
    for name in reversed(history):
        if classify_history_entry(name, known) != kind:
            break
        count += 1
    return count


def classify_pattern(history: Sequence[str], known: Mapping[str, Move], window: int = 5) -> Pattern:
    if not history:
        return "unknown"

    recent = history[-window:]
    kinds = [classify_history_entry(n, known) for n in recent]
    attacks = kinds.count("attack")
    defenses = kinds.count("defense")

    if attacks > defenses + 1:
        return "aggressive"
    if defenses > attacks + 1:
        return "defensive"
    return "mixed"


def detect_move_patterns(history: Sequence[str], window: int = 5) -> List[MovePattern]:
    """
    Per-move frequency and run length over the last `window` entries.

    A move is spam when it shows up 3+ times in the window or is still on a run of
    2+ back-to-back uses.
    """
    recent = list(history[-window:])
    freq: Dict[str, int] = {}
    last_index: Dict[str, int] = {}
    run: Dict[str, int] = {}

    for i, name in enumerate(recent):
        freq[name] = freq.get(name, 0) + 1
        last_index[name] = i
        run[name] = run.get(name, 0) + 1 if i > 0 and recent[i - 1] == name else 1

    # Keep first-seen order.
    seen: List[str] = []
    for name in recent:
        if name not in seen:
            seen.append(name)

    return [
        MovePattern(
            name=name,
            frequency=freq[name],
            last_index=last_index[name],
            consecutive_uses=run[name],
            is_spam=freq[name] >= 3 or run[name] >= 2,
        )
        for name in seen
    ]


def stale_move_names(history: Sequence[str], window: int = 5) -> set[str]:
    return {p.name for p in detect_move_patterns(history, window) if p.is_spam}


def _has_burst(c: CombatantSnapshot, moves: Sequence[Move], threshold: int) -> bool:
    return any(
        m.power > threshold and not c.on_cooldown(m.name) and c.can_afford(m) and not c.exhausted(m)
        for m in moves
    )


def _recent_damage(entries: Sequence[LogEntry], actor: str) -> int:
    return sum(e.damage for e in entries if e.actor == actor and e.damage > 0)


def extract_context(
    me: CombatantSnapshot,
    enemy: CombatantSnapshot,
    log: Sequence[LogEntry],
    config: TacticalConfig = DEFAULT_CONFIG,
    own_moves: Optional[Sequence[Move]] = None,
) -> TacticalContext:
    """
    Derive the tactical context for `me` facing `enemy`.

    own_moves is the catalog `me` picks from; it defaults to `me.moves`.
    Pure: reads the snapshots and the log, mutates nothing.
    """
    mine = list(own_moves) if own_moves is not None else me.moves
    my_known = _moves_by_name(mine)
    enemy_known = _moves_by_name(enemy.moves)

    recent = list(log[-config.damage_window:]) if config.damage_window > 0 else []
    my_recent_damage = _recent_damage(recent, me.name)
    enemy_recent_damage = _recent_damage(recent, enemy.name)
    damage_ratio = my_recent_damage / enemy_recent_damage if enemy_recent_damage > 0 else 1.0

    enemy_defense_streak = count_streak(enemy.move_history, "defense", enemy_known)
    my_attack_streak = count_streak(me.move_history, "attack", my_known)

    turn_count = len(log)

    return TacticalContext(
        my_health=me.health,
        my_defense=me.defense,
        my_chi=me.chi,
        enemy_health=enemy.health,
        enemy_defense=enemy.defense,
        enemy_chi=enemy.chi,
        last_my_move=me.last_move,
        last_enemy_move=enemy.last_move,
        enemy_defense_streak=enemy_defense_streak,
        my_attack_streak=my_attack_streak,
        is_losing=me.health < enemy.health - config.losing_margin,
        is_dominating=me.health > enemy.health + config.losing_margin,
        enemy_is_turtling=enemy_defense_streak >= config.turtle_streak,
        enemy_vulnerable=enemy.defense < config.vulnerable_defense_threshold,
        has_momentum=my_recent_damage > enemy_recent_damage + config.momentum_margin,
        burst_available=_has_burst(me, mine, config.burst_power_threshold),
        enemy_burst_threat=_has_burst(enemy, enemy.moves, config.burst_power_threshold),
        chi_pressure=me.chi < config.chi_pressure_threshold,
        health_pressure=me.health < me.max_health * config.health_pressure_fraction,
        enemy_pattern=classify_pattern(enemy.move_history, enemy_known, config.pattern_window),
        my_pattern=classify_pattern(me.move_history, my_known, config.pattern_window),
        turn_count=turn_count,
        is_early_game=turn_count <= config.early_game_max_turn,
        is_mid_game=config.early_game_max_turn < turn_count <= config.late_game_min_turn,
        is_late_game=turn_count > config.late_game_min_turn,
        my_recent_damage=my_recent_damage,
        enemy_recent_damage=enemy_recent_damage,
        damage_ratio=damage_ratio,
        my_cooldown_pressure=any(v > 0 for v in me.cooldowns.values()),
        enemy_cooldown_pressure=any(v > 0 for v in enemy.cooldowns.values()),
        enemy_evasive=enemy.has_effect("EVASIVE"),
    )


def summarize_context(context: TacticalContext) -> str:
    """Multi-line human summary for debug output."""
    def yn(flag: bool) -> str:
        return "Yes" if flag else "No"

    return "\n".join(
        [
            f"- Health: {context.my_health} vs {context.enemy_health}",
            f"- Momentum: {yn(context.has_momentum)}",
            f"- Enemy Pattern: {context.enemy_pattern}",
            f"- Game Phase: {context.game_phase.capitalize()}",
            f"- Burst Available: {yn(context.burst_available)}",
            f"- Enemy Threat: {yn(context.enemy_burst_threat)}",
            f"- Chi Pressure: {yn(context.chi_pressure)}",
            f"- Health Pressure: {yn(context.health_pressure)}",
        ]
    )
