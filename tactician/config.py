# tactician/config.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TacticalConfig:
    """
    Every tunable threshold the tactical AI uses. Defaults are the tuned values;
    callers override with dataclasses.replace().
    """
    # context extraction
    burst_power_threshold: int = 40
    damage_window: int = 6
    momentum_margin: int = 2
    health_pressure_fraction: float = 0.30
    chi_pressure_threshold: int = 2
    vulnerable_defense_threshold: int = 10
    turtle_streak: int = 3
    pattern_window: int = 5
    losing_margin: int = 10
    early_game_max_turn: int = 4
    late_game_min_turn: int = 12

    # intent selection
    counter_defense_threshold: int = 15

    # scoring
    attack_damage_multiplier: float = 2.5
    defense_power_multiplier: float = 1.5
    defense_suppression: float = 0.1
    chi_penalty: float = 15.0
    cooldown_penalty: float = 20.0
    alignment_weight: float = 2.0
    evasive_penalty: float = 30.0
    noise_spread: float = 0.75

    # controller
    stale_window: int = 5
    trace_depth: int = 3


DEFAULT_CONFIG = TacticalConfig()


@dataclass(frozen=True)
class DuelConfig:
    """
    Knobs for the bundled duel loop (the caller side of the AI).
    """
    max_turns: int = 60
    starting_chi: int = 5
    chi_regen: int = 1
    rest_chi: int = 3
    desperation_fraction: float = 0.25
    escalation_turn: int = 20
    stalemate_turns: int = 6


@dataclass(frozen=True)
class ContentPaths:
    """
    Where bundled content lives. Paths are repo-relative by default.
    """
    root: Path = Path(".")
    catalog: Path = Path("data/catalogs/duel.json")

    def abs(self, p: Path) -> Path:
        return (self.root / p).resolve()
