# tactician/models/actors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .core import BUFF_EFFECTS, EffectCategory, EffectType
from .moves import Move


@dataclass(frozen=True)
class ActiveEffect:
    """
    A timed effect currently riding on a combatant.
    Resolution ticks turns_left down; the AI only reads it.
    """
    name: str
    type: EffectType
    turns_left: int
    potency: int = 0
    category: Optional[EffectCategory] = None

    def __post_init__(self) -> None:
        if self.category is None:
            object.__setattr__(self, "category", "buff" if self.type in BUFF_EFFECTS else "debuff")


@dataclass
class CombatantSnapshot:
    """
    Runtime combatant state (mutable during a duel).

    Owned by the simulation loop: created once per combatant at battle start and
    mutated by resolution each turn. The tactical AI only reads it.

    resources:
      - named pools; "chi" is the one the AI reasons about
    moves:
      - this combatant's own move list (used for burst / threat detection)
    """
    name: str
    health: int
    defense: int = 0
    max_health: int = 100

    resources: Dict[str, int] = field(default_factory=dict)
    active_effects: List[ActiveEffect] = field(default_factory=list)
    cooldowns: Dict[str, int] = field(default_factory=dict)
    move_history: List[str] = field(default_factory=list)
    uses_left: Dict[str, int] = field(default_factory=dict)
    moves: List[Move] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Fail fast on shapes that can only come from a caller bug.
        if not self.name:
            raise ValueError("combatant name must not be empty")
        if self.max_health <= 0:
            raise ValueError("max_health must be > 0")
        if self.defense < 0:
            raise ValueError("defense must be >= 0")
        if self.health < 0:
            self.health = 0
        if self.health > self.max_health:
            self.health = self.max_health

    @property
    def alive(self) -> bool:
        return self.health > 0

    @property
    def chi(self) -> int:
        return int(self.resources.get("chi", 0) or 0)

    @property
    def last_move(self) -> Optional[str]:
        return self.move_history[-1] if self.move_history else None

    @property
    def health_fraction(self) -> float:
        return self.health / self.max_health

    def cooldown_for(self, move_name: str) -> int:
        return int(self.cooldowns.get(move_name, 0) or 0)

    def on_cooldown(self, move_name: str) -> bool:
        return self.cooldown_for(move_name) > 0

    def can_afford(self, move: Move) -> bool:
        return self.chi >= move.chi_cost

    def exhausted(self, move: Move) -> bool:
        if move.max_uses is None:
            return False
        return self.uses_left.get(move.name, move.max_uses) <= 0

    def has_effect(self, effect_type: str) -> bool:
        return any(e.type == effect_type and e.turns_left > 0 for e in self.active_effects)

    @property
    def buffs(self) -> List[str]:
        return [e.name for e in self.active_effects if e.category == "buff"]

    @property
    def debuffs(self) -> List[str]:
        return [e.name for e in self.active_effects if e.category == "debuff"]
