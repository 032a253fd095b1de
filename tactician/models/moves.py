# tactician/models/moves.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from .core import ATTACK_CLASSES, DEFENSE_CLASSES, EFFECT_TYPES, MOVE_CLASSES, EffectType, Element, MoveClass, MoveTag


@dataclass(frozen=True)
class StatusEffect:
    """
    The status effect a move tries to apply when it lands.
    chance is 0..1; duration is in turns.
    """
    type: EffectType
    duration: int = 1
    potency: int = 0
    chance: float = 1.0

    def __post_init__(self) -> None:
        if self.type not in EFFECT_TYPES:
            raise ValueError(f"Unknown effect type: {self.type!r}")
        if self.duration < 1:
            raise ValueError("duration must be >= 1")
        if not 0.0 <= self.chance <= 1.0:
            raise ValueError("chance must be within 0..1")


@dataclass(frozen=True)
class Move:
    """
    A single catalog entry. Static content, shared between combatants and never mutated.

    power:
      - damage for attack-class moves
      - defense gained for defense-class moves
    tags:
      - accepts strings or MoveTag; stored as a frozenset of MoveTag
    """
    name: str
    move_class: MoveClass
    power: int = 0
    element: Element = "physical"
    tags: FrozenSet[MoveTag] = field(default_factory=frozenset)
    applies_effect: Optional[StatusEffect] = None
    chi_cost: int = 0
    cooldown: int = 0
    max_uses: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("move name must not be empty")
        if self.move_class not in MOVE_CLASSES:
            raise ValueError(f"{self.name}: unknown move class {self.move_class!r}")
        if self.power < 0:
            raise ValueError(f"{self.name}: power must be >= 0")
        if self.chi_cost < 0:
            raise ValueError(f"{self.name}: chi_cost must be >= 0")
        if self.cooldown < 0:
            raise ValueError(f"{self.name}: cooldown must be >= 0")
        if self.max_uses is not None and self.max_uses < 1:
            raise ValueError(f"{self.name}: max_uses must be >= 1 when set")
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(self, "tags", MoveTag.parse_all(self.tags))

    def has_tag(self, *tags: MoveTag | str) -> bool:
        return any(MoveTag.parse(t) in self.tags for t in tags)

    @property
    def is_attack(self) -> bool:
        return self.move_class in ATTACK_CLASSES

    @property
    def is_defense(self) -> bool:
        return self.move_class in DEFENSE_CLASSES

    @property
    def is_basic(self) -> bool:
        return MoveTag.BASIC in self.tags

    def effect_is(self, *types: str) -> bool:
        return self.applies_effect is not None and self.applies_effect.type in types


def find_move(moves: Iterable[Move], name: str) -> Optional[Move]:
    for m in moves:
        if m.name == name:
            return m
    return None
