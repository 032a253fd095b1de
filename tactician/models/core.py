# tactician/models/core.py
from __future__ import annotations

from enum import Enum
from typing import Iterable, Literal, TypeAlias

Element: TypeAlias = str

MoveClass: TypeAlias = Literal["attack", "defense_buff", "evade", "parry_retaliate"]
MOVE_CLASSES: frozenset[str] = frozenset({"attack", "defense_buff", "evade", "parry_retaliate"})

ATTACK_CLASSES: frozenset[str] = frozenset({"attack", "parry_retaliate"})
DEFENSE_CLASSES: frozenset[str] = frozenset({"defense_buff", "evade"})

EffectType: TypeAlias = Literal[
    "DEFENSE_UP",
    "ATTACK_UP",
    "CRIT_CHANCE_UP",
    "HEAL_OVER_TIME",
    "BURN",
    "STUN",
    "DEFENSE_DOWN",
    "SLOW",
    "EVASIVE",
]
EFFECT_TYPES: frozenset[str] = frozenset(
    {
        "DEFENSE_UP",
        "ATTACK_UP",
        "CRIT_CHANCE_UP",
        "HEAL_OVER_TIME",
        "BURN",
        "STUN",
        "DEFENSE_DOWN",
        "SLOW",
        "EVASIVE",
    }
)

EffectCategory: TypeAlias = Literal["buff", "debuff"]

# Effects that help whoever carries them. Everything else is a debuff.
BUFF_EFFECTS: frozenset[str] = frozenset({"DEFENSE_UP", "ATTACK_UP", "CRIT_CHANCE_UP", "HEAL_OVER_TIME", "EVASIVE"})


class MoveTag(str, Enum):
    """
    Closed set of capability flags a move can carry.

    Tags come in as plain strings from content files; converting them here means a
    typo fails at load time instead of silently changing how a move is scored.
    """
    PIERCING = "piercing"
    REST = "rest"
    DESPERATE = "desperate"
    DESPERATION = "desperation"
    FINISHER = "finisher"
    ESCALATION = "escalation"
    COUNTER = "counter"
    HIGH_DAMAGE = "high-damage"
    BASIC = "basic"
    HEALING = "healing"
    DEFENSIVE = "defensive"
    RECOVERY = "recovery"
    COMEBACK = "comeback"
    AOE = "aoe"
    TRACKING = "tracking"
    GATHER = "gather"
    LAST_RESORT = "last-resort"

    @classmethod
    def parse(cls, value: "MoveTag | str") -> "MoveTag":
        if isinstance(value, MoveTag):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise ValueError(f"Unknown move tag: {value!r}") from e

    @classmethod
    def parse_all(cls, values: Iterable["MoveTag | str"]) -> frozenset["MoveTag"]:
        return frozenset(cls.parse(v) for v in values)


class Phase(str, Enum):
    """
    Combat phase, owned and advanced by the caller.

    The controller only reacts to it: ESCALATION and DESPERATION hard-restrict
    which moves are legal.
    """
    NORMAL = "normal"
    ESCALATION = "escalation"
    DESPERATION = "desperation"
