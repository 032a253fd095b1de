# tactician/loader.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .models import CombatantSnapshot, Move, MoveTag, StatusEffect

JsonDict = Dict[str, Any]


@dataclass(frozen=True)
class FighterSpec:
    """
    Static fighter definition from a catalog file.
    snapshot() builds a fresh mutable CombatantSnapshot for one battle.
    """
    name: str
    health: int
    defense: int
    chi: int
    moves: Tuple[Move, ...] = field(default_factory=tuple)

    def snapshot(self, *, chi: Optional[int] = None) -> CombatantSnapshot:
        return CombatantSnapshot(
            name=self.name,
            health=self.health,
            max_health=self.health,
            defense=self.defense,
            resources={"chi": self.chi if chi is None else chi},
            uses_left={m.name: m.max_uses for m in self.moves if m.max_uses is not None},
            moves=list(self.moves),
        )


def _int_field(raw: Mapping[str, Any], key: str, owner: str, default: Optional[int] = None) -> int:
    value = raw.get(key, default)
    if value is None:
        raise ValueError(f"{owner}: missing required field {key!r}")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{owner}: field {key!r} must be an integer, got {value!r}")
    return value


def effect_from_dict(raw: Mapping[str, Any], owner: str) -> StatusEffect:
    if not isinstance(raw, Mapping):
        raise ValueError(f"{owner}: appliesEffect must be an object")
    if "type" not in raw:
        raise ValueError(f"{owner}: appliesEffect is missing 'type'")
    try:
        return StatusEffect(
            type=str(raw["type"]).upper(),  # type: ignore[arg-type]
            duration=_int_field(raw, "duration", owner, default=1),
            potency=_int_field(raw, "potency", owner, default=0),
            chance=float(raw.get("chance", 1.0)),
        )
    except ValueError as e:
        raise ValueError(f"{owner}: {e}") from e


def move_from_dict(raw: Mapping[str, Any]) -> Move:
    """
    Build a Move from its JSON form. Accepts both snake_case and the camelCase keys
    used by hand-written content (chiCost, appliesEffect, maxUses, type).

    Raises ValueError naming the offending move.
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"move entry must be an object, got {type(raw).__name__}")

    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"move entry is missing a name: {raw!r}")
    owner = f"move {name!r}"

    move_class = raw.get("move_class", raw.get("type"))
    if move_class is None:
        raise ValueError(f"{owner}: missing move class ('move_class' or 'type')")

    tags_raw = raw.get("tags", [])
    if not isinstance(tags_raw, list):
        raise ValueError(f"{owner}: tags must be a list")
    try:
        tags = MoveTag.parse_all(tags_raw)
    except ValueError as e:
        raise ValueError(f"{owner}: {e}") from e

    effect_raw = raw.get("applies_effect", raw.get("appliesEffect"))
    max_uses = raw.get("max_uses", raw.get("maxUses"))

    # Move validates the rest; its messages already lead with the move name.
    return Move(
        name=name,
        move_class=move_class,
        power=_int_field(raw, "power", owner, default=0),
        element=str(raw.get("element", "physical")),
        tags=tags,
        applies_effect=effect_from_dict(effect_raw, owner) if effect_raw is not None else None,
        chi_cost=_int_field({"chi_cost": raw.get("chi_cost", raw.get("chiCost", 0))}, "chi_cost", owner),
        cooldown=_int_field(raw, "cooldown", owner, default=0),
        max_uses=None if max_uses is None else _int_field({"max_uses": max_uses}, "max_uses", owner),
    )


def fighter_from_dict(name: str, raw: Mapping[str, Any]) -> FighterSpec:
    owner = f"fighter {name!r}"
    if not isinstance(raw, Mapping):
        raise ValueError(f"{owner}: entry must be an object")

    moves_raw = raw.get("moves")
    if not isinstance(moves_raw, list) or not moves_raw:
        raise ValueError(f"{owner}: needs a non-empty 'moves' list")

    moves: List[Move] = [move_from_dict(m) for m in moves_raw]
    seen: set[str] = set()
    for m in moves:
        if m.name in seen:
            raise ValueError(f"{owner}: duplicate move name {m.name!r}")
        seen.add(m.name)

    health = _int_field(raw, "health", owner, default=100)
    if health <= 0:
        raise ValueError(f"{owner}: health must be > 0")
    defense = _int_field(raw, "defense", owner, default=0)
    if defense < 0:
        raise ValueError(f"{owner}: defense must be >= 0")
    chi = _int_field(raw, "chi", owner, default=0)
    if chi < 0:
        raise ValueError(f"{owner}: chi must be >= 0")

    return FighterSpec(name=name, health=health, defense=defense, chi=chi, moves=tuple(moves))


@dataclass
class CatalogLoader:
    """
    Reads a JSON roster file:

        {"fighters": {"<name>": {"health": 100, "defense": 5, "chi": 5, "moves": [...]}}}

    Everything is validated up front so a bad catalog fails at load time.
    """
    path: Path

    def read_json(self) -> JsonDict:
        try:
            raw = json.loads(Path(self.path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"{self.path}: invalid JSON ({e})") from e
        if not isinstance(raw, dict):
            raise ValueError(f"{self.path}: top level must be an object")
        return raw

    def load(self) -> Dict[str, FighterSpec]:
        raw = self.read_json()
        fighters = raw.get("fighters")
        if not isinstance(fighters, dict) or not fighters:
            raise ValueError(f"{self.path}: expected a non-empty 'fighters' object")
        return {name: fighter_from_dict(name, entry) for name, entry in fighters.items()}


def load_catalog(path: Path | str) -> Dict[str, FighterSpec]:
    return CatalogLoader(Path(path)).load()
