# tactician/rules.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Tuple

from .config import DuelConfig
from .dice import Dice
from .models import ActiveEffect, CombatantSnapshot, LogEntry, Move, MoveTag
from .models.core import BUFF_EFFECTS

# Per-tick amount for damage/heal-over-time effects that don't set a potency.
DEFAULT_TICK = 3


@dataclass
class DuelRules:
    """
    Authority for outcomes. Controllers pick moves; this applies them.

    Defense buffs and debuffs change CombatantSnapshot.defense directly while they
    are active and are reverted on expiry, so the AI always reads current defense.
    """
    dice: Dice
    config: DuelConfig = field(default_factory=DuelConfig)

    # --- Turn start -------------------------------------------------------

    def start_turn(self, actor: CombatantSnapshot, turn: int) -> Tuple[List[LogEntry], bool]:
        """
        Regenerate chi and tick active effects. Returns (entries, stunned).
        """
        entries: List[LogEntry] = []
        actor.resources["chi"] = actor.chi + self.config.chi_regen

        stunned = False
        remaining: List[ActiveEffect] = []
        expired: List[ActiveEffect] = []
        for e in actor.active_effects:
            amount = e.potency or DEFAULT_TICK
            if e.type == "BURN":
                before = actor.health
                actor.health = max(0, actor.health - amount)
                entries.append(
                    LogEntry(
                        turn=turn,
                        actor=None,
                        action=e.name,
                        type="effect",
                        target=actor.name,
                        message=f"{actor.name} burns for {before - actor.health}. HP {before} -> {actor.health}",
                        data={"effect": e.type, "amount": before - actor.health},
                    )
                )
            elif e.type == "HEAL_OVER_TIME":
                before = actor.health
                actor.health = min(actor.max_health, actor.health + amount)
                entries.append(
                    LogEntry(
                        turn=turn,
                        actor=actor.name,
                        action=e.name,
                        type="effect",
                        target=actor.name,
                        message=f"{actor.name} recovers {actor.health - before}. HP {before} -> {actor.health}",
                        data={"effect": e.type, "amount": actor.health - before},
                    )
                )
            elif e.type == "STUN":
                stunned = True

            left = e.turns_left - 1
            if left > 0:
                remaining.append(replace(e, turns_left=left))
            else:
                expired.append(e)

        actor.active_effects = remaining
        # Debuffs hand their defense back before buffs take theirs away.
        for e in sorted(expired, key=lambda x: x.type != "DEFENSE_DOWN"):
            self._expire(actor, e)
            entries.append(
                LogEntry(turn=turn, actor=actor.name, action=e.name, type="effect", message=f"{e.name} wears off {actor.name}.")
            )
        return entries, stunned

    def tick_cooldowns(self, actor: CombatantSnapshot) -> None:
        actor.cooldowns = {k: v - 1 for k, v in actor.cooldowns.items() if v - 1 > 0}

    @staticmethod
    def _expire(actor: CombatantSnapshot, e: ActiveEffect) -> None:
        if e.type == "DEFENSE_DOWN":
            actor.defense += e.potency
        elif e.type == "DEFENSE_UP":
            taken = min(e.potency, actor.defense)
            actor.defense -= taken
            _release_debuffs(actor, e.potency - taken)

    # --- Move resolution --------------------------------------------------

    def resolve_move(self, turn: int, actor: CombatantSnapshot, target: CombatantSnapshot, move: Move) -> List[LogEntry]:
        if not actor.alive:
            return []

        self.tick_cooldowns(actor)
        actor.move_history.append(move.name)

        if not actor.can_afford(move):
            return [
                LogEntry(
                    turn=turn,
                    actor=actor.name,
                    action=move.name,
                    type="move",
                    target=target.name,
                    message=f"{actor.name} tries {move.name} but lacks the chi ({actor.chi}/{move.chi_cost}).",
                    data={"fizzled": True},
                )
            ]

        actor.resources["chi"] = actor.chi - move.chi_cost
        if move.cooldown > 0:
            actor.cooldowns[move.name] = move.cooldown
        if move.max_uses is not None:
            actor.uses_left[move.name] = actor.uses_left.get(move.name, move.max_uses) - 1

        if move.is_attack:
            entries = [self._resolve_attack(turn, actor, target, move)]
        else:
            entries = [self._resolve_defense(turn, actor, move)]

        if move.has_tag(MoveTag.REST):
            actor.resources["chi"] = actor.chi + self.config.rest_chi
            entries.append(
                LogEntry(turn=turn, actor=actor.name, action=move.name, type="effect", message=f"{actor.name} restores {self.config.rest_chi} chi.")
            )

        effect_entry = self._apply_effect(turn, actor, target, move)
        if effect_entry is not None:
            entries.append(effect_entry)

        if not target.alive:
            entries.append(
                LogEntry(turn=turn, actor=actor.name, type="system", target=target.name, message=f"{target.name} goes down!")
            )
        return entries

    def _resolve_attack(self, turn: int, actor: CombatantSnapshot, target: CombatantSnapshot, move: Move) -> LogEntry:
        if target.has_effect("EVASIVE") and not move.has_tag(MoveTag.AOE, MoveTag.TRACKING):
            return LogEntry(
                turn=turn,
                actor=actor.name,
                action=move.name,
                type="move",
                target=target.name,
                message=f"{target.name} evades {actor.name}'s {move.name}.",
                data={"evaded": True},
            )

        bonus = sum(e.potency for e in actor.active_effects if e.type == "ATTACK_UP")
        dmg = max(1, move.power + bonus - target.defense)
        before = target.health
        target.health = max(0, target.health - dmg)
        return LogEntry(
            turn=turn,
            actor=actor.name,
            action=move.name,
            type="move",
            target=target.name,
            damage=dmg,
            message=f"{actor.name} uses {move.name} on {target.name} for {dmg}. HP {before} -> {target.health}",
            data={"hp_before": before, "hp_after": target.health},
        )

    def _resolve_defense(self, turn: int, actor: CombatantSnapshot, move: Move) -> LogEntry:
        parts = [f"{actor.name} uses {move.name}"]
        if move.move_class == "defense_buff" and move.power > 0:
            # One-turn guard: lasts through the opponent's next move.
            actor.defense += move.power
            actor.active_effects.append(ActiveEffect(name=move.name, type="DEFENSE_UP", turns_left=1, potency=move.power))
            parts.append(f"defense +{move.power}")
        elif move.move_class == "evade":
            actor.active_effects.append(ActiveEffect(name=move.name, type="EVASIVE", turns_left=1))
            parts.append("ready to evade")
        if move.has_tag(MoveTag.HEALING) and move.power > 0:
            before = actor.health
            actor.health = min(actor.max_health, actor.health + move.power)
            parts.append(f"heals {actor.health - before}")
        return LogEntry(turn=turn, actor=actor.name, action=move.name, type="move", message=", ".join(parts) + ".")

    def _apply_effect(self, turn: int, actor: CombatantSnapshot, target: CombatantSnapshot, move: Move) -> LogEntry | None:
        effect = move.applies_effect
        if effect is None or not self.dice.chance(effect.chance):
            return None

        holder = actor if effect.type in BUFF_EFFECTS else target
        potency = effect.potency
        if effect.type == "DEFENSE_UP":
            holder.defense += potency
        elif effect.type == "DEFENSE_DOWN":
            # Record what was actually removed so expiry restores exactly that.
            potency = min(potency, holder.defense)
            holder.defense -= potency

        holder.active_effects.append(
            ActiveEffect(name=move.name, type=effect.type, turns_left=effect.duration, potency=potency)
        )
        return LogEntry(
            turn=turn,
            actor=actor.name,
            action=move.name,
            type="effect",
            target=holder.name,
            message=f"{holder.name} is affected by {effect.type} for {effect.duration} turn(s).",
            data={"effect": effect.type, "potency": potency},
        )


def _release_debuffs(actor: CombatantSnapshot, amount: int) -> None:
    """
    A buff that expires while a DEFENSE_DOWN has already eaten into it cannot take
    its full potency back. Shrink the live debuffs' records (newest first) by the
    shortfall so they restore only what the fighter really lost.
    """
    effects = actor.active_effects
    for i in range(len(effects) - 1, -1, -1):
        if amount <= 0:
            break
        e = effects[i]
        if e.type != "DEFENSE_DOWN" or e.potency <= 0:
            continue
        cut = min(amount, e.potency)
        effects[i] = replace(e, potency=e.potency - cut)
        amount -= cut
