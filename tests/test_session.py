from pathlib import Path

import pytest

from tactician import Tactician
from tactician.config import ContentPaths, DuelConfig
from tactician.dice import Dice
from tactician.models import ActiveEffect, CombatantSnapshot, Phase, StatusEffect
from tactician.rules import DuelRules
from tactician.session import STRUGGLE, DuelSession

ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def rules():
    return DuelRules(Dice(seed=5), DuelConfig())


def test_attack_spends_chi_and_starts_cooldown(rules, make_move, make_fighter):
    palm = make_move("Palm", power=12, chi_cost=2, cooldown=2)
    me, foe = make_fighter("Me", chi=5), make_fighter("Foe", defense=5)

    entries = rules.resolve_move(1, me, foe, palm)

    assert entries[0].damage == 7
    assert foe.health == 93
    assert me.chi == 3
    assert me.cooldowns == {"Palm": 2}
    assert me.move_history == ["Palm"]


def test_cooldown_blocks_the_next_turns(rules, make_move, make_fighter):
    palm = make_move("Palm", power=12, cooldown=2)
    jab = make_move("Jab", power=5)
    me, foe = make_fighter("Me"), make_fighter("Foe")
    rules.resolve_move(1, me, foe, palm)
    assert me.on_cooldown("Palm")
    rules.resolve_move(3, me, foe, jab)
    assert me.on_cooldown("Palm")
    rules.resolve_move(5, me, foe, jab)
    assert not me.on_cooldown("Palm")


def test_unaffordable_move_fizzles(rules, make_move, make_fighter):
    blast = make_move("Blast", power=40, chi_cost=4)
    me, foe = make_fighter("Me", chi=1), make_fighter("Foe")
    entries = rules.resolve_move(1, me, foe, blast)
    assert entries[0].data["fizzled"]
    assert foe.health == 100
    assert me.chi == 1


def test_evasive_target_takes_nothing_from_plain_attacks(rules, make_move, make_fighter):
    foe = make_fighter("Foe", active_effects=[ActiveEffect(name="Sidestep", type="EVASIVE", turns_left=1)])
    entries = rules.resolve_move(1, make_fighter("Me"), foe, make_move("Jab", power=20))
    assert entries[0].data["evaded"]
    assert foe.health == 100

    rules.resolve_move(2, make_fighter("Me"), foe, make_move("Net", power=20, tags=frozenset({"tracking"})))
    assert foe.health < 100


def test_guard_raises_defense_until_next_turn(rules, make_move, make_fighter):
    me = make_fighter("Me", defense=5)
    rules.resolve_move(1, me, make_fighter("Foe"), make_move("Wall", "defense_buff", power=8))
    assert me.defense == 13
    rules.start_turn(me, 3)
    assert me.defense == 5
    assert me.active_effects == []


def test_rest_restores_chi(rules, make_move, make_fighter):
    me = make_fighter("Me", chi=0)
    rules.resolve_move(1, me, make_fighter("Foe"), make_move("Breathe", "defense_buff", power=2, tags=frozenset({"rest"})))
    assert me.chi == 3


def test_effects_tick_at_turn_start(rules, make_move, make_fighter):
    me, foe = make_fighter("Me"), make_fighter("Foe", defense=0)
    burn = make_move("Flare", power=1, applies_effect=StatusEffect("BURN", duration=2, potency=4))
    rules.resolve_move(1, me, foe, burn)
    assert foe.health == 99

    entries, stunned = rules.start_turn(foe, 2)
    assert not stunned
    assert foe.health == 95
    assert foe.chi == 6
    assert entries[0].type == "effect"

    rules.start_turn(foe, 4)
    assert foe.health == 91
    assert not foe.has_effect("BURN")


def test_stun_skips_the_turn(rules, make_fighter):
    foe = make_fighter("Foe", active_effects=[ActiveEffect(name="Quake", type="STUN", turns_left=1)])
    _, stunned = rules.start_turn(foe, 2)
    assert stunned
    assert not foe.has_effect("STUN")


def test_defense_down_is_restored_exactly(rules, make_move, make_fighter):
    foe = make_fighter("Foe", defense=3)
    crack = make_move("Crack", power=1, applies_effect=StatusEffect("DEFENSE_DOWN", duration=1, potency=10))
    rules.resolve_move(1, make_fighter("Me"), foe, crack)
    assert foe.defense == 0
    rules.start_turn(foe, 2)
    assert foe.defense == 3


def test_sunder_over_a_guard_restores_base_defense(rules, make_move, make_fighter):
    me, foe = make_fighter("Me", defense=5), make_fighter("Foe")
    sunder = make_move("Sunder", power=1, applies_effect=StatusEffect("DEFENSE_DOWN", duration=2, potency=20))

    rules.resolve_move(1, me, foe, make_move("Wall", "defense_buff", power=10))
    assert me.defense == 15
    rules.resolve_move(2, foe, me, sunder)
    assert me.defense == 0

    for turn in (3, 5, 7):
        rules.start_turn(me, turn)
    assert me.active_effects == []
    assert me.defense == 5


def test_guard_over_a_sunder_restores_base_defense(rules, make_move, make_fighter):
    me, foe = make_fighter("Me", defense=5), make_fighter("Foe")
    sunder = make_move("Sunder", power=1, applies_effect=StatusEffect("DEFENSE_DOWN", duration=2, potency=20))

    rules.resolve_move(1, foe, me, sunder)
    assert me.defense == 0
    rules.resolve_move(2, me, foe, make_move("Wall", "defense_buff", power=10))
    assert me.defense == 10

    rules.start_turn(me, 3)
    assert me.defense == 0
    rules.start_turn(me, 5)
    assert me.defense == 5


def test_guard_and_sunder_expiring_together(rules, make_move, make_fighter):
    me, foe = make_fighter("Me", defense=5), make_fighter("Foe")
    sunder = make_move("Sunder", power=1, applies_effect=StatusEffect("DEFENSE_DOWN", duration=1, potency=20))

    rules.resolve_move(1, me, foe, make_move("Wall", "defense_buff", power=10))
    rules.resolve_move(2, foe, me, sunder)
    rules.start_turn(me, 3)
    assert me.defense == 5


def test_phase_rules():
    session = DuelSession(dice=Dice(seed=1))
    hurt = CombatantSnapshot(name="A", health=25)
    fine = CombatantSnapshot(name="B", health=80)
    assert session.phase_for(hurt, 3, 0) is Phase.DESPERATION
    assert session.phase_for(fine, 3, 0) is Phase.NORMAL
    assert session.phase_for(fine, 21, 0) is Phase.ESCALATION
    assert session.phase_for(fine, 3, 6) is Phase.ESCALATION


def test_no_legal_move_becomes_struggle(make_move, make_fighter):
    a = make_fighter("A", moves=[make_move("Big", power=10, cooldown=5)])
    b = make_fighter("B", defense=0, moves=[make_move("Poke", power=1)])
    result = DuelSession(dice=Dice(seed=2)).run(a, b, max_turns=4)

    assert [e.action for e in result.log if e.actor == "A" and e.type == "move"] == ["Big", STRUGGLE.name]
    assert result.traces[2].chosen is None


def test_duel_terminates_and_reports(make_move, make_fighter):
    a = make_fighter("A", moves=[make_move("Jab", power=30)])
    b = make_fighter("B", moves=[make_move("Tap", power=1)])
    streamed = []
    result = DuelSession(dice=Dice(seed=3)).run(a, b, on_entry=streamed.append)

    assert result.winner == "A"
    assert result.turns <= DuelConfig().max_turns
    assert result.log[-1].type == "battle_end"
    assert streamed == result.log


def test_turn_limit_ends_in_a_draw(make_move, make_fighter):
    a = make_fighter("A", health=100, moves=[make_move("Tap", power=1)])
    b = make_fighter("B", health=100, moves=[make_move("Tap", power=1)])
    result = DuelSession(dice=Dice(seed=3)).run(a, b, max_turns=6)
    assert result.winner is None
    assert result.turns == 6


def test_duelists_need_distinct_names(make_fighter):
    with pytest.raises(ValueError):
        DuelSession().run(make_fighter("A"), make_fighter("A"))


def test_bundled_duel_is_reproducible():
    def play(seed):
        engine = Tactician(seed=seed, paths=ContentPaths(root=ROOT))
        fighters = engine.load_catalog()
        return engine.run_duel(fighters["Ember"], fighters["Stone"])

    first, second = play(42), play(42)
    assert [e.message for e in first.log] == [e.message for e in second.log]
    assert first.winner == second.winner
    assert first.turns <= DuelConfig().max_turns
    assert first.traces


def test_facade_decide(make_move, make_fighter):
    catalog = [make_move("Jab", power=10), make_move("Kick", power=14)]
    engine = Tactician(seed=9)
    decision = engine.decide(make_fighter("Me", moves=catalog), make_fighter("Foe"), 1, [], catalog)
    assert decision.move is not None
    assert decision.state.intent_turn_count == 1


def test_facade_keeps_agents_on_separate_streams(make_move, make_fighter):
    catalog = [make_move("Jab", power=10), make_move("Kick", power=14), make_move("Wall", "defense_buff", power=6)]
    a = make_fighter("A", moves=catalog)
    b = make_fighter("B", moves=catalog)

    def scores(decision):
        return [(s.move.name, s.score) for s in decision.trace.alternatives]

    alone = Tactician(seed=4)
    alone.decide(a, b, 1, [], catalog)
    expected = scores(alone.decide(a, b, 3, [], catalog))

    interleaved = Tactician(seed=4)
    interleaved.decide(a, b, 1, [], catalog)
    interleaved.decide(b, a, 2, [], catalog)
    assert scores(interleaved.decide(a, b, 3, [], catalog)) == expected
    assert interleaved.controller_for("A") is not interleaved.controller_for("B")
