import copy

from tactician.models import ActiveEffect
from tactician.systems.ai.context import (
    classify_history_entry,
    classify_pattern,
    count_streak,
    detect_move_patterns,
    extract_context,
    stale_move_names,
    summarize_context,
)


def test_context_is_pure(make_move, make_fighter, make_log):
    moves = [make_move("Jab", power=12), make_move("Wall", "defense_buff", power=10)]
    me = make_fighter("Me", health=60, moves=moves, history=["Jab", "Wall"], cooldowns={"Jab": 1})
    enemy = make_fighter("Foe", health=70, moves=moves, history=["Wall", "Wall", "Wall"])
    log = make_log(("Me", 10), ("Foe", 4), ("Me", 0))

    before = (copy.deepcopy(me), copy.deepcopy(enemy), list(log))
    first = extract_context(me, enemy, log)
    second = extract_context(me, enemy, log)

    assert first == second
    assert (me, enemy, log) == before


def test_unknown_names_fall_back_to_keywords(make_move):
    assert classify_history_entry("Iron Skin", {}) is None
    assert classify_history_entry("Shield Up", {}) == "defense"
    assert classify_history_entry("Quick Strike", {}) == "attack"
    assert classify_history_entry("Guard", {}) == "defense"
    # A known move wins over its name.
    known = {"Shield Bash": make_move("Shield Bash", power=15)}
    assert classify_history_entry("Shield Bash", known) == "attack"


def test_streaks_use_move_class(make_move):
    known = {m.name: m for m in [make_move("Iron Skin", "defense_buff", power=8), make_move("Palm", power=10)]}
    assert count_streak(["Palm", "Iron Skin", "Iron Skin", "Iron Skin"], "defense", known) == 3
    assert count_streak(["Iron Skin", "Palm", "Palm"], "attack", known) == 2
    assert count_streak([], "attack", known) == 0


def test_pattern_classification(make_move):
    known = {m.name: m for m in [make_move("Palm", power=10), make_move("Block", "defense_buff", power=5)]}
    assert classify_pattern([], known) == "unknown"
    assert classify_pattern(["Palm", "Palm", "Palm", "Block"], known) == "aggressive"
    assert classify_pattern(["Block", "Block", "Block", "Palm"], known) == "defensive"
    assert classify_pattern(["Palm", "Block", "Palm", "Block"], known) == "mixed"
    # Only the last five count.
    assert classify_pattern(["Palm"] * 10 + ["Block"] * 5, known) == "defensive"


def test_turtling_and_vulnerability(make_move, make_fighter):
    wall = make_move("Iron Skin", "defense_buff", power=8)
    me = make_fighter("Me")
    enemy = make_fighter("Foe", defense=4, moves=[wall], history=["Iron Skin"] * 3)
    c = extract_context(me, enemy, [])
    assert c.enemy_defense_streak == 3
    assert c.enemy_is_turtling
    assert c.enemy_vulnerable
    assert c.enemy_pattern == "defensive"


def test_burst_ignores_moves_on_cooldown_or_unaffordable(make_move, make_fighter):
    nuke = make_move("Nuke", power=60, chi_cost=4)
    me = make_fighter("Me", chi=5, moves=[nuke])
    assert extract_context(me, make_fighter("Foe"), []).burst_available

    broke = make_fighter("Me", chi=1, moves=[nuke])
    assert not extract_context(broke, make_fighter("Foe"), []).burst_available

    cooling = make_fighter("Me", chi=5, moves=[nuke], cooldowns={"Nuke": 2})
    assert not extract_context(cooling, make_fighter("Foe"), []).burst_available

    threat = extract_context(make_fighter("Me"), make_fighter("Foe", moves=[nuke]), [])
    assert threat.enemy_burst_threat


def test_own_moves_override_the_snapshot_list(make_move, make_fighter):
    nuke = make_move("Nuke", power=60, chi_cost=4)
    me, foe = make_fighter("Me", chi=5), make_fighter("Foe", moves=[nuke])

    assert not extract_context(me, foe, []).burst_available
    c = extract_context(me, foe, [], own_moves=[nuke])
    assert c.burst_available
    assert c.enemy_burst_threat


def test_pressure_flags(make_fighter):
    c = extract_context(make_fighter("Me", health=29, chi=1), make_fighter("Foe", health=45), [])
    assert c.health_pressure
    assert c.chi_pressure
    assert c.is_losing
    assert not c.is_dominating

    c = extract_context(make_fighter("Me", health=30, chi=2), make_fighter("Foe", health=15), [])
    assert not c.health_pressure
    assert not c.chi_pressure
    assert c.is_dominating


def test_damage_window_momentum_and_phase_of_game(make_fighter, make_log):
    me, enemy = make_fighter("Me"), make_fighter("Foe")
    # The first two entries fall outside the six-entry window.
    log = make_log(("Foe", 50), ("Foe", 50), ("Me", 10), ("Foe", 3), ("Me", 5), ("Me", 0), ("Foe", 2), ("Me", 4))
    c = extract_context(me, enemy, log)
    assert c.my_recent_damage == 19
    assert c.enemy_recent_damage == 5
    assert c.damage_ratio == 19 / 5
    assert c.has_momentum
    assert c.turn_count == 8
    assert c.is_mid_game and not c.is_early_game and not c.is_late_game

    quiet = extract_context(me, enemy, [])
    assert quiet.damage_ratio == 1.0
    assert quiet.is_early_game
    assert quiet.game_phase == "early"

    late = extract_context(me, enemy, make_log(*[("Me", 0)] * 13))
    assert late.is_late_game


def test_cooldown_pressure_and_evasion(make_fighter):
    me = make_fighter("Me", cooldowns={"Nuke": 1})
    enemy = make_fighter("Foe", active_effects=[ActiveEffect(name="Sidestep", type="EVASIVE", turns_left=1)])
    c = extract_context(me, enemy, [])
    assert c.my_cooldown_pressure
    assert not c.enemy_cooldown_pressure
    assert c.enemy_evasive


def test_move_patterns_flag_spam():
    patterns = {p.name: p for p in detect_move_patterns(["Jab", "Kick", "Jab", "Wall", "Jab"])}
    assert patterns["Jab"].frequency == 3
    assert patterns["Jab"].is_spam
    assert patterns["Jab"].last_index == 4
    assert not patterns["Kick"].is_spam

    assert stale_move_names(["Kick", "Wall", "Wall"]) == {"Wall"}
    assert stale_move_names(["Jab", "Kick", "Jab"]) == set()
    assert stale_move_names([]) == set()


def test_summary_lists_key_signals(make_fighter):
    text = summarize_context(extract_context(make_fighter("Me"), make_fighter("Foe", health=90), []))
    assert "Health: 100 vs 90" in text
    assert "Game Phase: Early" in text
