from __future__ import annotations

import pytest

from memorymatch.engine.serialize import snapshot
from memorymatch.engine.session import GameConfig, GameSession, StepResult, new_game, pair_count, replay
from memorymatch.engine.types import SymbolSet
from memorymatch.paths import get_paths
from memorymatch.services.content import ContentService


def _load_symbols() -> SymbolSet:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    return content.load_symbols()


def _pairs(state: GameSession) -> list[tuple[int, int]]:
    by_id: dict[str, list[int]] = {}
    for card in state.cards:
        by_id.setdefault(card.id, []).append(card.position)
    return [(p[0], p[1]) for p in by_id.values()]


def _mismatch(state: GameSession) -> tuple[int, int]:
    first = state.cards[0]
    for card in state.cards[1:]:
        if card.id != first.id:
            return first.position, card.position
    raise AssertionError("layout has a single symbol")


def _clear_level(state: GameSession) -> StepResult:
    res: StepResult | None = None
    for a, b in _pairs(state):
        state.request_flip(a)
        state.request_flip(b)
        res = state.evaluate_selection()
    assert res is not None
    return res


def test_layout_size_and_pairs_for_every_level() -> None:
    symbols = _load_symbols()
    assert len(symbols) == 10
    state = new_game(symbols, seed=7)

    for level in range(1, state.max_level + 1):
        res = state.new_level(level)
        assert res.ok
        expected_pairs = min(level + 2, len(symbols))
        assert len(state.cards) == 2 * expected_pairs
        assert state.required_matches == expected_pairs

        counts: dict[str, int] = {}
        for card in state.cards:
            counts[card.id] = counts.get(card.id, 0) + 1
        assert set(counts.values()) == {2}
        # lower levels use the first symbols in content order
        assert set(counts) == set(symbols.all_ids()[:expected_pairs])
        assert [c.position for c in state.cards] == list(range(len(state.cards)))
        assert not any(c.matched for c in state.cards)


def test_pair_count_respects_config_cap() -> None:
    symbols = _load_symbols()
    assert pair_count(1, symbols, GameConfig()) == 3
    assert pair_count(20, symbols, GameConfig(max_level=20)) == 10
    assert pair_count(5, symbols, GameConfig(max_pairs=4)) == 4


def test_level_one_mismatch_then_match_scenario() -> None:
    state = new_game(_load_symbols(), seed=11)
    assert state.level == 1
    assert len(state.cards) == 6

    a, b = _mismatch(state)
    assert state.request_flip(a).ok
    assert state.request_flip(b).ok
    res = state.evaluate_selection()
    assert res.ok
    assert res.resolution is not None and not res.resolution.matched
    assert state.selection == []
    assert state.matched_pairs == 0
    assert not state.cards[a].matched and not state.cards[b].matched
    assert state.moves == 2

    x, y = _pairs(state)[0]
    state.request_flip(x)
    state.request_flip(y)
    res = state.evaluate_selection()
    assert res.resolution is not None and res.resolution.matched
    assert not res.resolution.level_complete
    assert state.matched_pairs == 1
    assert state.cards[x].matched and state.cards[y].matched
    assert state.moves == 4  # every revealed card counts as a move


def test_rejected_flips_leave_state_untouched() -> None:
    state = new_game(_load_symbols(), seed=3)
    x, y = _pairs(state)[0]
    state.request_flip(x)
    state.request_flip(y)
    state.evaluate_selection()

    def counters() -> tuple[int, int, list[int]]:
        return state.moves, state.matched_pairs, list(state.selection)

    before = counters()
    assert not state.request_flip(x).ok  # matched
    assert counters() == before

    other = next(c.position for c in state.cards if not c.matched)
    assert state.request_flip(other).ok
    before = counters()
    res = state.request_flip(other)  # already selected
    assert not res.ok
    assert res.error == "Card already revealed."
    assert counters() == before

    third = next(c.position for c in state.cards if not c.matched and c.position != other)
    assert state.request_flip(third).ok
    before = counters()
    fourth = next(
        c.position for c in state.cards if not c.matched and c.position not in (other, third)
    )
    assert not state.request_flip(fourth).ok  # resolution pending
    assert not state.request_flip(len(state.cards)).ok
    assert not state.request_flip(-1).ok
    assert counters() == before


def test_evaluate_requires_two_selected_cards() -> None:
    state = new_game(_load_symbols(), seed=5)
    res = state.evaluate_selection()
    assert not res.ok
    assert res.error is not None

    state.request_flip(0)
    res = state.evaluate_selection()
    assert not res.ok
    assert state.selection == [0]
    assert state.moves == 1


def test_mismatch_never_changes_matched_flags() -> None:
    state = new_game(_load_symbols(), seed=21)
    x, y = _pairs(state)[0]
    state.request_flip(x)
    state.request_flip(y)
    state.evaluate_selection()
    flags = [c.matched for c in state.cards]

    unmatched = [c for c in state.cards if not c.matched]
    a = unmatched[0]
    b = next(c for c in unmatched if c.id != a.id)
    state.request_flip(a.position)
    state.request_flip(b.position)
    state.evaluate_selection()
    assert [c.matched for c in state.cards] == flags
    assert state.matched_pairs == 1


def test_level_clear_below_max_level_is_not_game_over() -> None:
    state = new_game(_load_symbols(), seed=9)
    res = _clear_level(state)
    assert res.resolution is not None
    assert res.resolution.level_complete
    assert not res.resolution.game_complete
    assert state.is_level_complete()
    assert not state.game_over
    # waits for an explicit advance
    assert state.level == 1
    types = [e["type"] for e in res.events]
    assert "LEVEL_CLEARED" in types
    assert "GAME_COMPLETED" not in types


def test_clearing_max_level_sets_game_over() -> None:
    state = new_game(_load_symbols(), seed=13)
    for level in range(1, state.max_level + 1):
        if level > 1:
            assert state.new_level(level).ok
        assert not state.game_over
        res = _clear_level(state)
        assert res.resolution is not None
        assert res.resolution.game_complete == (level == 10)
        assert state.game_over == (level == 10)
    assert state.level == 10
    assert state.matched_pairs == state.required_matches == 10


def test_matched_pairs_monotonic_and_reset_by_new_level() -> None:
    state = new_game(_load_symbols(), seed=17)
    seen: list[int] = []
    for a, b in _pairs(state):
        state.request_flip(a)
        state.request_flip(b)
        state.evaluate_selection()
        seen.append(state.matched_pairs)
    assert seen == sorted(seen) == [1, 2, 3]

    state.tick()
    assert state.new_level(2).ok
    assert state.matched_pairs == 0
    assert state.moves == 0
    assert state.timer == 0
    assert state.selection == []


def test_tick_counts_until_game_over() -> None:
    state = new_game(_load_symbols(), seed=1, config=GameConfig(max_level=1))
    for _ in range(3):
        assert state.tick().ok
    assert state.timer == 3
    _clear_level(state)
    assert state.game_over
    assert not state.tick().ok
    assert state.timer == 3


def test_new_level_rejects_out_of_range() -> None:
    state = new_game(_load_symbols(), seed=1)
    layout = [c.id for c in state.cards]
    assert not state.new_level(0).ok
    assert not state.new_level(11).ok
    assert [c.id for c in state.cards] == layout
    assert state.level == 1


def test_restart_returns_to_level_one_with_zeroed_counters() -> None:
    state = new_game(_load_symbols(), seed=1, config=GameConfig(max_level=2))
    _clear_level(state)
    state.new_level(2)
    _clear_level(state)
    state.tick()
    assert state.game_over

    res = state.restart()
    assert res.ok
    assert [e["type"] for e in res.events] == ["GAME_RESTARTED", "LEVEL_STARTED"]
    assert state.level == 1
    assert len(state.cards) == 6
    assert (state.matched_pairs, state.moves, state.timer) == (0, 0, 0)
    assert not state.game_over


def test_new_game_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        new_game(SymbolSet(symbols=()), seed=1)
    with pytest.raises(ValueError):
        new_game(_load_symbols(), seed=1, config=GameConfig(max_level=0))


def test_restart_starts_a_fresh_replayable_record() -> None:
    symbols = _load_symbols()
    state = new_game(symbols, seed=4)
    for _ in range(5):
        state.tick()
    _clear_level(state)
    old_seed = state.seed

    state.restart()
    assert state.action_log == []
    assert [e["type"] for e in state.event_log] == ["GAME_RESTARTED", "LEVEL_STARTED"]
    assert state.seed != old_seed

    a, b = _mismatch(state)
    state.request_flip(a)
    state.request_flip(b)
    state.evaluate_selection()
    state.tick()

    rebuilt = replay(symbols, seed=state.seed, actions=list(state.action_log))
    assert snapshot(rebuilt) == snapshot(state)
