from __future__ import annotations

import pytest

from memorymatch.engine.scoring import rate_memory
from memorymatch.engine.session import new_game
from memorymatch.engine.types import Symbol, SymbolSet


def test_zero_moves_is_insufficient_data() -> None:
    report = rate_memory(matched_pairs=0, moves=0, timer=12)
    assert report.rating == "insufficient_data"
    assert report.efficiency is None
    assert report.speed is None
    assert report.summary() == "Memory Power: Not enough data"


def test_excellent_band() -> None:
    report = rate_memory(matched_pairs=4, moves=5, timer=6)
    assert report.efficiency == pytest.approx(80.0)
    assert report.speed == pytest.approx(1.2)
    assert report.rating == "excellent"
    assert report.label == "Excellent Memory!"


def test_good_band_and_strict_thresholds() -> None:
    assert rate_memory(matched_pairs=3, moves=5, timer=9).rating == "good"
    # efficiency must be strictly above 75 for excellent
    assert rate_memory(matched_pairs=3, moves=4, timer=4).rating == "good"
    # speed must be strictly below 1.5 for excellent
    assert rate_memory(matched_pairs=4, moves=5, timer=8).rating == "good"


def test_needs_improvement_band() -> None:
    assert rate_memory(matched_pairs=1, moves=6, timer=3).rating == "needs_improvement"
    # efficient but slow
    assert rate_memory(matched_pairs=4, moves=5, timer=10).rating == "needs_improvement"


def test_summary_lines() -> None:
    report = rate_memory(matched_pairs=3, moves=6, timer=9)
    assert report.summary().splitlines() == [
        "Memory Power: Needs Improvement",
        "Efficiency: 50.00%",
        "Speed: 1.50 sec/move",
    ]


def test_session_report_uses_live_counters() -> None:
    symbols = SymbolSet(symbols=(Symbol(id="a", name="A", glyph="A", art_path="", color=(0, 0, 0)),))
    state = new_game(symbols, seed=1)
    assert state.memory_report().rating == "insufficient_data"
    state.request_flip(0)
    state.request_flip(1)
    state.evaluate_selection()
    state.tick()
    report = state.memory_report()
    assert report.efficiency == pytest.approx(50.0)
    assert report.speed == pytest.approx(0.5)
