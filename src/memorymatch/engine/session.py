from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable

from .actions import Action, EvaluateAction, FlipAction, NewLevelAction, RestartAction, TickAction
from .scoring import MemoryReport, rate_memory
from .types import SymbolSet

Event = dict[str, object]


@dataclass(frozen=True)
class GameConfig:
    max_level: int = 10
    extra_pairs: int = 2  # pairs on level L = L + extra_pairs
    max_pairs: int | None = None


@dataclass
class Card:
    id: str
    position: int
    matched: bool = False


@dataclass(frozen=True)
class Resolution:
    matched: bool
    level_complete: bool
    game_complete: bool


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None
    resolution: Resolution | None = None


@dataclass
class GameSession:
    symbols: SymbolSet
    config: GameConfig
    seed: int
    rng: random.Random
    level: int = 1
    cards: list[Card] = field(default_factory=list)
    selection: list[int] = field(default_factory=list)
    matched_pairs: int = 0
    moves: int = 0
    timer: int = 0
    game_over: bool = False
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def max_level(self) -> int:
        return self.config.max_level

    @property
    def required_matches(self) -> int:
        return len(self.cards) // 2

    def is_level_complete(self) -> bool:
        return self.matched_pairs == self.required_matches

    def card_at(self, position: int) -> Card | None:
        if position < 0 or position >= len(self.cards):
            return None
        return self.cards[position]

    def memory_report(self) -> MemoryReport:
        return rate_memory(self.matched_pairs, self.moves, self.timer)

    # Commands. Each one is recorded in action_log via step().

    def new_level(self, level: int) -> StepResult:
        return step(self, NewLevelAction(level=level))

    def request_flip(self, position: int) -> StepResult:
        return step(self, FlipAction(position=position))

    def evaluate_selection(self) -> StepResult:
        return step(self, EvaluateAction())

    def tick(self) -> StepResult:
        return step(self, TickAction())

    def restart(self) -> StepResult:
        return step(self, RestartAction())


def pair_count(level: int, symbols: SymbolSet, config: GameConfig) -> int:
    n = min(level + config.extra_pairs, len(symbols))
    if config.max_pairs is not None:
        n = min(n, config.max_pairs)
    return max(1, n)


def _deal(state: GameSession, level: int) -> list[Card]:
    ids = list(state.symbols.all_ids()[: pair_count(level, state.symbols, state.config)])
    deck = ids + ids
    state.rng.shuffle(deck)
    return [Card(id=card_id, position=i) for i, card_id in enumerate(deck)]


def _setup_level(state: GameSession, level: int) -> None:
    state.level = level
    state.cards = _deal(state, level)
    state.selection = []
    state.matched_pairs = 0
    state.moves = 0
    state.timer = 0
    state.game_over = False
    state.event_log.append(
        {"type": "LEVEL_STARTED", "level": level, "pairs": state.required_matches}
    )


def _new_level(state: GameSession, action: NewLevelAction) -> StepResult:
    if action.level < 1 or action.level > state.config.max_level:
        return StepResult(ok=False, events=[], error="Level out of range.")
    _setup_level(state, action.level)
    return StepResult(ok=True, events=[])


def _flip(state: GameSession, action: FlipAction) -> StepResult:
    card = state.card_at(action.position)
    if card is None:
        return StepResult(ok=False, events=[], error="Invalid position.")
    if len(state.selection) >= 2:
        return StepResult(ok=False, events=[], error="Resolve the current pair first.")
    if card.matched:
        return StepResult(ok=False, events=[], error="Card already matched.")
    if action.position in state.selection:
        return StepResult(ok=False, events=[], error="Card already revealed.")

    state.selection.append(action.position)
    state.moves += 1  # one move per revealed card, not per pair attempt
    state.event_log.append(
        {"type": "CARD_FLIPPED", "position": action.position, "card_id": card.id}
    )
    return StepResult(ok=True, events=[])


def _evaluate(state: GameSession) -> StepResult:
    if len(state.selection) != 2:
        return StepResult(ok=False, events=[], error="Select two cards first.")

    first, second = state.selection
    a = state.cards[first]
    b = state.cards[second]
    state.selection = []

    if a.id != b.id:
        state.event_log.append({"type": "PAIR_MISSED", "positions": [first, second]})
        return StepResult(
            ok=True,
            events=[],
            resolution=Resolution(matched=False, level_complete=False, game_complete=False),
        )

    a.matched = True
    b.matched = True
    state.matched_pairs += 1
    state.event_log.append(
        {"type": "PAIR_MATCHED", "positions": [first, second], "card_id": a.id}
    )

    level_complete = state.is_level_complete()
    game_complete = level_complete and state.level == state.config.max_level
    if level_complete:
        state.event_log.append(
            {
                "type": "LEVEL_CLEARED",
                "level": state.level,
                "moves": state.moves,
                "timer": state.timer,
            }
        )
    if game_complete:
        state.game_over = True
        state.event_log.append(
            {
                "type": "GAME_COMPLETED",
                "level": state.level,
                "moves": state.moves,
                "timer": state.timer,
            }
        )
    return StepResult(
        ok=True,
        events=[],
        resolution=Resolution(matched=True, level_complete=level_complete, game_complete=game_complete),
    )


def _tick(state: GameSession) -> StepResult:
    if state.game_over:
        return StepResult(ok=False, events=[], error="Game already completed.")
    state.timer += 1
    return StepResult(ok=True, events=[])


def _restart(state: GameSession) -> StepResult:
    # A restart begins a fresh recorded game, replayable from the new seed.
    from_level = state.level
    state.seed = state.rng.randrange(1, 2**31 - 1)
    state.rng = random.Random(state.seed)
    state.action_log = []
    state.event_log = [{"type": "GAME_RESTARTED", "from_level": from_level}]
    _setup_level(state, 1)
    return StepResult(ok=True, events=[])


def _dispatch(state: GameSession, action: Action) -> StepResult:
    if isinstance(action, FlipAction):
        return _flip(state, action)
    if isinstance(action, EvaluateAction):
        return _evaluate(state)
    if isinstance(action, TickAction):
        return _tick(state)
    if isinstance(action, NewLevelAction):
        return _new_level(state, action)
    if isinstance(action, RestartAction):
        return _restart(state)
    return StepResult(ok=False, events=[], error="Unknown action.")


def step(state: GameSession, action: Action) -> StepResult:
    """Apply a single command to the session.

    Mutates `state` in-place. Rejected commands leave the state untouched and
    return ok=False with a short reason. For a given (seed, action sequence)
    the resulting state is always the same.
    """
    # Log first so replay has a full record of attempted actions
    state.action_log.append(action)

    log = state.event_log
    before = len(log)
    result = _dispatch(state, action)
    if state.event_log is not log:
        before = 0  # restart replaced the log
    result.events = state.event_log[before:]
    return result


def new_game(
    symbols: SymbolSet,
    seed: int,
    config: GameConfig | None = None,
) -> GameSession:
    cfg = config or GameConfig()
    if len(symbols) == 0:
        raise ValueError("Symbol set must not be empty.")
    if cfg.max_level < 1:
        raise ValueError("max_level must be at least 1.")

    state = GameSession(symbols=symbols, config=cfg, seed=seed, rng=random.Random(seed))
    _setup_level(state, 1)
    return state


def replay(
    symbols: SymbolSet,
    seed: int,
    actions: Iterable[Action],
    config: GameConfig | None = None,
) -> GameSession:
    state = new_game(symbols=symbols, seed=seed, config=config)
    for a in actions:
        step(state, a)
    return state
