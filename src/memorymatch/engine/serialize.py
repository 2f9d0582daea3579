from __future__ import annotations


from .actions import Action, EvaluateAction, FlipAction, NewLevelAction, RestartAction, TickAction
from .session import Card, GameSession


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, FlipAction):
        return {"type": "flip", "position": a.position}
    if isinstance(a, EvaluateAction):
        return {"type": "evaluate"}
    if isinstance(a, TickAction):
        return {"type": "tick"}
    if isinstance(a, NewLevelAction):
        return {"type": "new_level", "level": a.level}
    if isinstance(a, RestartAction):
        return {"type": "restart"}
    # should be unreachable
    return {"type": "unknown"}


def _card_to_dict(c: Card) -> dict[str, object]:
    return {"id": c.id, "position": c.position, "matched": c.matched}


def snapshot(state: GameSession) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current session."""
    return {
        "seed": state.seed,
        "level": state.level,
        "max_level": state.max_level,
        "cards": [_card_to_dict(c) for c in state.cards],
        "selection": list(state.selection),
        "matched_pairs": state.matched_pairs,
        "moves": state.moves,
        "timer": state.timer,
        "game_over": state.game_over,
        "action_log": [action_to_dict(a) for a in state.action_log],
    }
