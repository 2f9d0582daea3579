from __future__ import annotations

import random

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.session import new_game

from ..app import GameContext, SceneTransition
from ..ui import Button, draw_gradient, draw_text_centered
from .board import BoardScene


class MainMenuScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        w, _ = ctx.screen.get_size()
        bw, bh = 240, 56
        x = (w - bw) // 2
        self._buttons = [
            Button(rect=pygame.Rect(x, 260, bw, bh), text="Play", on_click=self._on_play),
            Button(
                rect=pygame.Rect(x, 260 + bh + 16, bw, bh),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            ),
        ]

    def _on_play(self) -> None:
        if self.ctx.symbols is None:
            return
        seed = self.ctx.seed if self.ctx.seed is not None else random.randrange(1, 2**31 - 1)
        session = new_game(self.ctx.symbols, seed=seed, config=self.ctx.game_config)
        self._next = SceneTransition(BoardScene(self.ctx, session))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        draw_gradient(screen, (255, 126, 95), (254, 180, 123))
        w, _ = screen.get_size()
        fonts = self.ctx.assets.fonts
        draw_text_centered(screen, fonts.big, "Memory Game", (w // 2, 140))
        draw_text_centered(
            screen,
            fonts.small,
            f"{self.ctx.game_config.max_level} levels. Match every pair to advance.",
            (w // 2, 190),
        )
        for b in self._buttons:
            b.draw(screen, fonts.ui)
