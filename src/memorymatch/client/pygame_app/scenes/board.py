from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from memorymatch.client.director import Cue, GameDirector
from memorymatch.engine.session import Card, GameSession

from ..app import GameContext, Scene, SceneTransition
from ..ui import Button, draw_gradient, draw_text_centered

COLUMNS = 4
CARD_BACK = (255, 235, 59)
CARD_FACE = (255, 255, 255)
CARD_BORDER = (51, 51, 51)


class BoardScene:
    def __init__(self, ctx: GameContext, session: GameSession) -> None:
        self.ctx = ctx
        self.session = session
        self.director = GameDirector(session, telemetry=ctx.telemetry)
        self._next: SceneTransition | None = None

        w, h = ctx.screen.get_size()
        self._card_size = int(w * 0.2)
        self._margin = int(w * 0.02)

        self.btn_restart = Button(
            rect=pygame.Rect(w // 2 - 110, h - 70, 220, 48),
            text="Restart Game",
            on_click=self._on_restart,
        )
        self.btn_menu = Button(rect=pygame.Rect(w - 100, 12, 88, 36), text="Menu", on_click=self._on_menu)
        self.btn_next = Button(
            rect=pygame.Rect(w // 2 - 110, h // 2 + 90, 220, 48),
            text="Next Level",
            on_click=self._on_next_level,
        )

        self._play_cues(self.director.start())

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _on_menu(self) -> None:
        from .main_menu import MainMenuScene

        self._play_cues(self.director.stop())
        self._go(MainMenuScene(self.ctx))

    def _on_restart(self) -> None:
        self._play_cues(self.director.restart())

    def _on_next_level(self) -> None:
        self._play_cues(self.director.continue_to_next_level())

    def _play_cues(self, cues: list[Cue]) -> None:
        audio = self.ctx.audio
        for cue in cues:
            if cue == "music_start":
                self.ctx.assets.play_music(audio.music if audio is not None else None)
            elif cue == "music_stop":
                self.ctx.assets.stop_music()
            elif audio is not None:
                self.ctx.assets.play_sound(audio.cues.get(cue))

    def _card_rect(self, position: int) -> pygame.Rect:
        w, _ = self.ctx.screen.get_size()
        step = self._card_size + 2 * self._margin
        x0 = (w - step * COLUMNS) // 2 + self._margin
        y0 = 130
        row, col = divmod(position, COLUMNS)
        return pygame.Rect(x0 + col * step, y0 + row * step, self._card_size, self._card_size)

    def _hit_test_card(self, pos: tuple[int, int]) -> int | None:
        for card in self.session.cards:
            if self._card_rect(card.position).collidepoint(pos):
                return card.position
        return None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.btn_menu.handle_event(event) or self.btn_restart.handle_event(event):
            return
        if self.director.awaiting_report:
            self.btn_next.handle_event(event)
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            position = self._hit_test_card(event.pos)
            if position is not None:
                # Rejected flips are ignored without feedback.
                self.director.flip(position)
                self._play_cues(self.director.drain_cues())

    def update(self, dt: float) -> SceneTransition | None:
        self._play_cues(self.director.update(dt))
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        draw_gradient(screen, (255, 126, 95), (254, 180, 123))
        fonts = self.ctx.assets.fonts
        w, h = screen.get_size()
        s = self.session

        draw_text_centered(screen, fonts.big, f"Memory Game - Level {s.level}", (w // 2, 60))
        draw_text_centered(screen, fonts.ui, f"Moves: {s.moves} | Timer: {s.timer} sec", (w // 2, 100))
        self.btn_menu.draw(screen, fonts.small)

        for card in s.cards:
            self._draw_card(screen, card)

        if s.game_over:
            self._draw_banner(
                screen,
                ["Congratulations!", f"You've completed all levels in {s.moves} moves!"],
                color=(76, 175, 80),
            )
        elif self.director.awaiting_report:
            self._draw_banner(screen, [f"Level {s.level} Report"], color=(255, 99, 71))
            self.btn_next.draw(screen, fonts.ui)
        elif s.is_level_complete() and s.level < s.max_level:
            self._draw_banner(
                screen,
                [f"Level {s.level} Complete!", "Get ready for the next level..."],
                color=(0, 123, 255),
            )

        self.btn_restart.draw(screen, fonts.ui)

    def _draw_card(self, screen: pygame.Surface, card: Card) -> None:
        rect = self._card_rect(card.position)
        revealed = card.matched or card.position in self.session.selection
        if not revealed:
            pygame.draw.rect(screen, CARD_BACK, rect, border_radius=10)
            pygame.draw.rect(screen, CARD_BORDER, rect, width=1, border_radius=10)
            draw_text_centered(screen, self.ctx.assets.fonts.card, "?", rect.center, color=(51, 51, 51))
            return

        pygame.draw.rect(screen, CARD_FACE, rect, border_radius=10)
        pygame.draw.rect(screen, CARD_BORDER, rect, width=1, border_radius=10)
        if self.ctx.symbols is None:
            draw_text_centered(screen, self.ctx.assets.fonts.small, card.id, rect.center, color=(0, 0, 0))
            return
        symbol = self.ctx.symbols.get(card.id)
        art = self.ctx.assets.get_image(symbol.art_path, size=(rect.w - 8, rect.h - 8))
        if art is not None:
            screen.blit(art, (rect.x + 4, rect.y + 4))
        else:
            pygame.draw.rect(screen, symbol.color, rect.inflate(-10, -10), border_radius=8)
            draw_text_centered(screen, self.ctx.assets.fonts.small, symbol.name, rect.center)
        if card.matched:
            veil = pygame.Surface(rect.size, pygame.SRCALPHA)
            veil.fill((255, 255, 255, 90))
            screen.blit(veil, rect.topleft)

    def _draw_banner(self, screen: pygame.Surface, title_lines: list[str], color: tuple[int, int, int]) -> None:
        w, h = screen.get_size()
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        screen.blit(overlay, (0, 0))

        fonts = self.ctx.assets.fonts
        y = h // 2 - 110
        for line in title_lines:
            draw_text_centered(screen, fonts.ui, line, (w // 2, y), color=color)
            y += 30
        report = self.director.last_report
        if report is not None and (self.session.game_over or self.director.awaiting_report):
            y += 10
            for line in report.summary().splitlines():
                draw_text_centered(screen, fonts.ui, line, (w // 2, y), color=(255, 20, 147))
                y += 28
