from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]


Color = tuple[int, int, int]


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (255, 255, 255),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_text_centered(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    center: tuple[int, int],
    color: Color = (255, 255, 255),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, img.get_rect(center=center).topleft)


def draw_gradient(screen: pygame.Surface, top: Color, bottom: Color) -> None:
    w, h = screen.get_size()
    for y in range(h):
        t = y / max(1, h - 1)
        c = tuple(int(top[i] + (bottom[i] - top[i]) * t) for i in range(3))
        pygame.draw.line(screen, c, (0, y), (w, y))


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = (255, 69, 0) if self.enabled else (120, 60, 40)
        pygame.draw.rect(screen, bg, self.rect, border_radius=5)
        img = font.render(self.text, True, (255, 255, 255))
        r = img.get_rect(center=self.rect.center)
        screen.blit(img, r.topleft)
