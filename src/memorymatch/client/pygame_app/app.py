from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.session import GameConfig
from memorymatch.engine.types import SymbolSet
from memorymatch.paths import Paths
from memorymatch.services.content import AudioCatalog, ContentService
from memorymatch.services.telemetry import TelemetryService

from .asset_manager import AssetManager


@dataclass
class SceneTransition:
    next_scene: "Scene"


class Scene(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> SceneTransition | None: ...
    def render(self, screen: pygame.Surface) -> None: ...


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    content: ContentService
    telemetry: TelemetryService
    game_config: GameConfig
    seed: int | None = None

    # Loaded at boot
    symbols: Optional[SymbolSet] = None
    audio: Optional[AudioCatalog] = None


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        self.ctx.assets.stop_music()
        return 0
