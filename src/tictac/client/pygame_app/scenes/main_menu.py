from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import Button, draw_text
from .setup import SetupScene


class MainMenuScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        x = 160
        y = 200
        w = 320
        h = 56
        gap = 14
        self._buttons = [
            Button(
                rect=pygame.Rect(x, y, w, h),
                text="New Match (vs Computer)",
                on_click=lambda: self._go_setup(),
            ),
            Button(
                rect=pygame.Rect(x, y + (h + gap), w, h),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            ),
        ]

    def _go_setup(self) -> None:
        self._next = SceneTransition(SetupScene(self.ctx))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 12, 18))
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Welcome to Tic Tac Toe!", (160, 100))
        cfg = self.ctx.config
        if cfg is not None:
            draw_text(screen, fonts.ui, f"First to {cfg.target_score} round wins takes the match.", (160, 146))
        for b in self._buttons:
            b.draw(screen, fonts.ui)
