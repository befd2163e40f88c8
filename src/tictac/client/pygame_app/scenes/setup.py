from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from tictac.engine.match import MatchConfig, MatchController
from tictac.engine.serialize import match_snapshot

from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import Button, TextInput, draw_text, joinor


class SetupScene:
    """Collects the human's name and marker, then starts the match."""

    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self.config = ctx.config or MatchConfig()
        self._next: SceneTransition | None = None
        self._message = ""
        self._marker = self.config.markers[0]

        self.name_input = TextInput(
            rect=pygame.Rect(160, 180, 320, 40),
            text="",
            on_submit=lambda _text: self._on_start(),
            active=True,
        )
        self.marker_buttons = [
            Button(
                rect=pygame.Rect(160 + i * 170, 290, 150, 56),
                text=m,
                on_click=lambda m=m: self._choose_marker(m),
            )
            for i, m in enumerate(self.config.markers)
        ]
        self.btn_start = Button(rect=pygame.Rect(160, 400, 320, 56), text="Start", on_click=self._on_start)
        self.btn_back = Button(rect=pygame.Rect(20, 20, 120, 40), text="Back", on_click=self._on_back)

    def _choose_marker(self, marker: str) -> None:
        self._marker = marker

    def _on_back(self) -> None:
        from .main_menu import MainMenuScene

        self._next = SceneTransition(MainMenuScene(self.ctx))

    def _on_start(self) -> None:
        name = self.name_input.text.strip()
        if not name:
            self._message = "Please enter your name."
            self.name_input.active = True
            return
        match = MatchController(name, config=self.config, seed=self.ctx.seed)
        if self._marker != match.human.marker:
            match.reassign_markers(self._marker)
        self.ctx.telemetry.log("match_started", match_snapshot(match))

        from .match import MatchScene

        self._next = SceneTransition(MatchScene(self.ctx, match))

    def handle_event(self, event: pygame.event.Event) -> None:
        self.btn_back.handle_event(event)
        self.name_input.handle_event(event)
        for b in self.marker_buttons:
            b.handle_event(event)
        self.btn_start.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 12, 18))
        fonts = self.ctx.assets.fonts
        self.btn_back.draw(screen, fonts.ui)
        draw_text(screen, fonts.ui, "Please enter your name.", (160, 150))
        self.name_input.draw(screen, fonts.ui)

        draw_text(screen, fonts.ui, f"Choose {joinor(self.config.markers)}", (160, 260))
        for b in self.marker_buttons:
            b.draw(screen, fonts.big)
            if b.text == self._marker:
                pygame.draw.rect(screen, (240, 240, 120), b.rect, width=3, border_radius=8)

        self.btn_start.draw(screen, fonts.ui)
        if self._message:
            draw_text(screen, fonts.ui, self._message, (160, 480), color=(240, 200, 120))
