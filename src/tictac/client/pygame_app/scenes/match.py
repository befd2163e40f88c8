from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from tictac.engine.board import POSITIONS
from tictac.engine.match import MatchController
from tictac.engine.serialize import match_snapshot

from ..app import GameContext
from ..scene_base import Scene, SceneTransition
from ..ui import Button, draw_text, joinor

COMPUTER_DELAY = 0.35  # seconds before the computer answers
BOARD_ORIGIN = (170, 150)
SQUARE = 100


class MatchScene:
    def __init__(self, ctx: GameContext, match: MatchController) -> None:
        self.ctx = ctx
        self.match = match

        self._next: SceneTransition | None = None
        self._message: str = ""
        self._computer_wait = 0.0
        self._match_events_sent = 0

        self.btn_menu = Button(rect=pygame.Rect(480, 20, 140, 40), text="Menu", on_click=self._on_menu)
        self.btn_again = Button(rect=pygame.Rect(170, 520, 300, 50), text="Play again", on_click=self._on_play_again)
        self.btn_swap = Button(
            rect=pygame.Rect(170, 580, 300, 50),
            text="Change marker",
            on_click=self._on_swap_markers,
        )
        self.btn_restart = Button(
            rect=pygame.Rect(170, 520, 300, 50),
            text=f"Play to {self.match.config.target_score} again",
            on_click=self._on_restart,
        )

        self._start_round()

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _on_menu(self) -> None:
        from .main_menu import MainMenuScene

        self._flush_match_events()
        self._go(MainMenuScene(self.ctx))

    def _on_play_again(self) -> None:
        if self.match.round_in_progress or self.match.is_over:
            return
        self._start_round()

    def _on_swap_markers(self) -> None:
        if self.match.round_in_progress:
            return
        self.match.reassign_markers(self.match.config.other_marker(self.match.human.marker))
        self._flush_match_events()

    def _on_restart(self) -> None:
        if not self.match.is_over:
            return
        self.match.reset_scores()
        self._start_round()

    def _start_round(self) -> None:
        self.match.begin_round()
        self._message = ""
        self._computer_wait = 0.0
        self._flush_match_events()

    def _flush_match_events(self) -> None:
        events = self.match.event_log[self._match_events_sent :]
        self._match_events_sent = len(self.match.event_log)
        self.ctx.telemetry.log_events(events)

    def _after_move(self) -> None:
        state = self.match.round
        if state is None or not state.is_over:
            return
        self.ctx.telemetry.log_events(state.event_log)
        self.match.finish_round()
        self._flush_match_events()
        self.ctx.telemetry.log("round_finished", match_snapshot(self.match))

    def _result_text(self) -> str:
        state = self.match.round
        if state is None or state.outcome is None:
            return ""
        if state.outcome == "human_won":
            return "You won!"
        if state.outcome == "computer_won":
            return f"{self.match.computer.name} won!"
        return "It's a tie!"

    def _square_rect(self, position: int) -> pygame.Rect:
        row, col = divmod(position - 1, 3)
        x0, y0 = BOARD_ORIGIN
        return pygame.Rect(x0 + col * SQUARE, y0 + row * SQUARE, SQUARE, SQUARE)

    def _hit_test_square(self, pos: tuple[int, int]) -> int | None:
        for p in POSITIONS:
            if self._square_rect(p).collidepoint(pos):
                return p
        return None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.btn_menu.handle_event(event):
            return

        state = self.match.round
        if state is None:
            return
        if state.is_over:
            if self.match.is_over:
                self.btn_restart.handle_event(event)
            elif not self.btn_again.handle_event(event):
                self.btn_swap.handle_event(event)
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_click(event.pos)

    def _handle_click(self, pos: tuple[int, int]) -> None:
        state = self.match.round
        if state is None or state.phase != "human_turn":
            return
        square = self._hit_test_square(pos)
        if square is None:
            return
        if square not in state.board.unmarked_positions():
            self._message = "Sorry, that's not a valid choice."
            return
        self._message = ""
        self.match.human_move(square)
        self._after_move()

    def update(self, dt: float) -> SceneTransition | None:
        state = self.match.round
        if state is not None and state.phase == "computer_turn":
            self._computer_wait += dt
            if self._computer_wait >= COMPUTER_DELAY:
                self._computer_wait = 0.0
                self.match.computer_move()
                self._after_move()
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((8, 10, 14))
        fonts = self.ctx.assets.fonts
        human = self.match.human
        computer = self.match.computer

        self.btn_menu.draw(screen, fonts.ui)
        draw_text(screen, fonts.ui, f"{human.name} is an {human.marker}. {computer.name} is an {computer.marker}.", (20, 72))
        draw_text(
            screen,
            fonts.ui,
            f"{human.name}: {self.match.human_score}    {computer.name}: {self.match.computer_score}",
            (20, 100),
        )

        self._draw_board(screen)

        state = self.match.round
        if state is None:
            return
        if state.phase == "human_turn":
            draw_text(screen, fonts.ui, f"Choose a square ({joinor(state.board.unmarked_positions())}):", (20, 470))
        elif state.phase == "computer_turn":
            draw_text(screen, fonts.ui, f"{computer.name} is thinking...", (20, 470))
        if self._message:
            draw_text(screen, fonts.ui, self._message, (20, 496), color=(240, 200, 120))

        if state.is_over:
            self._draw_round_over(screen)

    def _draw_board(self, screen: pygame.Surface) -> None:
        state = self.match.round
        win_line = state.board.winning_line() if state is not None and state.outcome != "tie" else None
        for p in POSITIONS:
            rect = self._square_rect(p)
            bg = (40, 60, 40) if win_line is not None and p in win_line else (18, 18, 24)
            pygame.draw.rect(screen, bg, rect)
            pygame.draw.rect(screen, (90, 90, 110), rect, width=2)
            marker = self.match.board.marker_at(p)
            if marker is None:
                draw_text(screen, self.ctx.assets.fonts.small, str(p), (rect.x + 6, rect.y + 4), color=(90, 90, 110))
                continue
            color = (120, 200, 240) if marker == self.match.human.marker else (240, 140, 120)
            img = self.ctx.assets.fonts.mark.render(marker, True, color)
            screen.blit(img, img.get_rect(center=rect.center).topleft)

    def _draw_round_over(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, self._result_text(), (170, 460))

        winner = self.match.overall_winner
        if winner is None:
            self.btn_again.draw(screen, fonts.ui)
            self.btn_swap.draw(screen, fonts.ui)
            return

        if winner == "human":
            title = "You are the overall winner!"
        else:
            title = f"{self.match.computer.name} is the overall winner!"
        draw_text(screen, fonts.ui, title, (170, 492), color=(240, 220, 120))
        self.btn_restart.draw(screen, fonts.ui)
