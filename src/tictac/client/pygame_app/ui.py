from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import pygame  # type: ignore[import-not-found]


Color = tuple[int, int, int]


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def joinor(items: Sequence[object], delimiter: str = ", ", word: str = "or") -> str:
    """'1', '1 or 2', '1, 2, or 3'."""
    parts = [str(i) for i in items]
    if len(parts) <= 1:
        return "".join(parts)
    if len(parts) == 2:
        return f"{parts[0]} {word} {parts[1]}"
    return delimiter.join(parts[:-1]) + f"{delimiter}{word} {parts[-1]}"


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
        bg = (60, 60, 60) if self.enabled else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        img = font.render(self.text, True, (240, 240, 240))
        r = img.get_rect(center=self.rect.center)
        screen.blit(img, r.topleft)


@dataclass
class TextInput:
    rect: pygame.Rect
    text: str
    on_submit: Callable[[str], None]
    active: bool = False
    max_len: int = 18

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.active = self.rect.collidepoint(event.pos)
            return self.active
        if not self.active:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_RETURN:
                self.on_submit(self.text)
                self.active = False
                return True
            if event.key == pygame.K_ESCAPE:
                self.active = False
                return True
            if event.key == pygame.K_BACKSPACE:
                self.text = self.text[:-1]
                return True
            if event.unicode and len(self.text) < self.max_len and event.unicode.isprintable():
                self.text += event.unicode
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = (20, 20, 20) if self.active else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=6)
        border = (200, 200, 120) if self.active else (0, 0, 0)
        pygame.draw.rect(screen, border, self.rect, width=2, border_radius=6)
        img = font.render(self.text, True, (240, 240, 240))
        screen.blit(img, (self.rect.x + 8, self.rect.y + 6))
