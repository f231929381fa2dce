"""
Game-over menu layout and click hit-testing, in window coordinates
(origin bottom-left, as Arcade reports mouse positions).
"""

from dataclasses import dataclass
from typing import Optional, Tuple

MENU_W, MENU_H = 300.0, 200.0
BUTTON_W, BUTTON_H = 120.0, 40.0
BUTTON_MARGIN = 30.0

PLAY_AGAIN = "play_again"
EXIT = "exit"


@dataclass(frozen=True)
class Button:
    action: str
    label: str
    left: float
    bottom: float
    width: float = BUTTON_W
    height: float = BUTTON_H

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def top(self) -> float:
        return self.bottom + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x < self.right and self.bottom <= y < self.top


def menu_box(window_w: float, window_h: float) -> Tuple[float, float, float, float]:
    """(left, right, bottom, top) of the menu panel, centred in the window"""
    left = (window_w - MENU_W) / 2
    bottom = (window_h - MENU_H) / 2
    return left, left + MENU_W, bottom, bottom + MENU_H


def menu_buttons(window_w: float, window_h: float) -> Tuple[Button, Button]:
    left, right, bottom, _ = menu_box(window_w, window_h)
    y = bottom + 20.0
    return (
        Button(PLAY_AGAIN, "Play Again", left + BUTTON_MARGIN, y),
        Button(EXIT, "Exit", right - BUTTON_W - BUTTON_MARGIN, y),
    )


def hit_test(window_w: float, window_h: float, x: float, y: float) -> Optional[str]:
    """Action of the menu button under (x, y), if any"""
    for button in menu_buttons(window_w, window_h):
        if button.contains(x, y):
            return button.action
    return None
