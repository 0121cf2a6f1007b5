# symbol_map/errors.py

"""
================================================================================
ERROR REPORTING
================================================================================
Loading problems (missing files, unparsable data) are not the chart's
concern; they are reported to the user by a dismissable banner at the top of
the window and written to the log.

Data Contract:
---------------
- process_error(error, reporter): returns False for a falsy error. Otherwise
  logs it, hands "Error: <text>" to the reporter and returns True. The text
  is the error's `status_text` attribute when it has one, else str(error).
- ErrorBanner: a reporter that stacks messages and draws them in red until
  dismissed by a click on the banner or the ESC key.
================================================================================
"""
import logging
from typing import Callable, List, Optional

import pygame

logger = logging.getLogger(__name__)

# --- Banner Constants ---
BANNER_TEXT_COLOR = (200, 0, 0)
BANNER_BACKGROUND = (255, 235, 235)
BANNER_PADDING = 6


def error_text(error) -> str:
    return str(getattr(error, "status_text", error))


def process_error(error, reporter: Optional[Callable[[str], None]] = None) -> bool:
    """Reports an error if there is one. Returns True if an error was reported."""
    if not error:
        return False

    message = f"Error: {error_text(error)}"
    logger.warning(message, exc_info=error if isinstance(error, BaseException) else None)
    if reporter is not None:
        reporter(message)
    return True


class ErrorBanner:
    """Red, dismissable error messages drawn above everything else."""

    def __init__(self, font: Optional[pygame.font.Font] = None):
        self.messages: List[str] = []
        self.font = font
        self._rect = pygame.Rect(0, 0, 0, 0)

    def __call__(self, message: str):
        # Newest first, like inserting before the first element of the page.
        self.messages.insert(0, message)

    @property
    def visible(self) -> bool:
        return bool(self.messages)

    def dismiss(self):
        self.messages.clear()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Dismisses the banner on ESC or a click on it. Returns True if consumed."""
        if not self.visible:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.dismiss()
            return True
        if event.type == pygame.MOUSEBUTTONDOWN and self._rect.collidepoint(event.pos):
            self.dismiss()
            return True
        return False

    def draw(self, screen: pygame.Surface):
        if not self.visible or self.font is None:
            return
        line_height = self.font.get_linesize()
        height = len(self.messages) * line_height + 2 * BANNER_PADDING
        self._rect = pygame.Rect(0, 0, screen.get_width(), height)
        pygame.draw.rect(screen, BANNER_BACKGROUND, self._rect)
        for i, message in enumerate(self.messages):
            text_surface = self.font.render(message, True, BANNER_TEXT_COLOR)
            screen.blit(text_surface, (BANNER_PADDING, BANNER_PADDING + i * line_height))
