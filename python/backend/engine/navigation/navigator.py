"""Screen navigation for the puzzle frontends.

The puzzle engine knows nothing about screens; frontends feed user
actions through :func:`transition` and draw whatever screen comes back.
"""

from __future__ import annotations

import enum
import logging

from backend.models.errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class Screen(enum.Enum):
    MENU = "menu"
    DIFFICULTY = "difficulty"
    IMAGE_PICKER = "image_picker"
    GAME = "game"
    WIN = "win"
    EXIT = "exit"


class Event(enum.Enum):
    PLAY = "play"
    QUIT = "quit"
    SELECT_DIFFICULTY = "select_difficulty"
    SELECT_IMAGE = "select_image"
    BACK = "back"
    SOLVED = "solved"
    PLAY_AGAIN = "play_again"
    MAIN_MENU = "main_menu"


_TRANSITIONS: dict[tuple[Screen, Event], Screen] = {
    (Screen.MENU, Event.PLAY): Screen.DIFFICULTY,
    (Screen.MENU, Event.QUIT): Screen.EXIT,
    (Screen.DIFFICULTY, Event.SELECT_DIFFICULTY): Screen.IMAGE_PICKER,
    (Screen.DIFFICULTY, Event.BACK): Screen.MENU,
    (Screen.IMAGE_PICKER, Event.SELECT_IMAGE): Screen.GAME,
    (Screen.IMAGE_PICKER, Event.BACK): Screen.DIFFICULTY,
    (Screen.GAME, Event.SOLVED): Screen.WIN,
    (Screen.GAME, Event.BACK): Screen.IMAGE_PICKER,
    (Screen.WIN, Event.PLAY_AGAIN): Screen.IMAGE_PICKER,
    (Screen.WIN, Event.MAIN_MENU): Screen.MENU,
}


def transition(screen: Screen, event: Event) -> Screen:
    """Return the screen reached from *screen* on *event*."""
    try:
        return _TRANSITIONS[(screen, event)]
    except KeyError:
        raise InvalidTransitionError(
            f"{event.value!r} is not allowed on the {screen.value!r} screen."
        ) from None


def allowed_events(screen: Screen) -> list[Event]:
    return [event for (src, event) in _TRANSITIONS if src is screen]


class Navigator:
    """Holds the current screen of one frontend."""

    def __init__(self, start: Screen = Screen.MENU) -> None:
        self.screen = start

    @property
    def finished(self) -> bool:
        return self.screen is Screen.EXIT

    def send(self, event: Event) -> Screen:
        previous = self.screen
        self.screen = transition(previous, event)
        logger.debug("%s --%s--> %s", previous.value, event.value, self.screen.value)
        return self.screen

    def report_solved(self, solved: bool) -> bool:
        """Move on to the win screen when *solved* and the game screen allows it."""
        if solved and Event.SOLVED in allowed_events(self.screen):
            self.send(Event.SOLVED)
            return True
        return False
