"""Screen state machine: routes intents according to the current screen."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List

from contracts import Intent
from entities import PAUSE_OPTIONS, MenuItem, Screen

if TYPE_CHECKING:
	from session import GameSession

logger = logging.getLogger(__name__)

ALL_MENU_ITEMS: List[MenuItem] = [
	MenuItem.RESUME,
	MenuItem.START_NEW_GAME,
	MenuItem.HIGH_SCORES,
	MenuItem.HELP,
	MenuItem.EXIT,
]


def visible_menu_items(session: GameSession) -> List[MenuItem]:
	if session.can_resume:
		return list(ALL_MENU_ITEMS)
	return [item for item in ALL_MENU_ITEMS if item is not MenuItem.RESUME]


def enter_menu(session: GameSession) -> None:
	session.screen = Screen.MENU
	session.menu_index = 0


def request_exit(session: GameSession) -> None:
	session.running = False
	logger.info("Exit requested")


def confirm_menu_item(session: GameSession) -> None:
	items = visible_menu_items(session)
	if not 0 <= session.menu_index < len(items):
		return
	item = items[session.menu_index]
	if item is MenuItem.RESUME:
		session.resume()
	elif item is MenuItem.START_NEW_GAME:
		session.new_game()
	elif item is MenuItem.HIGH_SCORES:
		session.screen = Screen.HIGHSCORES
	elif item is MenuItem.HELP:
		session.screen = Screen.HELP
	elif item is MenuItem.EXIT:
		request_exit(session)


def handle_menu(session: GameSession, intent: Intent) -> None:
	count = len(visible_menu_items(session))
	if intent is Intent.NAVIGATE_UP:
		session.menu_index = (session.menu_index - 1) % count
	elif intent is Intent.NAVIGATE_DOWN:
		session.menu_index = (session.menu_index + 1) % count
	elif intent is Intent.CONFIRM:
		confirm_menu_item(session)
	elif intent is Intent.EXIT:
		request_exit(session)


def handle_info_screen(session: GameSession, intent: Intent) -> None:
	if intent in (Intent.CONFIRM, Intent.CANCEL):
		session.screen = Screen.MENU


def handle_result_screen(session: GameSession, intent: Intent) -> None:
	if intent is Intent.CONFIRM:
		enter_menu(session)


def pause(session: GameSession) -> None:
	session.screen = Screen.PAUSE
	session.can_resume = True
	session.pause_index = 0


def handle_play(session: GameSession, intent: Intent) -> None:
	if intent in (Intent.PAUSE_TOGGLE, Intent.CANCEL):
		pause(session)
	elif intent is Intent.LAUNCH:
		session.launch_ball()
	elif intent is Intent.FIRE:
		session.fire_bullet()


def handle_pause(session: GameSession, intent: Intent) -> None:
	count = len(PAUSE_OPTIONS)
	if intent in (Intent.PAUSE_TOGGLE, Intent.CANCEL):
		session.resume()
	elif intent is Intent.NAVIGATE_UP:
		session.pause_index = (session.pause_index - 1) % count
	elif intent is Intent.NAVIGATE_DOWN:
		session.pause_index = (session.pause_index + 1) % count
	elif intent is Intent.CONFIRM:
		if session.pause_index == 0:
			session.resume()
		elif session.pause_index == 1:
			session.exit_to_menu()
	elif intent is Intent.EXIT:
		session.suspend_to_menu()


HANDLERS: Dict[Screen, Callable[["GameSession", Intent], None]] = {
	Screen.MENU: handle_menu,
	Screen.PLAY: handle_play,
	Screen.PAUSE: handle_pause,
	Screen.HELP: handle_info_screen,
	Screen.HIGHSCORES: handle_info_screen,
	Screen.WIN: handle_result_screen,
	Screen.GAMEOVER: handle_result_screen,
}


def dispatch(session: GameSession, intent: Intent) -> None:
	HANDLERS[session.screen](session, intent)
