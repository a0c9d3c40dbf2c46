"""Pygame front end: draws session snapshots and feeds it keyboard/mouse intents."""

from __future__ import annotations

import logging
import os
import sys
from typing import Dict, List, Optional, Tuple

import pygame

from contracts import Intent, RenderSnapshot
from entities import Screen
from session import GameSession
from settings import (
	BALL_COLOR,
	BG_COLOR,
	BULLET_COLOR,
	FIREBALL_COLOR,
	HEIGHT,
	HIGH_SCORE_ROWS,
	HIGHLIGHT_COLOR,
	PADDLE_COLOR,
	PADDLE_SHOOTING_COLOR,
	PANEL_BORDER,
	PANEL_COLOR,
	PERK_COLORS,
	PERK_LABELS,
	RNG_SEED,
	TEXT_COLOR,
	THROUGH_BALL_COLOR,
	WIDTH,
)

logger = logging.getLogger(__name__)

FPS = 60
FONT_LARGE_SIZE = 34
FONT_SMALL_SIZE = 18
OVERLAY_ALPHA = 170
HELP_LINES = [
	"Left / Right or A / D: move the paddle (the mouse works too)",
	"Space or left click: launch the ball",
	"F or right click: fire while the paddle is armed",
	"P or Esc: pause, M while paused: back to menu",
	"",
	"+1 extra life      S speed up        W wide paddle",
	"N narrow paddle    T through ball    F fireball",
	"G gun paddle       X instant death",
	"",
	"Enter or Esc to return",
]

HELD_KEYS: Dict[int, Intent] = {
	pygame.K_LEFT: Intent.MOVE_LEFT,
	pygame.K_a: Intent.MOVE_LEFT,
	pygame.K_RIGHT: Intent.MOVE_RIGHT,
	pygame.K_d: Intent.MOVE_RIGHT,
}
EDGE_KEYS: Dict[int, Intent] = {
	pygame.K_RETURN: Intent.CONFIRM,
	pygame.K_KP_ENTER: Intent.CONFIRM,
	pygame.K_f: Intent.FIRE,
	pygame.K_p: Intent.PAUSE_TOGGLE,
	pygame.K_m: Intent.EXIT,
	pygame.K_UP: Intent.NAVIGATE_UP,
	pygame.K_w: Intent.NAVIGATE_UP,
	pygame.K_DOWN: Intent.NAVIGATE_DOWN,
	pygame.K_s: Intent.NAVIGATE_DOWN,
}


def intent_for_key(key: int, screen: Screen) -> Optional[Intent]:
	if key == pygame.K_SPACE:
		return Intent.LAUNCH if screen is Screen.PLAY else Intent.CONFIRM
	if key == pygame.K_ESCAPE:
		return Intent.EXIT if screen is Screen.MENU else Intent.CANCEL
	return EDGE_KEYS.get(key)


def format_time(seconds: float) -> str:
	minutes, secs = divmod(int(seconds), 60)
	return f"{minutes:02d}:{secs:02d}"


class PygameRenderer:
	def __init__(self, surface: pygame.Surface) -> None:
		pygame.font.init()
		self.surface = surface
		self.font_large = pygame.font.SysFont("consolas", FONT_LARGE_SIZE)
		self.font_small = pygame.font.SysFont("consolas", FONT_SMALL_SIZE)

	def to_screen(self, snap: RenderSnapshot, x: float, y: float) -> Tuple[int, int]:
		return int(x), int(snap.height - y)

	def box(self, snap: RenderSnapshot, cx: float, cy: float, w: float, h: float) -> pygame.Rect:
		left, top = self.to_screen(snap, cx - w / 2, cy + h / 2)
		return pygame.Rect(left, top, int(w), int(h))

	def draw(self, snap: RenderSnapshot) -> None:
		self.surface.fill(BG_COLOR)
		if snap.screen is Screen.MENU:
			self.draw_menu(snap)
		elif snap.screen is Screen.HELP:
			self.draw_help()
		elif snap.screen is Screen.HIGHSCORES:
			self.draw_high_scores(snap)
		else:
			self.draw_world(snap)
			self.draw_hud(snap)
			if snap.screen is Screen.PAUSE:
				self.draw_pause(snap)
			elif snap.screen is Screen.WIN:
				self.draw_result("You cleared the wall!", snap)
			elif snap.screen is Screen.GAMEOVER:
				self.draw_result("Game over", snap)

	def draw_world(self, snap: RenderSnapshot) -> None:
		for brick in snap.bricks:
			rect = self.box(snap, brick.x, brick.y, brick.w, brick.h)
			pygame.draw.rect(self.surface, brick.color, rect, border_radius=4)
			if brick.hp > 1:
				pygame.draw.rect(self.surface, (255, 255, 255), rect, width=2, border_radius=4)
		for perk in snap.perks:
			rect = self.box(snap, perk.pos.x, perk.pos.y, perk.size, perk.size)
			pygame.draw.rect(self.surface, PERK_COLORS[perk.type.name], rect, border_radius=5)
			label = self.font_small.render(PERK_LABELS[perk.type.name], True, BG_COLOR)
			self.surface.blit(label, label.get_rect(center=rect.center))
		for bullet in snap.bullets:
			rect = self.box(snap, bullet.pos.x, bullet.pos.y, bullet.w, bullet.h)
			pygame.draw.rect(self.surface, BULLET_COLOR, rect)

		paddle = snap.paddle
		color = PADDLE_SHOOTING_COLOR if paddle.shooting else PADDLE_COLOR
		rect = self.box(snap, paddle.pos.x, paddle.pos.y, paddle.w, paddle.h)
		pygame.draw.rect(self.surface, color, rect, border_radius=6)

		ball = snap.ball
		if ball.fireball:
			color = FIREBALL_COLOR
		elif ball.through:
			color = THROUGH_BALL_COLOR
		else:
			color = BALL_COLOR
		pygame.draw.circle(
			self.surface,
			color,
			self.to_screen(snap, ball.pos.x, ball.pos.y),
			int(ball.radius),
		)

	def draw_hud(self, snap: RenderSnapshot) -> None:
		text = f"Score {snap.score}   Lives {snap.lives}   Time {format_time(snap.play_time)}"
		self.surface.blit(self.font_small.render(text, True, TEXT_COLOR), (14, 10))
		active = [
			f"{name} {remaining:.0f}s"
			for name, remaining in snap.timers.items()
			if remaining > 0
		]
		if active:
			label = self.font_small.render("  ".join(active), True, HIGHLIGHT_COLOR)
			self.surface.blit(label, (int(snap.width) - label.get_width() - 14, 10))
		if snap.screen is Screen.PLAY and not snap.has_launched:
			hint = self.font_small.render("Press Space to launch", True, TEXT_COLOR)
			self.surface.blit(hint, hint.get_rect(center=(int(snap.width / 2), int(snap.height * 0.55))))

	def draw_panel(self, rect: pygame.Rect) -> None:
		pygame.draw.rect(self.surface, PANEL_COLOR, rect, border_radius=12)
		pygame.draw.rect(self.surface, PANEL_BORDER, rect, width=2, border_radius=12)

	def draw_options(self, options: List[str], selected: int, center_x: int, top: int) -> None:
		for i, option in enumerate(options):
			color = HIGHLIGHT_COLOR if i == selected else TEXT_COLOR
			prefix = "> " if i == selected else "  "
			label = self.font_large.render(prefix + option, True, color)
			self.surface.blit(label, label.get_rect(midtop=(center_x, top + i * 48)))

	def draw_title(self, text: str, center_x: int, y: int) -> None:
		title = self.font_large.render(text, True, HIGHLIGHT_COLOR)
		self.surface.blit(title, title.get_rect(center=(center_x, y)))

	def draw_menu(self, snap: RenderSnapshot) -> None:
		cx = int(snap.width / 2)
		self.draw_title("BRICK BREAKER", cx, 120)
		self.draw_options(list(snap.menu_items), snap.menu_index, cx, 220)
		if snap.best is not None:
			best = f"Best: {snap.best.score} in {format_time(snap.best.t)}"
			label = self.font_small.render(best, True, TEXT_COLOR)
			self.surface.blit(label, label.get_rect(center=(cx, int(snap.height) - 60)))

	def draw_help(self) -> None:
		width = self.surface.get_width()
		self.draw_title("How to play", width // 2, 80)
		for i, line in enumerate(HELP_LINES):
			label = self.font_small.render(line, True, TEXT_COLOR)
			self.surface.blit(label, (80, 150 + i * 30))

	def draw_high_scores(self, snap: RenderSnapshot) -> None:
		cx = int(snap.width / 2)
		self.draw_title("High Scores", cx, 80)
		if not snap.high_scores:
			label = self.font_small.render("No finished games yet", True, TEXT_COLOR)
			self.surface.blit(label, label.get_rect(center=(cx, 160)))
		for i, run in enumerate(snap.high_scores[:HIGH_SCORE_ROWS]):
			line = f"{i + 1:2d}.  {run.score:6d}   {format_time(run.t)}"
			label = self.font_small.render(line, True, TEXT_COLOR)
			self.surface.blit(label, label.get_rect(midtop=(cx, 140 + i * 30)))

	def draw_overlay(self) -> None:
		veil = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
		veil.fill((0, 0, 0, OVERLAY_ALPHA))
		self.surface.blit(veil, (0, 0))

	def draw_pause(self, snap: RenderSnapshot) -> None:
		self.draw_overlay()
		cx = int(snap.width / 2)
		rect = pygame.Rect(0, 0, 360, 220)
		rect.center = (cx, int(snap.height / 2))
		self.draw_panel(rect)
		self.draw_title("Paused", cx, rect.y + 40)
		self.draw_options(list(snap.pause_items), snap.pause_index, cx, rect.y + 80)

	def draw_result(self, message: str, snap: RenderSnapshot) -> None:
		self.draw_overlay()
		cx = int(snap.width / 2)
		cy = int(snap.height / 2)
		self.draw_title(message, cx, cy - 30)
		detail = f"Score {snap.score} in {format_time(snap.play_time)} - press Enter"
		label = self.font_small.render(detail, True, TEXT_COLOR)
		self.surface.blit(label, label.get_rect(center=(cx, cy + 20)))


class BreakoutGame:
	def __init__(self, session: Optional[GameSession] = None) -> None:
		pygame.init()
		pygame.display.set_caption("Brick Breaker")
		self.screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
		self.clock = pygame.time.Clock()
		self.session = session or GameSession(WIDTH, HEIGHT)
		self.renderer = PygameRenderer(self.screen)

	def handle_event(self, event: pygame.event.Event) -> None:
		session = self.session
		if event.type == pygame.QUIT:
			session.running = False
		elif event.type == pygame.VIDEORESIZE:
			self.screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
			self.renderer.surface = self.screen
			session.resize(*event.size)
		elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
			held = HELD_KEYS.get(event.key)
			if held is not None:
				session.set_held(held, event.type == pygame.KEYDOWN)
				return
			if event.type == pygame.KEYDOWN:
				intent = intent_for_key(event.key, session.screen)
				if intent is not None:
					session.handle(intent)
		elif event.type == pygame.MOUSEMOTION:
			session.set_pointer_x(event.pos[0])
		elif event.type == pygame.MOUSEBUTTONDOWN and session.screen is Screen.PLAY:
			if event.button == 1:
				session.handle(Intent.LAUNCH)
			elif event.button == 3:
				session.handle(Intent.FIRE)

	def run(self) -> None:
		while self.session.running:
			dt = self.clock.tick(FPS) / 1000.0
			for event in pygame.event.get():
				self.handle_event(event)
			self.session.advance(dt)
			self.renderer.draw(self.session.snapshot())
			pygame.display.flip()
		pygame.quit()


def configure_logging() -> None:
	logging.basicConfig(
		level=os.environ.get("BREAKOUT_LOG_LEVEL", "INFO").upper(),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)


def main() -> int:
	configure_logging()
	seed = int(os.environ.get("BREAKOUT_SEED", RNG_SEED))
	BreakoutGame(GameSession(WIDTH, HEIGHT, seed=seed)).run()
	logger.info("Bye")
	return 0


if __name__ == "__main__":
	sys.exit(main())
