"""Game session: owns every entity, the perk RNG, the screen and run history."""

from __future__ import annotations

import copy
import logging
import random
from typing import List, Optional, Tuple

import screens
from contracts import HELD_INTENTS, FrameClock, Intent, RenderSnapshot
from entities import (
	PAUSE_OPTIONS,
	Ball,
	Brick,
	Bullet,
	MenuItem,
	Paddle,
	Perk,
	Run,
	Screen,
	build_bricks,
)
from settings import (
	BALL_BASE_SPEED,
	BULLET_HEIGHT,
	BULLET_MUZZLE_OFFSET,
	BULLET_SPEED,
	BULLET_WIDTH,
	HEIGHT,
	LAUNCH_DIRECTION,
	MAX_STEP,
	PADDLE_WIDTH,
	PADDLE_Y,
	RNG_SEED,
	START_LIVES,
	WIDTH,
)
from simulation import clamp_paddle, paddle_bounds, stick_ball_to_paddle, update_game
from vecmath import Vec2, clamp, normalize

logger = logging.getLogger(__name__)


class GameSession:
	def __init__(
		self,
		width: float = WIDTH,
		height: float = HEIGHT,
		rng: Optional[random.Random] = None,
		seed: int = RNG_SEED,
	) -> None:
		self.width, self.height = self.validate_size(width, height)
		self.rng = rng if rng is not None else random.Random(seed)
		self.screen = Screen.MENU
		self.bricks: List[Brick] = []
		self.perks: List[Perk] = []
		self.bullets: List[Bullet] = []
		self.paddle = Paddle(pos=Vec2(self.width / 2, PADDLE_Y))
		self.ball = Ball()
		self.lives = START_LIVES
		self.score = 0
		self.play_time = 0.0
		self.global_speed_gain = 0.0
		self.left_held = False
		self.right_held = False
		self.has_launched = False
		self.can_resume = False
		self.menu_index = 0
		self.pause_index = 0
		self.running = True
		self.history: List[Run] = []
		self.last_tick: Optional[float] = None
		self.reset_ball_on_paddle()

	@staticmethod
	def validate_size(width: float, height: float) -> Tuple[float, float]:
		if width <= 0 or height <= 0:
			raise ValueError(f"Playfield must be positive, got {width}x{height}")
		return float(width), float(height)

	def reset_paddle(self) -> None:
		self.paddle = Paddle(pos=Vec2(self.width / 2, PADDLE_Y))

	def reset_ball_on_paddle(self) -> None:
		ball = self.ball
		self.has_launched = False
		ball.stuck = True
		ball.through = False
		ball.through_timer = 0.0
		ball.fireball = False
		ball.fireball_timer = 0.0
		ball.speed = BALL_BASE_SPEED + self.global_speed_gain
		ball.vel = Vec2(0.0, 1.0)
		stick_ball_to_paddle(self)

	def clear_play_state(self) -> None:
		self.perks = []
		self.bullets = []
		self.score = 0
		self.lives = START_LIVES
		self.global_speed_gain = 0.0
		self.play_time = 0.0
		self.reset_paddle()
		self.ball = Ball()
		self.reset_ball_on_paddle()

	def new_game(self) -> None:
		self.clear_play_state()
		self.bricks = build_bricks(self.width, self.height)
		self.screen = Screen.PLAY
		self.can_resume = True
		self.last_tick = None
		logger.info("New game with %d bricks", len(self.bricks))

	def exit_to_menu(self) -> None:
		self.clear_play_state()
		self.bricks = []
		self.can_resume = False
		self.screen = Screen.MENU
		self.pause_index = 0
		self.menu_index = 0
		logger.info("Exited to menu")

	def suspend_to_menu(self) -> None:
		self.can_resume = True
		self.screen = Screen.MENU
		self.menu_index = 0
		logger.info("Game suspended")

	def resume(self) -> None:
		self.screen = Screen.PLAY
		self.last_tick = None

	def end_session(self, screen: Screen) -> None:
		"""Enter WIN or GAMEOVER and record the finished run."""
		self.screen = screen
		self.save_high_score()
		self.can_resume = False
		logger.info(
			"%s: score %d in %.1fs",
			"Won" if screen is Screen.WIN else "Game over",
			self.score,
			self.play_time,
		)

	def lose_life(self) -> None:
		if self.lives > 0:
			self.lives -= 1
		if self.lives <= 0:
			self.lives = 0
			self.end_session(Screen.GAMEOVER)
			return
		logger.debug("Life lost, %d left", self.lives)
		paddle = self.paddle
		paddle.pos = paddle.pos.with_x(self.width / 2)
		paddle.w = PADDLE_WIDTH
		paddle.width_timer = 0.0
		paddle.shooting = False
		paddle.shooting_timer = 0.0
		self.reset_ball_on_paddle()

	def save_high_score(self) -> None:
		self.history.append(Run(t=self.play_time, score=self.score))

	def high_scores(self, limit: Optional[int] = None) -> List[Run]:
		ranked = sorted(self.history, key=lambda run: (-run.score, run.t))
		return ranked if limit is None else ranked[:limit]

	def best_run(self) -> Optional[Run]:
		best: Optional[Run] = None
		for run in self.history:
			if best is None or run.score > best.score or (run.score == best.score and run.t < best.t):
				best = run
		return best

	def launch_ball(self) -> None:
		if not self.ball.stuck:
			return
		self.ball.stuck = False
		self.has_launched = True
		self.ball.vel = normalize(*LAUNCH_DIRECTION) * self.ball.speed

	def fire_bullet(self) -> bool:
		paddle = self.paddle
		if not paddle.shooting:
			return False
		self.bullets.append(
			Bullet(
				pos=Vec2(paddle.pos.x, paddle.top + BULLET_MUZZLE_OFFSET),
				vel=Vec2(0.0, BULLET_SPEED),
				w=BULLET_WIDTH,
				h=BULLET_HEIGHT,
			)
		)
		logger.debug("Bullet fired from x=%.0f", paddle.pos.x)
		return True

	def set_pointer_x(self, x: float) -> None:
		if self.screen is not Screen.PLAY:
			return
		lo, hi = paddle_bounds(self)
		self.paddle.pos = self.paddle.pos.with_x(clamp(x, lo, hi))
		if self.ball.stuck:
			stick_ball_to_paddle(self)

	def resize(self, width: float, height: float) -> None:
		self.width, self.height = self.validate_size(width, height)
		clamp_paddle(self)
		logger.debug("Playfield resized to %.0fx%.0f", self.width, self.height)

	def set_held(self, intent: Intent, held: bool) -> None:
		if intent not in HELD_INTENTS:
			raise ValueError(f"{intent.name} is not a held intent")
		if intent is Intent.MOVE_LEFT:
			self.left_held = held
		else:
			self.right_held = held

	def handle(self, intent: Intent) -> None:
		screens.dispatch(self, intent)

	def menu_items(self) -> List[MenuItem]:
		return screens.visible_menu_items(self)

	def advance(self, dt: float) -> None:
		update_game(self, clamp(dt, 0.0, MAX_STEP))

	def tick(self, clock: FrameClock) -> float:
		now = clock.now()
		dt = 0.0 if self.last_tick is None else now - self.last_tick
		self.last_tick = now
		dt = clamp(dt, 0.0, MAX_STEP)
		update_game(self, dt)
		return dt

	def snapshot(self) -> RenderSnapshot:
		ball = self.ball
		paddle = self.paddle
		return RenderSnapshot(
			screen=self.screen,
			width=self.width,
			height=self.height,
			bricks=tuple(copy.copy(b) for b in self.bricks if b.alive),
			perks=tuple(copy.copy(p) for p in self.perks if p.alive),
			bullets=tuple(copy.copy(b) for b in self.bullets if b.alive),
			ball=copy.copy(ball),
			paddle=copy.copy(paddle),
			score=self.score,
			lives=self.lives,
			play_time=self.play_time,
			has_launched=self.has_launched,
			can_resume=self.can_resume,
			timers={
				"through": ball.through_timer if ball.through else 0.0,
				"fireball": ball.fireball_timer if ball.fireball else 0.0,
				"width": paddle.width_timer,
				"shooting": paddle.shooting_timer if paddle.shooting else 0.0,
			},
			menu_items=tuple(item.value for item in self.menu_items()),
			menu_index=self.menu_index,
			pause_items=PAUSE_OPTIONS,
			pause_index=self.pause_index,
			high_scores=tuple(self.high_scores()),
			best=self.best_run(),
		)
