"""Plain entity records plus the brick layout generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from settings import (
	BALL_BASE_SPEED,
	BALL_RADIUS,
	BRICK_BASE_SCORE,
	BRICK_COLORS,
	BRICK_COLS,
	BRICK_GAP,
	BRICK_HEIGHT,
	BRICK_MARGIN_X,
	BRICK_MARGIN_Y,
	BRICK_ROW_SCORE,
	BRICK_ROWS,
	BRICK_TOUGH_ROWS,
	PADDLE_HEIGHT,
	PADDLE_SPEED,
	PADDLE_WIDTH,
	PADDLE_Y,
)
from vecmath import Vec2


class Screen(Enum):
	MENU = "menu"
	PLAY = "play"
	PAUSE = "pause"
	HELP = "help"
	HIGHSCORES = "highscores"
	WIN = "win"
	GAMEOVER = "gameover"


class PerkType(Enum):
	EXTRA_LIFE = "extra_life"
	SPEED_UP = "speed_up"
	WIDE_PADDLE = "wide_paddle"
	SHRINK_PADDLE = "shrink_paddle"
	THROUGH_BALL = "through_ball"
	FIREBALL = "fireball"
	INSTANT_DEATH = "instant_death"
	SHOOTING_PADDLE = "shooting_paddle"


class MenuItem(Enum):
	RESUME = "Resume"
	START_NEW_GAME = "Start New Game"
	HIGH_SCORES = "High Scores"
	HELP = "Help"
	EXIT = "Exit"


PAUSE_OPTIONS: Tuple[str, str] = ("Resume", "Exit to Menu")


@dataclass
class Brick:
	x: float
	y: float
	w: float
	h: float
	hp: int = 1
	color: Tuple[int, int, int] = (255, 255, 255)
	score: int = BRICK_BASE_SCORE
	alive: bool = True


@dataclass
class Perk:
	pos: Vec2
	vel: Vec2
	size: float
	type: PerkType
	alive: bool = True


@dataclass
class Bullet:
	pos: Vec2
	vel: Vec2
	w: float
	h: float
	alive: bool = True


@dataclass
class Ball:
	pos: Vec2 = field(default_factory=Vec2)
	vel: Vec2 = field(default_factory=lambda: Vec2(0.0, 1.0))
	speed: float = BALL_BASE_SPEED
	radius: float = BALL_RADIUS
	stuck: bool = True
	through: bool = False
	through_timer: float = 0.0
	fireball: bool = False
	fireball_timer: float = 0.0

	@property
	def passes_through(self) -> bool:
		return self.through or self.fireball


@dataclass
class Paddle:
	pos: Vec2 = field(default_factory=lambda: Vec2(0.0, PADDLE_Y))
	w: float = PADDLE_WIDTH
	h: float = PADDLE_HEIGHT
	speed: float = PADDLE_SPEED
	width_timer: float = 0.0
	shooting: bool = False
	shooting_timer: float = 0.0

	@property
	def top(self) -> float:
		return self.pos.y + self.h / 2


@dataclass(frozen=True)
class Run:
	t: float
	score: int


def build_bricks(
	width: float,
	height: float,
	rows: int = BRICK_ROWS,
	cols: int = BRICK_COLS,
) -> List[Brick]:
	area_w = width - 2 * BRICK_MARGIN_X
	bw = (area_w - (cols - 1) * BRICK_GAP) / cols
	bh = BRICK_HEIGHT
	bricks: List[Brick] = []
	for r in range(rows):
		for c in range(cols):
			bricks.append(
				Brick(
					x=BRICK_MARGIN_X + c * (bw + BRICK_GAP) + bw / 2,
					y=height - BRICK_MARGIN_Y - r * (bh + BRICK_GAP) - bh / 2,
					w=bw,
					h=bh,
					hp=2 if r < BRICK_TOUGH_ROWS else 1,
					color=BRICK_COLORS[r % len(BRICK_COLORS)],
					score=BRICK_BASE_SCORE + BRICK_ROW_SCORE * r,
				)
			)
	return bricks
