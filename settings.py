"""Tuning constants for the brick breaker."""

from __future__ import annotations

from typing import List, Tuple


WIDTH, HEIGHT = 900, 700
EDGE_MARGIN = 6.0
MAX_STEP = 0.03

START_LIVES = 3
MAX_LIVES = 5

PADDLE_Y = 48.0
PADDLE_WIDTH = 120.0
PADDLE_HEIGHT = 16.0
PADDLE_SPEED = 630.0
PADDLE_MIN_WIDTH = 60.0
PADDLE_MAX_WIDTH = 320.0

BALL_RADIUS = 9.0
BALL_BASE_SPEED = 320.0
BALL_SPEED_GROWTH = 4.0  # per second, while playing
GLOBAL_SPEED_GAIN_RATE = 2.0  # carried into every re-serve
LAUNCH_DIRECTION = (0.2, 1.0)
PADDLE_BOUNCE_LIFT = 1.2

PERK_SPAWN_CHANCE = 0.22
PERK_SIZE = 18.0
PERK_FALL_SPEED = 150.0
PERK_DESPAWN_Y = -30.0

SPEED_UP_FACTOR = 1.18
WIDE_PADDLE_FACTOR = 1.35
WIDE_PADDLE_DURATION = 14.0
SHRINK_PADDLE_FACTOR = 0.7
SHRINK_PADDLE_DURATION = 12.0
THROUGH_DURATION = 10.0
FIREBALL_DURATION = 8.0
SHOOTING_DURATION = 12.0

BULLET_SPEED = 640.0
BULLET_WIDTH = 4.0
BULLET_HEIGHT = 10.0
BULLET_MUZZLE_OFFSET = 8.0
BULLET_DESPAWN_MARGIN = 20.0

BRICK_ROWS = 7
BRICK_COLS = 12
BRICK_MARGIN_X = 70.0
BRICK_MARGIN_Y = 100.0
BRICK_GAP = 6.0
BRICK_HEIGHT = 22.0
BRICK_BASE_SCORE = 50
BRICK_ROW_SCORE = 10
BRICK_TOUGH_ROWS = 2
BRICK_COLORS: List[Tuple[int, int, int]] = [
	(230, 51, 102),
	(230, 153, 26),
	(230, 230, 51),
	(51, 204, 102),
	(51, 153, 230),
	(128, 77, 230),
	(204, 204, 204),
]

RNG_SEED = 1234567
HIGH_SCORE_ROWS = 10

BG_COLOR = (12, 16, 25)
PANEL_COLOR = (24, 34, 52)
PANEL_BORDER = (90, 110, 160)
TEXT_COLOR = (230, 240, 255)
HIGHLIGHT_COLOR = (255, 214, 102)
PADDLE_COLOR = (200, 200, 200)
PADDLE_SHOOTING_COLOR = (255, 140, 90)
BALL_COLOR = (250, 250, 250)
THROUGH_BALL_COLOR = (130, 200, 255)
FIREBALL_COLOR = (255, 110, 40)
BULLET_COLOR = (255, 240, 160)
PERK_COLORS = {
	"EXTRA_LIFE": (130, 255, 173),
	"SPEED_UP": (255, 214, 102),
	"WIDE_PADDLE": (138, 189, 255),
	"SHRINK_PADDLE": (190, 120, 230),
	"THROUGH_BALL": (80, 200, 170),
	"FIREBALL": (255, 120, 40),
	"INSTANT_DEATH": (255, 60, 60),
	"SHOOTING_PADDLE": (255, 250, 160),
}
PERK_LABELS = {
	"EXTRA_LIFE": "+1",
	"SPEED_UP": "S",
	"WIDE_PADDLE": "W",
	"SHRINK_PADDLE": "N",
	"THROUGH_BALL": "T",
	"FIREBALL": "F",
	"INSTANT_DEATH": "X",
	"SHOOTING_PADDLE": "G",
}
