"""Power-up drops: spawn roll, weighted type pick and effects."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Tuple

from entities import Brick, Perk, PerkType, Screen
from settings import (
	FIREBALL_DURATION,
	MAX_LIVES,
	PADDLE_MAX_WIDTH,
	PADDLE_MIN_WIDTH,
	PERK_FALL_SPEED,
	PERK_SIZE,
	PERK_SPAWN_CHANCE,
	SHOOTING_DURATION,
	SHRINK_PADDLE_DURATION,
	SHRINK_PADDLE_FACTOR,
	SPEED_UP_FACTOR,
	THROUGH_DURATION,
	WIDE_PADDLE_DURATION,
	WIDE_PADDLE_FACTOR,
)
from vecmath import Vec2

if TYPE_CHECKING:
	from session import GameSession

logger = logging.getLogger(__name__)

# Upper bounds of the cumulative bins for the type roll. SHOOTING_PADDLE sits
# before INSTANT_DEATH here even though the enum declares them the other way.
PERK_BINS: List[Tuple[float, PerkType]] = [
	(0.18, PerkType.EXTRA_LIFE),
	(0.36, PerkType.SPEED_UP),
	(0.52, PerkType.WIDE_PADDLE),
	(0.66, PerkType.SHRINK_PADDLE),
	(0.78, PerkType.THROUGH_BALL),
	(0.90, PerkType.FIREBALL),
	(0.96, PerkType.SHOOTING_PADDLE),
	(1.00, PerkType.INSTANT_DEATH),
]


def choose_perk_type(roll: float) -> PerkType:
	for upper, perk_type in PERK_BINS:
		if roll < upper:
			return perk_type
	return PERK_BINS[-1][1]


def maybe_spawn_perk(session: GameSession, brick: Brick) -> bool:
	"""Roll for a drop from a freshly destroyed brick."""
	if session.rng.random() >= PERK_SPAWN_CHANCE:
		return False
	perk_type = choose_perk_type(session.rng.random())
	session.perks.append(
		Perk(
			pos=Vec2(brick.x, brick.y),
			vel=Vec2(0.0, -PERK_FALL_SPEED),
			size=PERK_SIZE,
			type=perk_type,
		)
	)
	logger.debug("Spawned %s at (%.0f, %.0f)", perk_type.name, brick.x, brick.y)
	return True


def apply_perk(session: GameSession, perk_type: PerkType) -> None:
	ball = session.ball
	paddle = session.paddle
	logger.debug("Applying %s", perk_type.name)
	if perk_type is PerkType.EXTRA_LIFE:
		session.lives = min(session.lives + 1, MAX_LIVES)
	elif perk_type is PerkType.SPEED_UP:
		ball.speed *= SPEED_UP_FACTOR
	elif perk_type is PerkType.WIDE_PADDLE:
		paddle.w = min(paddle.w * WIDE_PADDLE_FACTOR, PADDLE_MAX_WIDTH)
		paddle.width_timer = WIDE_PADDLE_DURATION
	elif perk_type is PerkType.SHRINK_PADDLE:
		paddle.w = max(paddle.w * SHRINK_PADDLE_FACTOR, PADDLE_MIN_WIDTH)
		paddle.width_timer = SHRINK_PADDLE_DURATION
	elif perk_type is PerkType.THROUGH_BALL:
		ball.through = True
		ball.through_timer = THROUGH_DURATION
	elif perk_type is PerkType.FIREBALL:
		ball.fireball = True
		ball.fireball_timer = FIREBALL_DURATION
		ball.through = True
		ball.through_timer = max(ball.through_timer, FIREBALL_DURATION)
	elif perk_type is PerkType.INSTANT_DEATH:
		session.lives = 0
		session.end_session(Screen.GAMEOVER)
	elif perk_type is PerkType.SHOOTING_PADDLE:
		paddle.shooting = True
		paddle.shooting_timer = SHOOTING_DURATION
	else:
		raise ValueError(f"Unknown perk type: {perk_type!r}")
