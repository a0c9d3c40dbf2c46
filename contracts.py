"""Boundary types between the game core and whatever hosts it.

Hosts translate device input into :class:`Intent` values, supply time through
a :class:`FrameClock` (or precomputed ``dt``) and draw from a
:class:`RenderSnapshot`. Nothing here depends on a windowing library.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Protocol, Tuple

from entities import Ball, Brick, Bullet, Paddle, Perk, Run, Screen


class Intent(Enum):
	MOVE_LEFT = "move_left"
	MOVE_RIGHT = "move_right"
	LAUNCH = "launch"
	FIRE = "fire"
	PAUSE_TOGGLE = "pause_toggle"
	CONFIRM = "confirm"
	CANCEL = "cancel"
	NAVIGATE_UP = "navigate_up"
	NAVIGATE_DOWN = "navigate_down"
	EXIT = "exit"


# Level-triggered intents are reported as held/released; the rest are edges.
HELD_INTENTS = frozenset({Intent.MOVE_LEFT, Intent.MOVE_RIGHT})


class FrameClock(Protocol):
	def now(self) -> float:
		...


class MonotonicClock:
	def now(self) -> float:
		return time.perf_counter()


@dataclass(frozen=True)
class RenderSnapshot:
	screen: Screen
	width: float
	height: float
	bricks: Tuple[Brick, ...]
	perks: Tuple[Perk, ...]
	bullets: Tuple[Bullet, ...]
	ball: Ball
	paddle: Paddle
	score: int
	lives: int
	play_time: float
	has_launched: bool
	can_resume: bool
	timers: Dict[str, float]
	menu_items: Tuple[str, ...]
	menu_index: int
	pause_items: Tuple[str, ...]
	pause_index: int
	high_scores: Tuple[Run, ...]
	best: Optional[Run]
