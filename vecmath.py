"""2D vector helpers shared by the physics code."""

from __future__ import annotations

import math
from dataclasses import dataclass


NORMALIZE_EPSILON = 1e-6


def clamp(value: float, lo: float, hi: float) -> float:
	if value < lo:
		return lo
	if value > hi:
		return hi
	return value


@dataclass(frozen=True)
class Vec2:
	x: float = 0.0
	y: float = 0.0

	def __add__(self, other: Vec2) -> Vec2:
		return Vec2(self.x + other.x, self.y + other.y)

	def __sub__(self, other: Vec2) -> Vec2:
		return Vec2(self.x - other.x, self.y - other.y)

	def __mul__(self, scalar: float) -> Vec2:
		return Vec2(self.x * scalar, self.y * scalar)

	__rmul__ = __mul__

	def __neg__(self) -> Vec2:
		return Vec2(-self.x, -self.y)

	def dot(self, other: Vec2) -> float:
		return self.x * other.x + self.y * other.y

	def length(self) -> float:
		return math.sqrt(self.dot(self))

	def normalized(self) -> Vec2:
		"""Unit vector in the same direction, or (1, 0) for a near-zero vector."""
		length = self.length()
		if length > NORMALIZE_EPSILON:
			return Vec2(self.x / length, self.y / length)
		return Vec2(1.0, 0.0)

	def with_x(self, x: float) -> Vec2:
		return Vec2(x, self.y)

	def with_y(self, y: float) -> Vec2:
		return Vec2(self.x, y)


def normalize(x: float, y: float) -> Vec2:
	return Vec2(x, y).normalized()
