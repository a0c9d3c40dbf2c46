"""Circle and box overlap tests used by the ball, perks and bullets."""

from __future__ import annotations

import math
from typing import NamedTuple, Optional

from vecmath import NORMALIZE_EPSILON, Vec2, clamp


CENTER_EPSILON = 1e-4
# Tie-break for a circle centre lying inside the box: push straight up.
INSIDE_NORMAL = Vec2(0.0, 1.0)


class Contact(NamedTuple):
	normal: Vec2
	penetration: float


def circle_vs_box(
	center: Vec2,
	w: float,
	h: float,
	circle: Vec2,
	radius: float,
) -> Optional[Contact]:
	"""Test a circle against an axis-aligned box given by its centre and size.

	Returns the unit normal pointing from the nearest box point towards the
	circle centre together with the penetration depth, or None when the two
	shapes do not touch. The caller applies ``pos += normal * penetration``.
	"""
	nearest_x = clamp(circle.x, center.x - w / 2, center.x + w / 2)
	nearest_y = clamp(circle.y, center.y - h / 2, center.y + h / 2)
	dx = circle.x - nearest_x
	dy = circle.y - nearest_y
	d2 = dx * dx + dy * dy
	if d2 > radius * radius:
		return None
	distance = math.sqrt(d2)
	if distance > CENTER_EPSILON:
		normal = Vec2(dx / distance, dy / distance)
	else:
		normal = INSIDE_NORMAL
	return Contact(normal, radius - distance)


def reflect(velocity: Vec2, normal: Vec2, speed: float) -> Vec2:
	"""Mirror ``velocity`` about ``normal`` and rescale it to ``speed``.

	A near-zero velocity has no direction to mirror and is returned as is.
	"""
	incoming = velocity.length()
	if incoming < NORMALIZE_EPSILON:
		return velocity
	direction = velocity * (1.0 / incoming)
	mirrored = direction - normal * (2.0 * direction.dot(normal))
	return mirrored.normalized() * speed


def boxes_overlap(a: Vec2, aw: float, ah: float, b: Vec2, bw: float, bh: float) -> bool:
	return abs(a.x - b.x) <= (aw + bw) / 2 and abs(a.y - b.y) <= (ah + bh) / 2


def point_in_box(point: Vec2, center: Vec2, w: float, h: float) -> bool:
	return abs(point.x - center.x) <= w / 2 and abs(point.y - center.y) <= h / 2
