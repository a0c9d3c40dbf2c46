"""Per-frame gameplay step."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from collision import boxes_overlap, circle_vs_box, point_in_box, reflect
from entities import Brick, Screen
from perks import apply_perk, maybe_spawn_perk
from settings import (
	BALL_SPEED_GROWTH,
	BULLET_DESPAWN_MARGIN,
	EDGE_MARGIN,
	GLOBAL_SPEED_GAIN_RATE,
	PADDLE_BOUNCE_LIFT,
	PADDLE_WIDTH,
	PERK_DESPAWN_Y,
)
from vecmath import Vec2, clamp, normalize

if TYPE_CHECKING:
	from session import GameSession


def update_game(session: GameSession, dt: float) -> None:
	"""Advance a live game by ``dt`` seconds.

	The caller bounds ``dt``; zero is a valid step. Losing a life or picking
	up a lethal perk ends the frame early.
	"""
	if session.screen is not Screen.PLAY:
		return
	session.play_time += dt
	update_timers(session, dt)
	update_paddle(session, dt)
	if not update_ball(session, dt):
		return
	if not update_perks(session, dt):
		return
	update_bullets(session, dt)
	check_win(session)


def update_timers(session: GameSession, dt: float) -> None:
	ball = session.ball
	paddle = session.paddle
	session.global_speed_gain += dt * GLOBAL_SPEED_GAIN_RATE
	ball.speed += dt * BALL_SPEED_GROWTH
	if ball.through:
		ball.through_timer -= dt
		if ball.through_timer <= 0:
			ball.through = False
	if ball.fireball:
		ball.fireball_timer -= dt
		if ball.fireball_timer <= 0:
			ball.fireball = False
	if paddle.width_timer > 0:
		paddle.width_timer -= dt
		if paddle.width_timer <= 0:
			paddle.width_timer = 0.0
			paddle.w = PADDLE_WIDTH
	if paddle.shooting:
		paddle.shooting_timer -= dt
		if paddle.shooting_timer <= 0:
			paddle.shooting = False


def paddle_bounds(session: GameSession) -> Tuple[float, float]:
	half = session.paddle.w / 2
	return half + EDGE_MARGIN, session.width - half - EDGE_MARGIN


def clamp_paddle(session: GameSession) -> None:
	lo, hi = paddle_bounds(session)
	paddle = session.paddle
	paddle.pos = paddle.pos.with_x(clamp(paddle.pos.x, lo, hi))


def update_paddle(session: GameSession, dt: float) -> None:
	paddle = session.paddle
	vx = 0.0
	if session.left_held:
		vx -= paddle.speed
	if session.right_held:
		vx += paddle.speed
	paddle.pos = paddle.pos.with_x(paddle.pos.x + vx * dt)
	clamp_paddle(session)


def stick_ball_to_paddle(session: GameSession) -> None:
	ball = session.ball
	paddle = session.paddle
	ball.pos = Vec2(paddle.pos.x, paddle.top + ball.radius + 1.0)


def update_ball(session: GameSession, dt: float) -> bool:
	"""Move the ball and resolve its contacts; False when a life was lost."""
	ball = session.ball
	if ball.stuck:
		stick_ball_to_paddle(session)
		return True

	ball.pos = ball.pos + ball.vel * dt
	if ball.pos.x - ball.radius < 0:
		ball.pos = ball.pos.with_x(ball.radius)
		ball.vel = ball.vel.with_x(abs(ball.vel.x))
	if ball.pos.x + ball.radius > session.width:
		ball.pos = ball.pos.with_x(session.width - ball.radius)
		ball.vel = ball.vel.with_x(-abs(ball.vel.x))
	if ball.pos.y + ball.radius > session.height:
		ball.pos = ball.pos.with_y(session.height - ball.radius)
		ball.vel = ball.vel.with_y(-abs(ball.vel.y))

	if ball.pos.y - ball.radius < 0:
		session.lose_life()
		return False

	bounce_off_paddle(session)
	for brick in session.bricks:
		if brick.alive:
			collide_ball_with_brick(session, brick)
	return True


def bounce_off_paddle(session: GameSession) -> None:
	ball = session.ball
	paddle = session.paddle
	contact = circle_vs_box(paddle.pos, paddle.w, paddle.h, ball.pos, ball.radius)
	if contact is None:
		return
	ball.pos = ball.pos + contact.normal * contact.penetration
	rel = clamp((ball.pos.x - paddle.pos.x) / (paddle.w / 2), -1.0, 1.0)
	direction = normalize(rel, PADDLE_BOUNCE_LIFT)
	velocity = direction * ball.speed
	ball.vel = velocity.with_y(abs(velocity.y))


def collide_ball_with_brick(session: GameSession, brick: Brick) -> None:
	ball = session.ball
	contact = circle_vs_box(Vec2(brick.x, brick.y), brick.w, brick.h, ball.pos, ball.radius)
	if contact is None:
		return
	damage_brick(session, brick)
	if not ball.passes_through:
		ball.pos = ball.pos + contact.normal * contact.penetration
		ball.vel = reflect(ball.vel, contact.normal, ball.speed)


def damage_brick(session: GameSession, brick: Brick) -> None:
	before = brick.hp
	brick.hp -= 1
	session.score += brick.score
	if before > 0 and brick.hp <= 0:
		brick.alive = False
		maybe_spawn_perk(session, brick)


def update_perks(session: GameSession, dt: float) -> bool:
	"""Drop and collect perks; False when a pickup ended the game."""
	paddle = session.paddle
	for perk in session.perks:
		if not perk.alive:
			continue
		perk.pos = perk.pos + perk.vel * dt
		if perk.pos.y < PERK_DESPAWN_Y:
			perk.alive = False
			continue
		if boxes_overlap(perk.pos, perk.size, perk.size, paddle.pos, paddle.w, paddle.h):
			perk.alive = False
			apply_perk(session, perk.type)
			if session.lives <= 0:
				return False
	session.perks = [perk for perk in session.perks if perk.alive]
	return True


def update_bullets(session: GameSession, dt: float) -> None:
	ceiling = session.height + BULLET_DESPAWN_MARGIN
	for bullet in session.bullets:
		if not bullet.alive:
			continue
		bullet.pos = bullet.pos + bullet.vel * dt
		if bullet.pos.y > ceiling:
			bullet.alive = False
			continue
		for brick in session.bricks:
			if not brick.alive:
				continue
			if point_in_box(bullet.pos, Vec2(brick.x, brick.y), brick.w, brick.h):
				bullet.alive = False
				damage_brick(session, brick)
				break
	session.bullets = [bullet for bullet in session.bullets if bullet.alive]


def check_win(session: GameSession) -> None:
	if any(brick.alive for brick in session.bricks):
		return
	session.end_session(Screen.WIN)
