import pytest

from contracts import Intent
from entities import MenuItem, Run, Screen
from session import GameSession
from settings import BRICK_COLS, BRICK_ROWS, EDGE_MARGIN
from simulation import damage_brick
from vecmath import Vec2, normalize


def test_starts_on_menu_without_resume(menu_session):
    assert menu_session.screen is Screen.MENU
    assert MenuItem.RESUME not in menu_session.menu_items()
    assert len(menu_session.menu_items()) == 4


def test_menu_navigation_wraps(menu_session):
    menu_session.handle(Intent.NAVIGATE_UP)
    assert menu_session.menu_index == 3
    menu_session.handle(Intent.NAVIGATE_DOWN)
    menu_session.handle(Intent.NAVIGATE_DOWN)
    assert menu_session.menu_index == 1


def test_start_new_game_from_menu(menu_session):
    menu_session.handle(Intent.CONFIRM)
    s = menu_session
    assert s.screen is Screen.PLAY
    assert s.can_resume
    assert len(s.bricks) == BRICK_ROWS * BRICK_COLS
    assert s.lives == 3 and s.score == 0
    assert s.ball.stuck and not s.has_launched
    assert s.ball.speed == 320.0
    assert s.paddle.pos == Vec2(s.width / 2, 48.0)


def test_layout_rows(session):
    top_row = session.bricks[:BRICK_COLS]
    assert all(b.hp == 2 and b.score == 50 for b in top_row)
    last = session.bricks[-1]
    assert last.hp == 1 and last.score == 110
    assert top_row[0].x - top_row[0].w / 2 == pytest.approx(70.0)
    assert top_row[-1].x + top_row[-1].w / 2 == pytest.approx(session.width - 70.0)
    assert top_row[0].y + top_row[0].h / 2 == pytest.approx(session.height - 100.0)


@pytest.mark.parametrize(
    "index,screen", [(1, Screen.HIGHSCORES), (2, Screen.HELP)]
)
def test_info_screens_return_to_menu(menu_session, index, screen):
    menu_session.menu_index = index
    menu_session.handle(Intent.CONFIRM)
    assert menu_session.screen is screen
    menu_session.handle(Intent.LAUNCH)
    assert menu_session.screen is screen
    menu_session.handle(Intent.CANCEL)
    assert menu_session.screen is Screen.MENU
    menu_session.handle(Intent.CONFIRM)
    menu_session.handle(Intent.CONFIRM)
    assert menu_session.screen is Screen.MENU


def test_exit_item_stops_the_session(menu_session):
    menu_session.menu_index = 3
    menu_session.handle(Intent.CONFIRM)
    assert not menu_session.running


def test_exit_intent_on_menu(menu_session):
    menu_session.handle(Intent.EXIT)
    assert not menu_session.running


def test_out_of_range_confirm_is_ignored(menu_session):
    menu_session.menu_index = 9
    menu_session.handle(Intent.CONFIRM)
    assert menu_session.screen is Screen.MENU
    assert menu_session.running


def test_pause_toggle(session):
    session.pause_index = 1
    session.handle(Intent.PAUSE_TOGGLE)
    assert session.screen is Screen.PAUSE
    assert session.pause_index == 0
    assert session.can_resume
    session.handle(Intent.PAUSE_TOGGLE)
    assert session.screen is Screen.PLAY
    session.handle(Intent.CANCEL)
    assert session.screen is Screen.PAUSE
    session.handle(Intent.CANCEL)
    assert session.screen is Screen.PLAY


def test_pause_menu_navigation_and_resume(session):
    session.handle(Intent.PAUSE_TOGGLE)
    session.handle(Intent.NAVIGATE_DOWN)
    assert session.pause_index == 1
    session.handle(Intent.NAVIGATE_DOWN)
    assert session.pause_index == 0
    session.handle(Intent.NAVIGATE_UP)
    assert session.pause_index == 1
    session.handle(Intent.NAVIGATE_UP)
    session.handle(Intent.CONFIRM)
    assert session.screen is Screen.PLAY


def test_pause_freezes_simulation(session):
    session.handle(Intent.PAUSE_TOGGLE)
    session.advance(0.03)
    assert session.play_time == 0.0


def test_exit_to_menu_resets_without_history(session):
    session.score = 900
    session.lives = 1
    session.handle(Intent.PAUSE_TOGGLE)
    session.handle(Intent.NAVIGATE_DOWN)
    session.handle(Intent.CONFIRM)
    assert session.screen is Screen.MENU
    assert not session.can_resume
    assert session.bricks == [] and session.perks == [] and session.bullets == []
    assert session.score == 0 and session.lives == 3
    assert session.history == []
    assert MenuItem.RESUME not in session.menu_items()


def test_suspend_and_resume(session):
    bricks = session.bricks
    session.score = 120
    session.handle(Intent.PAUSE_TOGGLE)
    session.handle(Intent.EXIT)
    assert session.screen is Screen.MENU
    assert session.menu_items()[0] is MenuItem.RESUME
    assert len(session.menu_items()) == 5
    session.handle(Intent.CONFIRM)
    assert session.screen is Screen.PLAY
    assert session.bricks is bricks
    assert session.score == 120


def test_launch_and_fire(session):
    session.handle(Intent.FIRE)
    assert session.bullets == []
    session.handle(Intent.LAUNCH)
    ball = session.ball
    assert not ball.stuck and session.has_launched
    expected = normalize(0.2, 1.0) * ball.speed
    assert ball.vel.x == pytest.approx(expected.x)
    assert ball.vel.y == pytest.approx(expected.y)
    session.paddle.shooting = True
    session.paddle.shooting_timer = 3.0
    session.handle(Intent.FIRE)
    (bullet,) = session.bullets
    assert bullet.pos == Vec2(session.paddle.pos.x, 48.0 + 8.0 + 8.0)
    assert bullet.vel.y > 0


def test_launch_ignored_when_ball_in_flight(session):
    session.handle(Intent.LAUNCH)
    session.ball.vel = Vec2(-10.0, 5.0)
    session.handle(Intent.LAUNCH)
    assert session.ball.vel == Vec2(-10.0, 5.0)


def test_result_screens_confirm_to_menu(session):
    session.end_session(Screen.WIN)
    session.handle(Intent.CANCEL)
    assert session.screen is Screen.WIN
    session.handle(Intent.CONFIRM)
    assert session.screen is Screen.MENU
    assert len(session.history) == 1


def test_lose_life_on_last_life(session):
    session.lives = 1
    session.lose_life()
    assert session.lives == 0
    assert session.screen is Screen.GAMEOVER
    assert len(session.history) == 1
    assert not session.can_resume


def test_lose_life_resets_paddle_and_ball(session):
    session.paddle.w = 250.0
    session.paddle.width_timer = 4.0
    session.paddle.shooting = True
    session.global_speed_gain = 10.0
    session.ball.stuck = False
    session.ball.fireball = True
    session.lose_life()
    assert session.lives == 2
    assert session.paddle.w == 120.0 and session.paddle.width_timer == 0.0
    assert not session.paddle.shooting
    assert session.ball.stuck and not session.ball.fireball
    assert session.ball.speed == 330.0


def test_lives_never_negative(session):
    session.lives = 0
    session.lose_life()
    assert session.lives == 0


def test_pointer_positions_paddle(session):
    session.set_pointer_x(-100.0)
    assert session.paddle.pos.x == 60.0 + EDGE_MARGIN
    session.set_pointer_x(10_000.0)
    assert session.paddle.pos.x == session.width - 60.0 - EDGE_MARGIN
    session.set_pointer_x(300.0)
    assert session.paddle.pos.x == 300.0
    assert session.ball.pos.x == 300.0


def test_pointer_ignored_off_play(menu_session):
    x = menu_session.paddle.pos.x
    menu_session.set_pointer_x(100.0)
    assert menu_session.paddle.pos.x == x


def test_held_intents(session):
    session.set_held(Intent.MOVE_LEFT, True)
    session.set_held(Intent.MOVE_RIGHT, True)
    session.advance(0.03)
    assert session.paddle.pos.x == 450.0
    session.set_held(Intent.MOVE_RIGHT, False)
    session.advance(0.03)
    assert session.paddle.pos.x < 450.0
    with pytest.raises(ValueError):
        session.set_held(Intent.FIRE, True)


def test_tick_clamps_dt(session, fake_clock):
    clock = fake_clock(10.0, 10.01, 11.0, 10.5)
    assert session.tick(clock) == 0.0
    assert session.tick(clock) == pytest.approx(0.01)
    assert session.tick(clock) == 0.03
    assert session.tick(clock) == 0.0
    assert session.play_time == pytest.approx(0.04)


def test_advance_clamps_dt(session):
    session.advance(5.0)
    assert session.play_time == pytest.approx(0.03)
    session.advance(-1.0)
    assert session.play_time == pytest.approx(0.03)


def test_resize_keeps_bricks(session):
    positions = [(b.x, b.y) for b in session.bricks]
    session.resize(300, 500)
    assert [(b.x, b.y) for b in session.bricks] == positions
    assert session.paddle.pos.x == 300 - 60.0 - EDGE_MARGIN


def test_bad_playfield_size():
    with pytest.raises(ValueError):
        GameSession(0, 700)
    s = GameSession()
    with pytest.raises(ValueError):
        s.resize(900, -1)


def test_best_run_prefers_faster_on_tie(menu_session):
    assert menu_session.best_run() is None
    menu_session.history = [Run(50.0, 100), Run(40.0, 100), Run(10.0, 50), Run(90.0, 300)]
    assert menu_session.best_run() == Run(90.0, 300)
    menu_session.history.pop()
    assert menu_session.best_run() == Run(40.0, 100)
    assert menu_session.high_scores() == [Run(40.0, 100), Run(50.0, 100), Run(10.0, 50)]
    assert menu_session.high_scores(limit=1) == [Run(40.0, 100)]


def test_history_records_play_time(session):
    session.advance(0.02)
    session.advance(0.02)
    session.score = 75
    session.end_session(Screen.GAMEOVER)
    (run,) = session.history
    assert run.score == 75
    assert run.t == pytest.approx(0.04)


def test_new_game_keeps_history(session):
    session.end_session(Screen.WIN)
    session.new_game()
    assert len(session.history) == 1
    assert session.play_time == 0.0


def test_snapshot_is_detached(session):
    session.bricks[0].alive = False
    snap = session.snapshot()
    assert snap.screen is Screen.PLAY
    assert len(snap.bricks) == len(session.bricks) - 1
    snap.bricks[0].hp = 99
    assert session.bricks[1].hp != 99
    assert snap.menu_items == ("Resume", "Start New Game", "High Scores", "Help", "Exit")
    assert snap.pause_items == ("Resume", "Exit to Menu")
    assert set(snap.timers) == {"through", "fireball", "width", "shooting"}
    assert snap.best is None


def test_same_seed_drops_same_perks():
    drops = []
    for _ in range(2):
        s = GameSession(seed=99)
        s.new_game()
        for brick in s.bricks[:40]:
            brick.hp = 1
            damage_brick(s, brick)
        drops.append([p.type for p in s.perks])
    assert drops[0] == drops[1]
    assert drops[0]
