"""Gradio wrapper to play the brick breaker from a browser."""

from __future__ import annotations

import logging
import os
import threading
from typing import Optional, Tuple

# Ensure pygame can initialize without a physical display/audio device.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import gradio as gr
import numpy as np
import pygame

from breakout import PygameRenderer, configure_logging, format_time
from contracts import Intent
from session import GameSession
from settings import HEIGHT, RNG_SEED, WIDTH

logger = logging.getLogger(__name__)

HEADLESS_FPS = 30
NUDGE_DURATION = 0.12  # seconds a move button keeps its direction held


class GameHost:
    """Continuously steps the session and keeps the latest rendered frame."""

    def __init__(self) -> None:
        pygame.init()
        self.seed = int(os.environ.get("BREAKOUT_SEED", RNG_SEED))
        self.session = GameSession(WIDTH, HEIGHT, seed=self.seed)
        self.surface = pygame.Surface((WIDTH, HEIGHT))
        self.renderer = PygameRenderer(self.surface)
        self.clock = pygame.time.Clock()
        self.lock = threading.Lock()
        self.running = True
        self.nudge = {Intent.MOVE_LEFT: 0.0, Intent.MOVE_RIGHT: 0.0}
        self.last_frame: Optional[np.ndarray] = None
        self.last_status: str = "Booting..."
        self._loop_thread = threading.Thread(target=self._loop, daemon=True)
        self._loop_thread.start()

    def _loop(self) -> None:
        while self.running:
            dt = self.clock.tick(HEADLESS_FPS) / 1000.0
            pygame.event.pump()
            with self.lock:
                self._release_nudges(dt)
                self.session.advance(dt)
                if not self.session.running:
                    # A browser tab cannot end the server; start over at the menu.
                    logger.info("Exit chosen from the web menu, starting a fresh session")
                    history = self.session.history
                    self.session = GameSession(WIDTH, HEIGHT, seed=self.seed)
                    self.session.history = history
                self.last_frame, self.last_status = self._render_locked()

    def _release_nudges(self, dt: float) -> None:
        for intent, remaining in self.nudge.items():
            if remaining <= 0:
                continue
            remaining -= dt
            self.nudge[intent] = remaining
            if remaining <= 0:
                self.session.set_held(intent, False)

    def _render_locked(self) -> Tuple[np.ndarray, str]:
        snapshot = self.session.snapshot()
        self.renderer.draw(snapshot)
        frame = pygame.surfarray.array3d(self.surface)
        frame = np.transpose(frame, (1, 0, 2))
        return frame, self._status_text()

    def _status_text(self) -> str:
        session = self.session
        best = session.best_run()
        best_text = f"Best {best.score}" if best else "No finished games"
        return (
            f"{session.screen.name.title()} • Score {session.score} • Lives {session.lives}"
            f" • Time {format_time(session.play_time)} • {best_text}"
        )

    def get_frame(self) -> Tuple[np.ndarray, str]:
        with self.lock:
            if self.last_frame is None:
                self.last_frame, self.last_status = self._render_locked()
            return self.last_frame.copy(), self.last_status

    def send(self, intent: Intent) -> None:
        with self.lock:
            if intent in self.nudge:
                self.session.set_held(intent, True)
                self.nudge[intent] = NUDGE_DURATION
            else:
                self.session.handle(intent)
            self.last_frame, self.last_status = self._render_locked()

    def point(self, x: float) -> None:
        with self.lock:
            self.session.set_pointer_x(x)
            self.last_frame, self.last_status = self._render_locked()


host = GameHost()


def refresh_view() -> Tuple[np.ndarray, str]:
    return host.get_frame()


def intent_handler(intent: Intent):
    def handler() -> Tuple[np.ndarray, str]:
        host.send(intent)
        return host.get_frame()

    return handler


def handle_pointer(x: float) -> Tuple[np.ndarray, str]:
    host.point(x)
    return host.get_frame()


with gr.Blocks(title="Brick Breaker (Gradio)") as demo:
    gr.Markdown(
        """
        ### Brick Breaker
        - Move with the slider or the arrow buttons, launch the ball, fire when armed
        - Pause opens a two-option menu: resume or exit to the main menu
        - The view refreshes every 0.2s
        """
    )

    with gr.Row():
        game_image = gr.Image(
            label="Live View",
            type="numpy",
            height=HEIGHT,
            width=WIDTH,
        )
        with gr.Column():
            status_md = gr.Markdown("Loading...")
            pointer = gr.Slider(0, WIDTH, value=WIDTH / 2, step=1, label="Paddle position")
            with gr.Row():
                left_button = gr.Button("◀ Left")
                right_button = gr.Button("Right ▶")
            with gr.Row():
                launch_button = gr.Button("Launch", variant="primary")
                fire_button = gr.Button("Fire")
                pause_button = gr.Button("Pause")
            with gr.Row():
                up_button = gr.Button("▲ Up")
                down_button = gr.Button("▼ Down")
            with gr.Row():
                confirm_button = gr.Button("Confirm", variant="primary")
                cancel_button = gr.Button("Cancel")
                exit_button = gr.Button("Exit", variant="stop")

    outputs = [game_image, status_md]
    demo.load(fn=refresh_view, inputs=None, outputs=outputs)
    timer = gr.Timer(0.2)
    timer.tick(fn=refresh_view, inputs=None, outputs=outputs)

    pointer.change(fn=handle_pointer, inputs=[pointer], outputs=outputs)
    for button, intent in (
        (left_button, Intent.MOVE_LEFT),
        (right_button, Intent.MOVE_RIGHT),
        (launch_button, Intent.LAUNCH),
        (fire_button, Intent.FIRE),
        (pause_button, Intent.PAUSE_TOGGLE),
        (up_button, Intent.NAVIGATE_UP),
        (down_button, Intent.NAVIGATE_DOWN),
        (confirm_button, Intent.CONFIRM),
        (cancel_button, Intent.CANCEL),
        (exit_button, Intent.EXIT),
    ):
        button.click(fn=intent_handler(intent), inputs=None, outputs=outputs)


def main() -> None:
    configure_logging()
    demo.queue().launch(
        server_name="0.0.0.0",
        server_port=int(os.environ.get("PORT", 7860)),
        show_api=False,
    )


if __name__ == "__main__":
    main()
